from isnad_resolver.names.decomposer import NameComponents, decompose_name

__all__ = ["NameComponents", "decompose_name"]
