"""Name transforms shared by the mapper and the renderer."""

# Python reserved keywords that cannot be used as identifiers
PYTHON_KEYWORDS = {
    'False', 'None', 'True', 'and', 'as', 'assert', 'async', 'await',
    'break', 'class', 'continue', 'def', 'del', 'elif', 'else', 'except',
    'finally', 'for', 'from', 'global', 'if', 'import', 'in', 'is',
    'lambda', 'nonlocal', 'not', 'or', 'pass', 'raise', 'return', 'try',
    'while', 'with', 'yield'
}


def to_class_name(name: str) -> str:
    """Convert a GraphQL type name to a class name by uppercasing its first character."""
    return name[:1].upper() + name[1:]


def safe_identifier(name: str) -> str:
    """Make a name safe for Python by suffixing keywords with underscore."""
    if name in PYTHON_KEYWORDS:
        return f"{name}_"
    return name


def safe_enum_member(name: str) -> str:
    """Make a name usable as an ``Enum`` member.

    ``mro`` and ``_sunder_`` names are reserved by ``enum``; they get the same
    underscore suffix as keywords.
    """
    if name == "mro" or (len(name) > 2 and name[0] == name[-1] == "_" and name[1] != "_" and name[-2] != "_"):
        return f"{name}_"
    return safe_identifier(name)
