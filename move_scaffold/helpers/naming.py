"""Case conversions for package and address names."""

import re

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+")


def split_words(text: str) -> list[str]:
    """Split text on separators and case boundaries.

    Example:
        >>> split_words("my-package_v2 Demo")
        ['my', 'package', 'v2', 'Demo']
    """
    return _WORD_RE.findall(text)


def to_upper_camel(text: str) -> str:
    """Convert to UpperCamelCase ("my_package" -> "MyPackage")."""
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(text))


def to_snake(text: str) -> str:
    """Convert to snake_case ("MyPackage" -> "my_package")."""
    return "_".join(word.lower() for word in split_words(text))


# Package names and named addresses end up in file names and Move.toml keys
_MOVE_IDENTIFIER_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]*")


def is_move_identifier(text: str) -> bool:
    """Return True if text is a plain Move identifier ("Demo_2", not "a b")."""
    return _MOVE_IDENTIFIER_RE.fullmatch(text) is not None
