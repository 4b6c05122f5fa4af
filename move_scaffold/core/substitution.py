"""Flat key -> literal substitution over ``{{ key }}`` tokens.

Used for both file contents and destination paths. There are no
conditionals or loops: a token either names a context key and is replaced,
or it is left exactly as written.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from move_scaffold.core.path_token import find_tokens

# Sentinel substituted for the default address when no profile exists.
SENTINEL_ADDRESS = "_"

SubstitutionContext = Mapping[str, str]


def substitute(text: str, context: SubstitutionContext) -> str:
    """Replace every mapped token in text.

    Each mapped token's literal is replaced everywhere it occurs, so repeated
    identical tokens are all rewritten. Text without mapped tokens is
    returned as the same object.

    Example:
        >>> substitute("a{{x}}b{{x}}c", {"x": "Y"})
        'aYbYc'
    """
    result = text
    for token in find_tokens(text):
        value = context.get(token.key)
        if value is None:
            continue
        result = result.replace(token.literal, value)
    return result


def build_substitution_context(
    package_name: str,
    package_lowercase_name: str,
    address: str | None,
    extra: Mapping[str, str] | None = None,
) -> SubstitutionContext:
    """Build the immutable context for one scaffold run.

    Args:
        package_name: Package name as supplied or derived.
        package_lowercase_name: snake_case form of the package name.
        address: Profile address, or None to use the sentinel.
        extra: Additional keys appended after the standard ones.

    Returns:
        Read-only mapping in insertion order.
    """
    resolved_address = address or SENTINEL_ADDRESS
    values: dict[str, str] = {
        "package_name": package_name,
        "package_lowercase_name": package_lowercase_name,
        "default_address": resolved_address,
        "address": resolved_address,
    }
    for key, value in (extra or {}).items():
        values.setdefault(key, value)
    return MappingProxyType(values)
