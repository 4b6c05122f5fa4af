"""Scanner for ``{{ key }}`` placeholder tokens.

A token starts at the next ``{{`` and ends at the next ``}}`` after it.
Tokens never nest or overlap; an opening marker without a closing one is
ignored. The key is the text between the markers with whitespace and stray
braces trimmed, so ``{{{789}}`` yields key ``789`` and literal ``{{{789}}``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

OPEN_MARKER = "{{"
CLOSE_MARKER = "}}"

_TRIM_CHARS = " \t\r\n{}"


@dataclass(frozen=True)
class PathToken:
    """One placeholder occurrence.

    Attributes:
        key: Placeholder name, trimmed.
        literal: Exact source text of the token, markers included.
        start: Offset of the literal in the scanned text.
    """

    key: str
    literal: str
    start: int


class TokenScan:
    """Lazy, restartable sequence of the tokens in a text.

    Each iteration rescans the text from the beginning.
    """

    def __init__(self, text: str) -> None:
        self.text = text

    def __iter__(self) -> Iterator[PathToken]:
        text = self.text
        position = 0
        while True:
            start = text.find(OPEN_MARKER, position)
            if start == -1:
                return
            close = text.find(CLOSE_MARKER, start + len(OPEN_MARKER))
            if close == -1:
                return
            end = close + len(CLOSE_MARKER)
            literal = text[start:end]
            key = literal.strip(_TRIM_CHARS)
            yield PathToken(key=key, literal=literal, start=start)
            position = end

    def keys(self) -> list[str]:
        return [token.key for token in self]

    def literals(self) -> list[str]:
        return [token.literal for token in self]


def find_tokens(text: str) -> TokenScan:
    """Return the tokens of text in left-to-right order.

    Example:
        >>> find_tokens("{{123}}{{ 456 }}{{{789}}").keys()
        ['123', '456', '789']
    """
    return TokenScan(text)
