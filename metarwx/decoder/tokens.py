# metarwx/decoder/tokens.py
"""
Tokenizer and read cursor.

A decoder is a pure function of (tokens, position) returning either
(value, new_position) or None. The Cursor is the only thing that holds a
position; one is created per parse call and never shared.
"""

from typing import Any, Callable, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

Tokens = Tuple[str, ...]
Match = Tuple[T, int]
Decoder = Callable[[Sequence[str], int], Optional[Match]]


def tokenize(raw: str) -> Optional[Tokens]:
    """
    Split a report line into tokens.

    Args:
        raw: Raw report text

    Returns:
        Non-empty tuple of tokens, or None for empty / blank input
    """
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    return tuple(cleaned.split())


def token_at(tokens: Sequence[str], position: int) -> Optional[str]:
    """Token at position, or None past the end."""
    if 0 <= position < len(tokens):
        return tokens[position]
    return None


class Cursor:
    """
    Read position over a token sequence.

    Decoders never see the cursor; it feeds them (tokens, position) and
    only moves when a decoder reports a match.
    """

    def __init__(self, tokens: Tokens):
        self.tokens = tokens
        self.position = 0

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.tokens)

    def peek(self) -> Optional[str]:
        return token_at(self.tokens, self.position)

    def apply(self, decoder: Decoder) -> Optional[Any]:
        """
        Run a decoder at the current position.

        Returns the decoded value and advances on a match; returns None and
        stays put otherwise.
        """
        result = decoder(self.tokens, self.position)
        if result is None:
            return None
        value, new_position = result
        if new_position < self.position:
            raise ValueError(
                f"{getattr(decoder, '__name__', decoder)} moved cursor backwards: "
                f"{self.position} -> {new_position}"
            )
        self.position = new_position
        return value

    def remaining(self) -> Tokens:
        return self.tokens[self.position:]
