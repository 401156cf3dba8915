"""Bounded lookahead window over a token iterator."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from jackanalyzer.tokens import Token


class TokenStream:
    """Pre-fetch queue in front of a tokenizer.

    ``peek(n)`` inspects the token *n* places ahead without consuming it;
    ``advance()`` consumes the front token. Tokens are pulled from the
    underlying iterator only as deep as the furthest peek.
    """

    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._window: deque[Token] = deque()
        self._exhausted = False

    def _fill(self, depth: int) -> bool:
        while len(self._window) <= depth and not self._exhausted:
            tok = next(self._tokens, None)
            if tok is None:
                self._exhausted = True
            else:
                self._window.append(tok)
        return len(self._window) > depth

    def peek(self, depth: int = 0) -> Token | None:
        """Token *depth* places ahead, or None past the end of the stream."""
        if self._fill(depth):
            return self._window[depth]
        return None

    def advance(self) -> Token | None:
        """Consume and return the front token, or None at end of stream."""
        if self._fill(0):
            return self._window.popleft()
        return None

    def at_end(self) -> bool:
        return not self._fill(0)
