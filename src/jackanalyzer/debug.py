"""--debug token and event dumps to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from jackanalyzer.events import CloseTag, Emit, Event, OpenTag
from jackanalyzer.tokens import Token


def dump_tokens(tokens: Iterable[Token], *, file: TextIO | None = None) -> None:
    """Print one line per token: position, kind and text."""
    if file is None:
        file = sys.stderr
    for tok in tokens:
        pos = tok.span.start
        file.write(f"{pos.line}:{pos.column}\t{tok.kind}\t{tok.text!r}\n")


def dump_events(events: Iterable[Event], *, file: TextIO | None = None) -> None:
    """Print a human-readable tree of parse events to *file* (default stderr)."""
    if file is None:
        file = sys.stderr
    depth = 0
    for event in events:
        if isinstance(event, OpenTag):
            file.write(f"{_indent(depth)}{event.name}\n")
            depth += 1
        elif isinstance(event, CloseTag):
            depth -= 1
        elif isinstance(event, Emit):
            file.write(f"{_indent(depth)}{event.kind} {event.text!r}\n")


def _indent(depth: int) -> str:
    return "  " * depth
