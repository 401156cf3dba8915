"""XML renderer: turns tree events or a token list into the analyzer's markup."""

from __future__ import annotations

from collections.abc import Iterable

from jackanalyzer.events import CloseTag, Emit, Event, OpenTag
from jackanalyzer.tokens import Token


def render(events: Iterable[Event]) -> str:
    """Render a balanced event sequence as indented XML."""
    parts: list[str] = []
    depth = 0

    for event in events:
        if isinstance(event, OpenTag):
            parts.append(f"{_indent(depth)}<{event.name}>\n")
            depth += 1
        elif isinstance(event, CloseTag):
            depth -= 1
            if depth < 0:
                raise ValueError(f"unbalanced close tag </{event.name}>")
            parts.append(f"{_indent(depth)}</{event.name}>\n")
        elif isinstance(event, Emit):
            parts.append(_terminal(depth, event.kind, event.text))

    if depth != 0:
        raise ValueError(f"{depth} unclosed element(s) in event stream")
    return "".join(parts)


def render_tokens(tokens: Iterable[Token]) -> str:
    """Render a flat ``<tokens>`` listing, one terminal per line."""
    parts: list[str] = ["<tokens>\n"]
    for tok in tokens:
        parts.append(_terminal(0, tok.kind, tok.text))
    parts.append("</tokens>\n")
    return "".join(parts)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _indent(depth: int) -> str:
    return "  " * depth


def _terminal(depth: int, kind: str, text: str) -> str:
    return f"{_indent(depth)}<{kind}> {_escape_xml(text)} </{kind}>\n"


def _escape_xml(text: str) -> str:
    """Escape text for XML element content."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ch == '"':
            result.append("&quot;")
        else:
            result.append(ch)
    return "".join(result)
