"""Parse-tree events emitted by the compilation engine."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class OpenTag:
    """Start of a non-terminal element."""

    name: str


@dataclass(frozen=True, slots=True)
class Emit:
    """A terminal: ``kind`` is the element name, ``text`` its content."""

    kind: str
    text: str


@dataclass(frozen=True, slots=True)
class CloseTag:
    """End of a non-terminal element."""

    name: str


Event = OpenTag | Emit | CloseTag


class EventSink(Protocol):
    """Anything events can be appended to (a plain list will do)."""

    def append(self, event: Event, /) -> None: ...


def is_balanced(events: Iterable[Event]) -> bool:
    """Return True if every OpenTag has a matching, properly nested CloseTag."""
    stack: list[str] = []
    for event in events:
        if isinstance(event, OpenTag):
            stack.append(event.name)
        elif isinstance(event, CloseTag):
            if not stack or stack.pop() != event.name:
                return False
    return not stack
