"""Shared test fixtures and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from jackanalyzer.analyzer import parse_events
from jackanalyzer.events import CloseTag, Emit, Event, OpenTag
from jackanalyzer.lexer import tokenize
from jackanalyzer.tokens import Token, TokenType


@dataclass
class Node:
    """Materialized element, built from events for assertions only."""

    name: str
    children: list[Node | Emit] = field(default_factory=list)

    def elements(self, name: str | None = None) -> list[Node]:
        """Direct child elements, optionally filtered by name."""
        return [c for c in self.children if isinstance(c, Node) and (name is None or c.name == name)]

    def terminals(self) -> list[tuple[str, str]]:
        """Direct terminal children as (kind, text) pairs."""
        return [(c.kind, c.text) for c in self.children if isinstance(c, Emit)]

    def find_all(self, name: str) -> list[Node]:
        """All descendant elements named *name*, in document order."""
        found: list[Node] = []
        for child in self.children:
            if isinstance(child, Node):
                if child.name == name:
                    found.append(child)
                found.extend(child.find_all(name))
        return found

    def text(self) -> str:
        """Concatenated terminal text of the whole subtree, space separated."""
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Node):
                parts.append(child.text())
            else:
                parts.append(child.text)
        return " ".join(p for p in parts if p)


def build_tree(events: list[Event]) -> Node:
    """Fold a balanced event list into a Node tree rooted at its first element."""
    stack: list[Node] = [Node("#root")]
    for event in events:
        if isinstance(event, OpenTag):
            node = Node(event.name)
            stack[-1].children.append(node)
            stack.append(node)
        elif isinstance(event, CloseTag):
            node = stack.pop()
            assert node.name == event.name, f"close {event.name} does not match open {node.name}"
        else:
            stack[-1].children.append(event)
    assert len(stack) == 1, "unclosed elements"
    (root,) = stack[0].elements()
    return root


def wrap_statements(body: str) -> str:
    """Embed statements in a minimal class so they can be parsed."""
    return f"class Main {{ function void main() {{ {body} }} }}"


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns the token list."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def parse_tree():
    """Return a helper that parses a class and returns its Node tree."""

    def _parse(source: str) -> Node:
        return build_tree(parse_events(source, "Test.jack"))

    return _parse


@pytest.fixture
def parse_statements(parse_tree):
    """Return a helper that parses statements inside a function and returns the statements node."""

    def _parse(body: str) -> Node:
        tree = parse_tree(wrap_statements(body))
        return tree.find_all("subroutineBody")[0].elements("statements")[0]

    return _parse


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[object]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
