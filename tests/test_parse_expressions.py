"""Tests for expressions, terms and the identifier lookahead."""

from __future__ import annotations

import pytest


def _value_expression(parse_statements, expr: str):
    stmts = parse_statements(f"let v = {expr};")
    (let,) = stmts.elements("letStatement")
    return let.elements("expression")[-1]


class TestOperators:
    @pytest.mark.parametrize("op", list("+-*/&|<>="))
    def test_each_binary_operator(self, parse_statements, op):
        expr = _value_expression(parse_statements, f"a {op} b")
        assert expr.terminals() == [("symbol", op)]
        assert len(expr.elements("term")) == 2

    def test_flat_left_to_right_chain(self, parse_statements):
        expr = _value_expression(parse_statements, "1 + 2 * 3 - 4")
        assert [c.name if hasattr(c, "name") else c.text for c in expr.children] == [
            "term",
            "+",
            "term",
            "*",
            "term",
            "-",
            "term",
        ]


class TestTerms:
    def test_integer_constant(self, parse_statements):
        expr = _value_expression(parse_statements, "42")
        (term,) = expr.elements("term")
        assert term.terminals() == [("integerConstant", "42")]

    def test_string_constant(self, parse_statements):
        expr = _value_expression(parse_statements, '"hello world"')
        (term,) = expr.elements("term")
        assert term.terminals() == [("stringConstant", "hello world")]

    @pytest.mark.parametrize("kw", ["true", "false", "null", "this"])
    def test_keyword_constants(self, parse_statements, kw):
        expr = _value_expression(parse_statements, kw)
        (term,) = expr.elements("term")
        assert term.terminals() == [("keyword", kw)]

    def test_parenthesized(self, parse_statements):
        expr = _value_expression(parse_statements, "(a + b) * c")
        first = expr.elements("term")[0]
        assert first.terminals() == [("symbol", "("), ("symbol", ")")]
        (inner,) = first.elements("expression")
        assert inner.text() == "a + b"

    @pytest.mark.parametrize("op", ["-", "~"])
    def test_unary(self, parse_statements, op):
        expr = _value_expression(parse_statements, f"{op}x")
        (term,) = expr.elements("term")
        assert term.terminals() == [("symbol", op)]
        (operand,) = term.elements("term")
        assert operand.terminals() == [("identifier", "x")]

    def test_nested_unary(self, parse_statements):
        expr = _value_expression(parse_statements, "-~x")
        assert len(expr.find_all("term")) == 3


class TestIdentifierLookahead:
    def test_plain_variable(self, parse_statements):
        expr = _value_expression(parse_statements, "count")
        (term,) = expr.elements("term")
        assert term.terminals() == [("identifier", "count")]
        assert term.elements() == []

    def test_array_element(self, parse_statements):
        expr = _value_expression(parse_statements, "a[i + 1]")
        (term,) = expr.elements("term")
        assert term.terminals() == [
            ("identifier", "a"),
            ("symbol", "["),
            ("symbol", "]"),
        ]
        (index,) = term.elements("expression")
        assert index.text() == "i + 1"

    def test_unqualified_call(self, parse_statements):
        expr = _value_expression(parse_statements, "size()")
        (term,) = expr.elements("term")
        assert term.terminals() == [
            ("identifier", "size"),
            ("symbol", "("),
            ("symbol", ")"),
        ]
        assert [e.name for e in term.elements()] == ["expressionList"]

    def test_qualified_call(self, parse_statements):
        expr = _value_expression(parse_statements, "Math.max(a, b)")
        (term,) = expr.elements("term")
        assert [t for _, t in term.terminals()] == ["Math", ".", "max", "(", ")"]

    def test_identifier_not_duplicated(self, parse_statements):
        expr = _value_expression(parse_statements, "a + b.c() + d[0] + e()")
        names = [t for kind, t in _all_terminals(expr) if kind == "identifier"]
        assert names == ["a", "b", "c", "d", "e"]

    def test_call_inside_index(self, parse_statements):
        expr = _value_expression(parse_statements, "a[f(b[1])]")
        names = [t for kind, t in _all_terminals(expr) if kind == "identifier"]
        assert names == ["a", "f", "b"]


def _all_terminals(node):
    out = []
    for child in node.children:
        if hasattr(child, "children"):
            out.extend(_all_terminals(child))
        else:
            out.append((child.kind, child.text))
    return out
