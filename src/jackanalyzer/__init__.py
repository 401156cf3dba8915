"""Jack syntax analyzer."""

from __future__ import annotations

__version__ = "0.1.0"


def analyze(source: str, filename: str = "input.jack") -> str:
    """Tokenize and parse one Jack class, returning its XML parse tree."""
    from jackanalyzer.analyzer import analyze as _analyze

    return _analyze(source, filename)
