"""Batch driver: discover .jack sources and write one XML artifact per unit."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jackanalyzer.engine import compile
from jackanalyzer.events import Event
from jackanalyzer.lexer import MAX_TOKENS, Tokenizer
from jackanalyzer.render import render, render_tokens

SOURCE_EXTENSION = ".jack"


@dataclass(frozen=True, slots=True)
class AnalyzerOptions:
    """Where and how artifacts are written."""

    output_dir: Path | None = None
    extension: str = "xml"
    token_suffix: str = "T"
    write_tokens: bool = False
    max_tokens: int = MAX_TOKENS


def find_sources(path: Path) -> list[Path]:
    """Return *path* itself for a file, or the direct .jack children of a directory."""
    if path.is_dir():
        return sorted(
            child
            for child in path.iterdir()
            if child.is_file() and child.suffix == SOURCE_EXTENSION
        )
    if path.is_file():
        return [path]
    raise FileNotFoundError(f"no such file or directory: {path}")


def parse_events(
    source: str, filename: str = "input.jack", *, max_tokens: int = MAX_TOKENS
) -> list[Event]:
    """Tokenize and parse one unit, returning its tree events."""
    events: list[Event] = []
    compile(Tokenizer(source, filename, max_tokens=max_tokens), events)
    return events


def analyze(source: str, filename: str = "input.jack", *, max_tokens: int = MAX_TOKENS) -> str:
    """Tokenize, parse and render one unit to XML."""
    return render(parse_events(source, filename, max_tokens=max_tokens))


def analyze_tokens(
    source: str, filename: str = "input.jack", *, max_tokens: int = MAX_TOKENS
) -> str:
    """Tokenize one unit and render the flat token listing."""
    return render_tokens(Tokenizer(source, filename, max_tokens=max_tokens))


def output_path(path: Path, options: AnalyzerOptions, suffix: str = "") -> Path:
    """Artifact path for *path*: same stem (plus *suffix*), extension replaced."""
    directory = options.output_dir if options.output_dir is not None else path.parent
    return directory / f"{path.stem}{suffix}.{options.extension}"


def analyze_file(path: Path, options: AnalyzerOptions | None = None) -> list[Path]:
    """Analyze one source file and write its artifacts, returning the written paths.

    Every artifact is rendered before any file is written, so a unit that
    fails to tokenize or parse leaves nothing behind.
    """
    if options is None:
        options = AnalyzerOptions()

    source = path.read_text(encoding="utf-8")
    outputs: list[tuple[Path, str]] = []

    if options.write_tokens:
        outputs.append(
            (
                output_path(path, options, options.token_suffix),
                analyze_tokens(source, str(path), max_tokens=options.max_tokens),
            )
        )
    outputs.append(
        (output_path(path, options), analyze(source, str(path), max_tokens=options.max_tokens))
    )

    if options.output_dir is not None:
        options.output_dir.mkdir(parents=True, exist_ok=True)
    for target, text in outputs:
        target.write_text(text, encoding="utf-8")
    return [target for target, _ in outputs]
