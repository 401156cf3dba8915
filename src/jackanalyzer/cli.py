"""Command-line interface for the Jack syntax analyzer."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jackanalyzer.analyzer import AnalyzerOptions, analyze_file, find_sources
from jackanalyzer.errors import AnalyzerError
from jackanalyzer.lexer import MAX_TOKENS

CONFIG_NAME = "jackanalyzer.toml"


class ConfigError(Exception):
    """Raised when a config file holds a value of the wrong type."""


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    source: Path
    analyzer: AnalyzerOptions
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="jackanalyzer",
        description="Jack syntax analyzer: writes an XML parse tree per .jack file",
    )
    p.add_argument("source", help="A .jack file or a directory of .jack files")
    p.add_argument(
        "-o",
        "--output-dir",
        metavar="DIR",
        help="Directory for output files (default: beside each input)",
    )
    p.add_argument(
        "--tokens",
        action="store_true",
        default=None,
        help="Also write the flat token listing (FooT.xml)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--max-tokens",
        type=int,
        default=None,
        metavar="N",
        help=f"Token ceiling per source file (default: {MAX_TOKENS})",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens and parse events to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Report each file written")
    return p


def load_config(config_path: Path | None, source_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else source_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _table(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: built-in defaults < config file < CLI flags.
    """
    source = Path(args.source)
    source_dir = source if source.is_dir() else source.parent
    if not source_dir.parts:
        source_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, source_dir)
    cfg_analyzer = _table(config, "analyzer")
    cfg_output = _table(config, "output")

    max_tokens = MAX_TOKENS
    cfg_max = cfg_analyzer.get("max_tokens")
    if cfg_max is not None:
        if not isinstance(cfg_max, int) or isinstance(cfg_max, bool) or cfg_max <= 0:
            raise ConfigError("analyzer.max_tokens must be a positive integer")
        max_tokens = cfg_max
    if args.max_tokens is not None:
        if args.max_tokens <= 0:
            raise ConfigError("--max-tokens must be a positive integer")
        max_tokens = args.max_tokens

    write_tokens = False
    cfg_tokens = cfg_analyzer.get("tokens")
    if cfg_tokens is not None:
        if not isinstance(cfg_tokens, bool):
            raise ConfigError("analyzer.tokens must be true or false")
        write_tokens = cfg_tokens
    if args.tokens is not None:
        write_tokens = args.tokens

    extension = str(cfg_output.get("extension", "xml")).lstrip(".")
    token_suffix = str(cfg_output.get("token_suffix", "T"))

    output_dir = Path(args.output_dir) if args.output_dir else None

    return CliOptions(
        source=source,
        analyzer=AnalyzerOptions(
            output_dir=output_dir,
            extension=extension,
            token_suffix=token_suffix,
            write_tokens=write_tokens,
            max_tokens=max_tokens,
        ),
        debug=args.debug,
        verbose=args.verbose,
    )


def debug_dump(path: Path, options: CliOptions) -> None:
    """Write the token stream and event tree of *path* to stderr."""
    from jackanalyzer.analyzer import parse_events
    from jackanalyzer.debug import dump_events, dump_tokens
    from jackanalyzer.lexer import Tokenizer

    source = path.read_text(encoding="utf-8")
    max_tokens = options.analyzer.max_tokens
    print(f"== {path}", file=sys.stderr)
    dump_tokens(Tokenizer(source, str(path), max_tokens=max_tokens))
    dump_events(parse_events(source, str(path), max_tokens=max_tokens))


def run(options: CliOptions) -> int:
    """Analyze every discovered source file; return 1 if any failed, else 0."""
    failed = 0
    for path in find_sources(options.source):
        try:
            if options.debug:
                debug_dump(path, options)
            written = analyze_file(path, options.analyzer)
        except AnalyzerError as exc:
            print(exc.format(), file=sys.stderr)
            failed += 1
            continue
        except UnicodeDecodeError as exc:
            print(
                f"error: {path} is not valid UTF-8 ({exc.reason} at byte {exc.start})",
                file=sys.stderr,
            )
            failed += 1
            continue
        if options.verbose:
            for target in written:
                print(f"Wrote {target}", file=sys.stderr)
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (ConfigError, tomllib.TOMLDecodeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        return run(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
