"""Command-line interface for mdpp."""

from __future__ import annotations

import argparse
import logging
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mdpp.errors import CallParseError, CompilationError, ProviderError, SourceReadError

DEFAULT_OUTPUT = "dist.md"
CONFIG_NAME = "mdpp.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path
    max_depth: int | None
    strict_signatures: bool
    watch: bool
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="mdpp",
        description="Expand {{function(args)}} macros in a text document",
    )
    p.add_argument("input", help="Input document")
    p.add_argument(
        "-o",
        "--output",
        help=f"Output file (default: {DEFAULT_OUTPUT} next to the input)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--max-depth",
        metavar="N",
        help="Fail when calls nest deeper than N expansions (default: unlimited)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Check call arguments against declared function signatures",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and recompile")
    p.add_argument("--debug", action="store_true", help="Dump documents to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def parse_depth_arg(value: object) -> int:
    """Parse a positive expansion depth from a CLI string or config value."""
    if isinstance(value, bool):
        raise argparse.ArgumentTypeError(f"invalid depth (expected positive integer): {value}")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(
                f"invalid depth (expected positive integer): {value}"
            ) from None
    if not isinstance(value, int) or value < 1:
        raise argparse.ArgumentTypeError(f"invalid depth (expected positive integer): {value}")
    return value


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Output file: default < config < CLI
    output_file = input_dir / DEFAULT_OUTPUT
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_path = cfg_output.get("path")
        if isinstance(cfg_path, str):
            output_file = input_dir / cfg_path
    if args.output:
        output_file = Path(args.output)

    # Evaluation settings: config < CLI
    max_depth: int | None = None
    strict_signatures = False
    cfg_eval = config.get("eval")
    if isinstance(cfg_eval, dict):
        if "max_depth" in cfg_eval:
            max_depth = parse_depth_arg(cfg_eval["max_depth"])
        cfg_strict = cfg_eval.get("strict_signatures")
        if isinstance(cfg_strict, bool):
            strict_signatures = cfg_strict
    if args.max_depth is not None:
        max_depth = parse_depth_arg(args.max_depth)
    if args.strict is not None:
        strict_signatures = args.strict

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        max_depth=max_depth,
        strict_signatures=strict_signatures,
        watch=args.watch,
        debug=args.debug,
        verbose=args.verbose,
    )


def compile_file(options: CliOptions) -> str:
    """Read, segment, evaluate, and render a document."""
    from mdpp.debug import dump_document
    from mdpp.eval import evaluate
    from mdpp.lexer import segment
    from mdpp.render import render

    try:
        source = options.input_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(options.input_file, str(exc)) from exc

    doc = segment(source, options.input_file)
    if options.debug:
        dump_document(doc, title="Segmented")

    doc = evaluate(
        doc,
        max_depth=options.max_depth,
        strict_signatures=options.strict_signatures,
    )
    if options.debug:
        dump_document(doc, title="Evaluated")

    return render(doc)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recompile on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    text = compile_file(options)
                    options.output_file.write_text(text, encoding="utf-8")
                    print(f"Compiled {options.input_file}", file=sys.stderr)
                except CompilationError as exc:
                    print(exc.format(), file=sys.stderr)
                except RecursionError:
                    # A self-including document; wait for the next edit
                    print(
                        "error: include recursion too deep (try --max-depth)",
                        file=sys.stderr,
                    )
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        text = compile_file(options)
    except (CallParseError, SourceReadError) as exc:
        print(exc.format(), file=sys.stderr)
        return 1
    except ProviderError as exc:
        print(exc.format(), file=sys.stderr)
        return 2

    options.output_file.write_text(text, encoding="utf-8")
    return 0
