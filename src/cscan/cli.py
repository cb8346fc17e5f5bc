"""Command-line interface for cscan."""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from cscan.errors import Diagnostic, DiagnosticKind
from cscan.scanner import ScanResult, scan_source
from cscan.tokens import Token, describe, payload_text

logger = logging.getLogger(__name__)

FORMATS = ("text", "json")
DIAGNOSTIC_STREAMS = ("stdout", "stderr")
MALFORMED_NUMBER_MODES = ("drop", "warn")

SAMPLE_SOURCE = """
        int main() {
            int a;
            int b;
            a = b + 1;
            return 0;
        }
    """


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_files: list[Path]
    output_file: Path | None
    format: str
    diagnostics: str
    malformed_numbers: str
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="cscan",
        description="Lexical analyzer for C-like source text",
    )
    p.add_argument(
        "inputs",
        nargs="*",
        metavar="FILE",
        help="Source files to scan ('-' for stdin; default: built-in sample)",
    )
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument("--format", choices=FORMATS, default=None, help="Output format (default: text)")
    p.add_argument(
        "--diagnostics",
        choices=DIAGNOSTIC_STREAMS,
        default=None,
        help="Where diagnostic lines go (default: stdout, interleaved)",
    )
    p.add_argument(
        "--malformed-numbers",
        choices=MALFORMED_NUMBER_MODES,
        default=None,
        help="Drop out-of-range numeric literals silently or also warn (default: drop)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover cscan.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "cscan.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise argparse.ArgumentTypeError(f"invalid config file {path}: {exc}") from exc


def _choice(value: Any, allowed: tuple[str, ...], key: str) -> str:
    if not isinstance(value, str) or value not in allowed:
        raise argparse.ArgumentTypeError(
            f"invalid value for {key}: {value!r} (expected one of {', '.join(allowed)})"
        )
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_files = [Path(p) for p in args.inputs]
    input_dir = Path(".")
    if input_files and str(input_files[0]) != "-" and input_files[0].parent.parts:
        input_dir = input_files[0].parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    cfg_output = config.get("output")
    if not isinstance(cfg_output, dict):
        cfg_output = {}
    cfg_scanner = config.get("scanner")
    if not isinstance(cfg_scanner, dict):
        cfg_scanner = {}

    fmt = "text"
    if "format" in cfg_output:
        fmt = _choice(cfg_output["format"], FORMATS, "output.format")
    if args.format is not None:
        fmt = args.format

    diagnostics = "stdout"
    if "diagnostics" in cfg_output:
        diagnostics = _choice(cfg_output["diagnostics"], DIAGNOSTIC_STREAMS, "output.diagnostics")
    if args.diagnostics is not None:
        diagnostics = args.diagnostics

    malformed = "drop"
    if "malformed_numbers" in cfg_scanner:
        malformed = _choice(
            cfg_scanner["malformed_numbers"], MALFORMED_NUMBER_MODES, "scanner.malformed_numbers"
        )
    if args.malformed_numbers is not None:
        malformed = args.malformed_numbers

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_files=input_files,
        output_file=output_file,
        format=fmt,
        diagnostics=diagnostics,
        malformed_numbers=malformed,
        debug=args.debug,
        verbose=args.verbose,
    )


def read_source(path: Path) -> str:
    """Read a source file as UTF-8; ``-`` reads stdin."""
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _shown(diag: Diagnostic, options: CliOptions) -> bool:
    if diag.kind is DiagnosticKind.MALFORMED_NUMBER:
        return options.malformed_numbers == "warn"
    return True


def _json_value(token: Token) -> str | int | float | None:
    # JSON has no infinity; overflowed floats carry their description text
    if isinstance(token.value, float) and not math.isfinite(token.value):
        return payload_text(token)
    return token.value


def _render_token(token: Token, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(
            {
                "type": token.type.name,
                "value": _json_value(token),
                "raw": token.raw,
                "start": token.span.start,
                "end": token.span.end,
            },
            allow_nan=False,
        )
    return describe(token)


def _render_diagnostic(diag: Diagnostic, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(
            {"diagnostic": diag.kind.name, "message": diag.message, "offset": diag.offset},
            allow_nan=False,
        )
    return diag.format()


def write_result(result: ScanResult, options: CliOptions, out: TextIO, err: TextIO) -> None:
    """Write token lines to *out* and diagnostics, interleaved or to *err*."""
    diag_stream = out if options.diagnostics == "stdout" else err
    for event in result.events():
        if isinstance(event, Token):
            out.write(_render_token(event, options.format) + "\n")
        elif _shown(event, options):
            diag_stream.write(_render_diagnostic(event, options.format) + "\n")


def scan_file(path: Path | None) -> ScanResult:
    """Scan one input file, or the built-in sample when *path* is None."""
    source = SAMPLE_SOURCE if path is None else read_source(path)
    result = scan_source(source)
    logger.debug(
        "scanned %s: %d tokens, %d diagnostics",
        "<sample>" if path is None else path,
        len(result.tokens),
        len(result.diagnostics),
    )
    return result


def run(options: CliOptions, out: TextIO, err: TextIO) -> None:
    """Scan every input in order and write its listing."""
    from cscan.debug import dump_tokens

    paths: list[Path | None] = list(options.input_files) or [None]
    for path in paths:
        result = scan_file(path)
        if options.debug:
            dump_tokens(result, file=err)
        write_result(result, options, out, err)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        if options.output_file:
            with open(options.output_file, "w", encoding="utf-8") as out:
                run(options, out, sys.stderr)
        else:
            run(options, sys.stdout, sys.stderr)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0
