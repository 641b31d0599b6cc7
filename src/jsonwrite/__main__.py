"""CLI entry-point for jsonwrite.

Usage:
    python -m jsonwrite render <script> [--mode compact|normal|pretty] [--indent N] [--size N] [-v]
    python -m jsonwrite validate <script>
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

import jsonschema
import yaml

from jsonwrite import __version__
from jsonwrite.core.errors import ContractViolationError, OutOfSpaceError
from jsonwrite.model import FormatMode
from jsonwrite.replay import Script, load_script, run_script
from jsonwrite.utils.exit_codes import ExitCode


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="jsonwrite",
        description="Replay operation scripts through the bounded-buffer JSON writer.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = p.add_subparsers(dest="command")

    # ── render subcommand ───────────────────────────────────────────
    render_p = sub.add_parser(
        "render",
        help="Replay a script and print the resulting document.",
    )
    render_p.add_argument("script", type=Path, help="YAML or JSON operation script.")
    render_p.add_argument(
        "--mode",
        choices=[m.value for m in FormatMode],
        default=None,
        help="Override the script's formatting mode.",
    )
    render_p.add_argument(
        "--indent",
        dest="indent_unit",
        type=int,
        default=None,
        help="Override the indent unit (pretty mode).",
    )
    render_p.add_argument(
        "--size",
        type=int,
        default=None,
        help="Override the buffer size in bytes.",
    )
    render_p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log writer activity to stderr.",
    )

    # ── validate subcommand ─────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Check a script against the operation script schema.",
    )
    val_p.add_argument("script", type=Path, help="YAML or JSON operation script.")

    return p


def _load(path: Path) -> Script | int:
    """Load *path*, mapping failures to an exit code."""
    try:
        return load_script(path)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {path}: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, yaml.YAMLError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR


def _handle_render(args: argparse.Namespace) -> int:
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    script = _load(args.script)
    if isinstance(script, int):
        return script

    overrides = {}
    if args.mode is not None:
        overrides["mode"] = FormatMode(args.mode)
    if args.indent_unit is not None:
        overrides["indent_unit"] = args.indent_unit
    try:
        config = dataclasses.replace(script.config, **overrides)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    size = args.size if args.size is not None else script.size
    if size < 1:
        print(f"ERROR: --size must be >= 1, got {size}", file=sys.stderr)
        return ExitCode.ERROR
    script = dataclasses.replace(script, config=config, size=size)

    try:
        document = run_script(script)
    except OutOfSpaceError as e:
        print(f"ERROR: {e} (buffer size {size})", file=sys.stderr)
        return ExitCode.ERROR
    except ContractViolationError as e:
        print(f"FAIL: {e}", file=sys.stderr)
        return ExitCode.VIOLATION

    print(document.decode("utf-8", errors="replace"))
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    script = _load(args.script)
    if isinstance(script, int):
        return script
    print("OK")
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (see ``ExitCode``)."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "render":
        return _handle_render(args)
    if args.command == "validate":
        return _handle_validate(args)

    parser.print_help(sys.stderr)
    return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
