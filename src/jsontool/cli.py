"""jsontool.cli
==============

Command-line interface for validating, formatting and minifying JSON and for
inspecting the operation log.

Example::

    $ python -m jsontool.cli format data.json -o pretty.json --indent 4
    $ cat data.json | python -m jsontool.cli minify
    $ python -m jsontool.cli stats --json

When no input file is given the document is read from **STDIN**; results go
to **STDOUT** unless ``-o`` is used.  Every transform is recorded in the
operation log under ``--log-dir`` (or the configured directory).
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict, fields
from pathlib import Path
from typing import Optional

import tomlkit

from .config import JsonToolConfig
from .core import format_async, minify_async, validate_async
from .diagnostics import compute_metrics, extract_error_context, format_bytes
from .exceptions import FileAccessError, StorageError
from .fileio import read_json_file, write_json_file
from .oplog import OperationLogger
from .results import FormattingOptions

__all__ = ["main", "run"]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fail(message: str) -> None:
    print(f"jsontool: {message}", file=sys.stderr)
    sys.exit(1)


def _load_config_from_toml(path: Path) -> JsonToolConfig:
    """Return a :class:`JsonToolConfig` initialised from *path* (TOML)."""
    cfg = JsonToolConfig()
    toml_data = tomlkit.parse(path.read_text(encoding="utf-8")).unwrap()

    # Only apply keys that actually exist on JsonToolConfig to avoid surprises.
    valid_fields = {f.name for f in fields(cfg)}
    for key, val in toml_data.items():
        if key in valid_fields:
            setattr(cfg, key, val)
    cfg.log_dir = Path(cfg.log_dir).expanduser()
    return cfg


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jsontool", description="JSON validator and formatter")
    parser.add_argument(
        "--config",
        metavar="TOML",
        help="Path to configuration TOML. Uses built-in defaults when omitted.",
    )
    parser.add_argument("--log-dir", help="Directory for the operation log.")
    parser.add_argument(
        "--no-log",
        action="store_true",
        help="Do not record this invocation in the operation log.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug output.")

    sub = parser.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Check that a document is valid JSON.")
    p_validate.add_argument("input", nargs="?", help="Input .json file. Reads STDIN when omitted.")
    p_validate.add_argument("--metrics", action="store_true", help="Print payload metrics.")

    p_format = sub.add_parser("format", help="Pretty-print a document.")
    p_format.add_argument("input", nargs="?", help="Input .json file. Reads STDIN when omitted.")
    p_format.add_argument("-o", "--output", help="Output .json file. Writes STDOUT when omitted.")
    p_format.add_argument("--indent", type=int, help="Indent width, 2 or 4.")
    p_format.add_argument(
        "--no-trailing-newline",
        action="store_true",
        help="Do not end the output with a newline.",
    )

    p_minify = sub.add_parser("minify", help="Remove insignificant whitespace.")
    p_minify.add_argument("input", nargs="?", help="Input .json file. Reads STDIN when omitted.")
    p_minify.add_argument("-o", "--output", help="Output .json file. Writes STDOUT when omitted.")

    p_logs = sub.add_parser("logs", help="Show recent operation log records, newest first.")
    p_logs.add_argument("--limit", type=int, help="Maximum number of records.")
    p_logs.add_argument("--json", action="store_true", help="Emit records as JSON.")

    p_stats = sub.add_parser("stats", help="Show aggregate statistics of the operation log.")
    p_stats.add_argument("--json", action="store_true", help="Emit statistics as JSON.")

    sub.add_parser("clear-logs", help="Delete the active operation log.")
    return parser


def _read_input(path: Optional[str]) -> str:
    if not path:
        return sys.stdin.read()
    try:
        return read_json_file(path).content
    except FileAccessError as exc:
        _fail(str(exc))


def _write_output(path: Optional[str], text: str) -> None:
    if not path:
        print(text, end="")
        return
    try:
        written = write_json_file(path, text)
    except FileAccessError as exc:
        _fail(f"cannot write output - {exc}")
    logger.debug("Wrote %s", written)


def _open_oplog(cfg: JsonToolConfig, enabled: bool) -> Optional[OperationLogger]:
    try:
        return OperationLogger(cfg.log_dir, enabled=enabled)
    except StorageError as exc:
        logger.warning("Operation log unavailable: %s", exc)
        return None


# ---------------------------------------------------------------------------
# Sub-commands
# ---------------------------------------------------------------------------

async def _cmd_validate(args: argparse.Namespace, cfg: JsonToolConfig, oplog) -> None:
    raw = _read_input(args.input)
    outcome = await validate_async(raw, oplog)

    if not outcome.ok:
        print(f"jsontool: {outcome.message}", file=sys.stderr)
        context = extract_error_context(raw, outcome.line, outcome.column)
        if context is not None:
            for text in context.before_lines:
                print(f"    {text}", file=sys.stderr)
            print(f"  > {context.error_line}", file=sys.stderr)
            if outcome.column:
                print(f"    {' ' * (outcome.column - 1)}^", file=sys.stderr)
            for text in context.after_lines:
                print(f"    {text}", file=sys.stderr)
            if context.suggestion:
                print(f"hint: {context.suggestion}", file=sys.stderr)
        sys.exit(1)

    print(f"Valid JSON ({format_bytes(outcome.input_size_bytes)})")
    if args.metrics:
        metrics = compute_metrics(raw)
        for key, value in asdict(metrics).items():
            print(f"  {key}: {value}")


async def _cmd_format(args: argparse.Namespace, cfg: JsonToolConfig, oplog) -> None:
    raw = _read_input(args.input)
    options = FormattingOptions(
        indent=args.indent if args.indent is not None else cfg.indent,
        trailing_newline=cfg.trailing_newline and not args.no_trailing_newline,
    )
    outcome = await format_async(raw, options, oplog)
    if not outcome.ok:
        _fail(outcome.message)
    _write_output(args.output, outcome.formatted)


async def _cmd_minify(args: argparse.Namespace, cfg: JsonToolConfig, oplog) -> None:
    raw = _read_input(args.input)
    outcome = await minify_async(raw, oplog)
    if not outcome.ok:
        _fail(outcome.message)
    _write_output(args.output, outcome.formatted)


def _cmd_logs(args: argparse.Namespace, cfg: JsonToolConfig, oplog: OperationLogger) -> None:
    limit = args.limit if args.limit is not None else cfg.recent_log_limit
    records = oplog.read_logs(limit)
    if args.json:
        print(json.dumps([r.to_dict() for r in records], indent=2))
        return
    for record in records:
        line = (
            f"{record.to_dict()['timestamp']}  {record.operation.value:<8} "
            f"{record.result.value:<7} {format_bytes(record.input_size):>10} "
            f"{record.processing_time_ms:>6} ms"
        )
        if record.error_message:
            line += f"  {record.error_message}"
        print(line)


def _cmd_stats(args: argparse.Namespace, cfg: JsonToolConfig, oplog: OperationLogger) -> None:
    stats = oplog.get_statistics().to_dict()
    if args.json:
        print(json.dumps(stats, indent=2))
        return
    for key, value in stats.items():
        if isinstance(value, float):
            value = f"{value:.2f}"
        print(f"{key}: {value}")


def _cmd_clear_logs(args: argparse.Namespace, cfg: JsonToolConfig, oplog: OperationLogger) -> None:
    oplog.clear_logs()
    print(f"Cleared {oplog.log_path}")


_TRANSFORMS = {
    "validate": _cmd_validate,
    "format": _cmd_format,
    "minify": _cmd_minify,
}

_LOG_COMMANDS = {
    "logs": _cmd_logs,
    "stats": _cmd_stats,
    "clear-logs": _cmd_clear_logs,
}


# ---------------------------------------------------------------------------
# Async entry-point
# ---------------------------------------------------------------------------

async def main(argv: list[str] | None = None) -> None:  # noqa: D401 - imperative mood
    """Parse *argv* and run the requested command.

    When *argv* is **None** ``sys.argv[1:]`` is used.
    """
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.config:
            cfg = _load_config_from_toml(Path(args.config))
        else:
            cfg = JsonToolConfig()
    except Exception as exc:
        _fail(f"failed to load config - {exc}")
    if args.log_dir:
        cfg.log_dir = Path(args.log_dir)

    if args.command in _TRANSFORMS:
        oplog = _open_oplog(cfg, enabled=cfg.logging_enabled and not args.no_log)
        await _TRANSFORMS[args.command](args, cfg, oplog)
        return

    try:
        oplog = OperationLogger(cfg.log_dir)
        _LOG_COMMANDS[args.command](args, cfg, oplog)
    except StorageError as exc:
        _fail(str(exc))


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())


# ---------------------------------------------------------------------------
# Module entry-point
# ---------------------------------------------------------------------------

if __name__ == "__main__":  # pragma: no cover - manual invocation only
    run()
