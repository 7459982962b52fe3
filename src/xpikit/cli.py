"""Command-line interface: ``xpikit inspect`` and ``xpikit build``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from xpikit import __version__
from xpikit.config import XpikitConfig, load_config
from xpikit.core.result import Err
from xpikit.core.types import ExtInfo
from xpikit.log import configure_logging
from xpikit.pack.builder import build_package
from xpikit.pack.ignore import build_ignore_matcher
from xpikit.pack.inspector import inspect
from xpikit.pack.manifest import derive_identifier

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xpikit",
        description="Read browser extension identity and build .xpi packages.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log output (-v info, -vv debug)")
    parser.add_argument("--config", type=Path, default=None, help="Directory to load xpikit.toml / pyproject.toml from")
    sub = parser.add_subparsers(dest="command", required=True)

    p_inspect = sub.add_parser("inspect", help="Show the identity of an extension directory or .xpi file")
    p_inspect.add_argument("path", type=Path)
    p_inspect.add_argument("--format", choices=("json", "yaml"), default="json")

    p_build = sub.add_parser("build", help="Package an extension directory as <id>.xpi")
    p_build.add_argument("source", type=Path)
    p_build.add_argument("-o", "--output-dir", type=Path, default=None)
    p_build.add_argument("--ignore", action="append", default=[], metavar="PATTERN", help="Glob pattern to leave out (repeatable)")
    p_build.add_argument("--compress-level", type=int, choices=range(10), default=None, metavar="N")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(_log_level(cfg, args.verbose))

    if args.command == "inspect":
        return _run_inspect(args.path, fmt=args.format)
    return _run_build(args, cfg)


def _run_inspect(path: Path, *, fmt: str) -> int:
    result = inspect(path)
    if isinstance(result, Err):
        print(f"error: {result.error}", file=sys.stderr)
        return EXIT_FAILURE
    print(render_ext_info(result.value, fmt=fmt), end="")
    return EXIT_OK


def _run_build(args: argparse.Namespace, cfg: XpikitConfig) -> int:
    output_dir = args.output_dir if args.output_dir is not None else cfg.output_dir
    compress_level = args.compress_level if args.compress_level is not None else cfg.compress_level
    ignore = [*cfg.ignore, *args.ignore]
    try:
        build_ignore_matcher(ignore)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    result = build_package(args.source, output_dir, ignore=ignore, compress_level=compress_level)
    if isinstance(result, Err):
        print(f"error: {result.error}", file=sys.stderr)
        return EXIT_FAILURE
    print(result.value)
    return EXIT_OK


def render_ext_info(info: ExtInfo, *, fmt: str) -> str:
    """Render inspection output as JSON or YAML text ending in a newline."""
    payload: dict[str, Any] = {
        "type": info.type.value,
        "id": info.id,
        "name": info.name,
        "version": info.version,
        "resolved_id": derive_identifier(info.addon),
    }
    if fmt == "yaml":
        return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def _log_level(cfg: XpikitConfig, verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.getLevelName(cfg.log_level)
