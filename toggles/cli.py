from __future__ import annotations

import argparse
import importlib
import json
import sys
from typing import Any, Dict, Sequence

from pydantic import ValidationError

from toggles.errors import SourceUnavailableError, ToggleError
from toggles.logging_config import get_logger, setup_logging
from toggles.records import parse_flag
from toggles.settings import ToggleSettings
from toggles.toggle_set import ToggleSet

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_SOURCE = 3


def resolve_toggle_type(target: str) -> Any:
    """Import ``package.module:Name``."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"expected 'module:Name', got {target!r}")
    module = importlib.import_module(module_name)
    obj: Any = module
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj


def _parse_override(raw: str) -> tuple[str, bool]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise ValueError(f"expected NAME=0|1, got {raw!r}")
    return name, parse_flag(value)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="toggles",
        description="Load a toggle source against an enum and print the resulting state.",
    )
    p.add_argument("--enum", required=True, help="toggle type as 'package.module:EnumName'")
    p.add_argument("--file", default=None, help="toggle source (default: $TOGGLES_FILE)")
    p.add_argument("--format", dest="fmt", choices=("lines", "yaml"), default=None)
    p.add_argument("--set", dest="overrides", action="append", default=[], metavar="NAME=0|1")
    p.add_argument("--missing-ok", action="store_true", help="treat a missing source as all toggles disabled")
    p.add_argument("--json", action="store_true", help="print a JSON object instead of lines")
    p.add_argument("--log-level", default=None)
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        settings = ToggleSettings.from_env()
    except ValidationError as exc:
        print(f"toggles: ERROR - invalid environment: {exc}", flush=True)
        return EXIT_USAGE

    setup_logging(level=args.log_level or settings.log_level, fmt=settings.log_format, stream=sys.stderr)

    try:
        toggle_type = resolve_toggle_type(args.enum)
        toggles: ToggleSet[Any] = ToggleSet(toggle_type)
        overrides = [_parse_override(raw) for raw in args.overrides]
    except (ImportError, AttributeError, TypeError, ValueError) as exc:
        print(f"toggles: ERROR - {type(exc).__name__}: {exc}", flush=True)
        return EXIT_USAGE

    path = args.file or settings.file
    fmt = args.fmt or settings.fmt
    missing_ok = args.missing_ok or settings.missing_ok

    try:
        if path:
            toggles.load_from_file(path, fmt, missing_ok=missing_ok)
        else:
            logger.warning("No toggle source given (--file / TOGGLES_FILE), all toggles disabled")
    except SourceUnavailableError as exc:
        print(f"toggles: ERROR - {exc}", flush=True)
        return EXIT_SOURCE
    except ToggleError as exc:
        print(f"toggles: ERROR - {type(exc).__name__}: {exc}", flush=True)
        return EXIT_USAGE

    for name, value in overrides:
        if not toggles.set_by_name(name, value):
            logger.warning("Override for unknown toggle %r ignored", name)

    if args.json:
        out: Dict[str, Any] = {"toggles": toggles.to_dict(), "enabled": list(toggles.enabled())}
        print(json.dumps(out, ensure_ascii=False, sort_keys=False))
    else:
        print(toggles.render(), end="")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
