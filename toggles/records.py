"""
Record adapters: turn a text source into ``(name, raw_flag)`` pairs.

Two conventions are supported:

    lines   ``<0|1> <name>`` one record per line
    yaml    ``<name>: <0|1>`` one key per toggle

Adapters never raise for a bad record. A line with the wrong field
count is passed through as-is so the container logs and counts it
alongside every other malformed record (see ``parse_flag``).
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Optional, Protocol, TextIO, Tuple

import yaml

from toggles.errors import MalformedRecordError, UnknownFormatError
from toggles.logging_config import get_logger

logger = get_logger(__name__)

MAX_FLAG = 255

Record = Tuple[str, Any]


def parse_flag(raw: Any) -> bool:
    """
    Boolean-ish flag: nonzero integer means enabled.

    Accepts bool, int, or a string holding an unsigned integer no larger
    than MAX_FLAG (a byte); "256" is malformed, not enabled. Integers
    that arrive already typed (YAML) are not range checked.
    """
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int):
        return raw != 0
    if isinstance(raw, str):
        text = raw.strip()
        if text.isascii() and text.isdigit() and int(text) <= MAX_FLAG:
            return int(text) != 0
    raise MalformedRecordError(f"unparsable flag value: {raw!r}")


class RecordFormat(Protocol):
    name: str

    def records(self, stream: TextIO, *, source: str = "<stream>") -> Iterator[Record]:
        ...


class LineRecordFormat:
    """``<0|1> <name>`` records, whitespace separated."""

    name = "lines"

    def records(self, stream: TextIO, *, source: str = "<stream>") -> Iterator[Record]:
        for lineno, line in enumerate(stream, start=1):
            parts = line.split()
            if not parts or parts[0].startswith("#"):
                continue
            if len(parts) != 2:
                logger.debug("Toggle line %s:%d has %d fields", source, lineno, len(parts))
                yield tuple(parts)  # type: ignore[misc]
                continue
            raw_flag, name = parts
            yield name, raw_flag


class YamlRecordFormat:
    """``<name>: <0|1>`` mapping document."""

    name = "yaml"

    def records(self, stream: TextIO, *, source: str = "<stream>") -> Iterator[Record]:
        try:
            data = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            logger.warning("Skipping unparsable YAML toggle source %s: %s", source, exc)
            return
        if data is None:
            return
        if not isinstance(data, dict):
            logger.warning(
                "Skipping YAML toggle source %s: root is %s, expected a mapping",
                source,
                type(data).__name__,
            )
            return
        for key, value in data.items():
            yield str(key), value


_FORMATS = {
    LineRecordFormat.name: LineRecordFormat,
    YamlRecordFormat.name: YamlRecordFormat,
}

_YAML_SUFFIXES = {".yml", ".yaml"}


def get_format(name: str) -> RecordFormat:
    try:
        return _FORMATS[name.strip().lower()]()
    except KeyError:
        valid = ", ".join(sorted(_FORMATS))
        raise UnknownFormatError(f"unknown toggle format {name!r} (expected one of: {valid})") from None


def format_for_path(path: str | Path, fmt: Optional[str] = None) -> RecordFormat:
    if fmt:
        return get_format(fmt)
    if Path(path).suffix.lower() in _YAML_SUFFIXES:
        return YamlRecordFormat()
    return LineRecordFormat()
