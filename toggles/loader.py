from __future__ import annotations

from pathlib import Path
from typing import Optional

from toggles.errors import SourceUnavailableError
from toggles.logging_config import get_logger
from toggles.records import format_for_path
from toggles.toggle_set import LoadReport, ToggleSet

logger = get_logger(__name__)


def load_from_file(
    toggles: ToggleSet,
    path: str | Path,
    fmt: Optional[str] = None,
    *,
    missing_ok: bool = False,
) -> LoadReport:
    """
    Load toggle records from ``path`` into ``toggles``.

    Fail-fast: an unreadable or missing source raises
    SourceUnavailableError. With ``missing_ok`` a missing file is logged
    and leaves the set untouched. Bad records inside a readable source
    never raise: bytes that are not UTF-8 are kept as surrogates so the
    offending line is reported as malformed and the rest still loads.
    """
    p = Path(path)
    record_format = format_for_path(p, fmt)

    try:
        with p.open("r", encoding="utf-8", errors="surrogateescape") as stream:
            report = toggles.load_from_collection(record_format.records(stream, source=str(p)))
    except FileNotFoundError as exc:
        if missing_ok:
            logger.warning(
                "Toggle source not found, keeping current state",
                extra={"extra_data": {"toggle_source": str(p)}},
            )
            return LoadReport()
        raise SourceUnavailableError(str(p), exc.strerror or "not found") from exc
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise SourceUnavailableError(str(p), reason) from exc

    logger.info(
        "Toggles loaded from %s (format=%s applied=%d unknown=%d malformed=%d)",
        p,
        record_format.name,
        report.applied,
        report.unknown,
        report.malformed,
        extra={"extra_data": {"toggle_source": str(p), "format": record_format.name}},
    )
    return report
