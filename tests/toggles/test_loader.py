from __future__ import annotations

import enum
import logging
from pathlib import Path

import pytest

from toggles import LoadReport, SourceUnavailableError, ToggleSet, UnknownFormatError, load_from_file


class SampleToggles(enum.Enum):
    Toggle1 = enum.auto()
    Toggle2 = enum.auto()


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_load_line_file_skips_unknown_and_malformed(tmp_path: Path) -> None:
    p = _write(tmp_path / "toggles.txt", "1 Toggle1\n0 Toggle2\n0 VAR1\nTESTTEST\n\n")

    toggles = ToggleSet(SampleToggles)
    report = toggles.load_from_file(p)

    assert toggles.get(0) is True
    assert toggles.get(1) is False
    assert report == LoadReport(applied=2, unknown=1, malformed=1)


def test_load_line_file_with_bad_flag(tmp_path: Path) -> None:
    p = _write(tmp_path / "toggles.txt", "x Toggle1\n1 Toggle2\n")

    toggles = ToggleSet(SampleToggles)
    report = load_from_file(toggles, p)

    assert toggles.to_dict() == {"Toggle1": False, "Toggle2": True}
    assert report.malformed == 1


def test_load_yaml_file(tmp_path: Path) -> None:
    p = _write(tmp_path / "toggles.yaml", "Toggle1: 0\nToggle2: 1\nVAR1: 1\nBroken: maybe\n")

    toggles = ToggleSet(SampleToggles)
    report = toggles.load_from_file(p)

    assert toggles.to_dict() == {"Toggle1": False, "Toggle2": True}
    assert report == LoadReport(applied=2, unknown=1, malformed=1)


def test_explicit_format_overrides_suffix(tmp_path: Path) -> None:
    p = _write(tmp_path / "toggles.conf", "Toggle1: 1\n")

    toggles = ToggleSet(SampleToggles)
    toggles.load_from_file(p, "yaml")

    assert toggles.get(0) is True


def test_unknown_format_raises_before_reading(tmp_path: Path) -> None:
    toggles = ToggleSet(SampleToggles)
    with pytest.raises(UnknownFormatError):
        toggles.load_from_file(tmp_path / "missing.txt", "ini")


def test_missing_file_fails_fast(tmp_path: Path) -> None:
    missing = tmp_path / "nope.txt"
    toggles = ToggleSet(SampleToggles)

    with pytest.raises(SourceUnavailableError) as excinfo:
        toggles.load_from_file(missing)

    assert excinfo.value.path == str(missing)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
    assert isinstance(excinfo.value, OSError)


def test_missing_file_tolerated_when_asked(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    toggles = ToggleSet(SampleToggles)
    toggles.set(0, True)

    with caplog.at_level(logging.WARNING, logger="toggles.loader"):
        report = toggles.load_from_file(tmp_path / "nope.txt", missing_ok=True)

    assert report == LoadReport()
    assert toggles.get(0) is True
    assert any("not found" in r.getMessage() for r in caplog.records)


def test_directory_is_unavailable_even_with_missing_ok(tmp_path: Path) -> None:
    toggles = ToggleSet(SampleToggles)
    with pytest.raises(SourceUnavailableError):
        toggles.load_from_file(tmp_path, missing_ok=True)


def test_load_logs_summary(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    p = _write(tmp_path / "toggles.txt", "1 Toggle1\n")

    with caplog.at_level(logging.INFO, logger="toggles.loader"):
        ToggleSet(SampleToggles).load_from_file(p)

    msg = [r for r in caplog.records if r.name == "toggles.loader"][-1].getMessage()
    assert "applied=1" in msg
    assert "format=lines" in msg


def test_wrong_field_count_lines_are_counted(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    p = _write(tmp_path / "toggles.txt", "1 Toggle1\nTESTTEST\na b c\n")

    with caplog.at_level(logging.WARNING, logger="toggles.toggle_set"):
        report = ToggleSet(SampleToggles).load_from_file(p)

    assert report == LoadReport(applied=1, unknown=0, malformed=2)
    assert sum("malformed toggle record" in r.getMessage() for r in caplog.records) == 2


def test_undecodable_line_is_skipped_not_fatal(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    p = tmp_path / "toggles.txt"
    p.write_bytes(b"1 Toggle1\n1 \xff\xfe\n\xff Toggle2\n1 Toggle2\n")

    toggles = ToggleSet(SampleToggles)
    with caplog.at_level(logging.WARNING, logger="toggles.toggle_set"):
        report = toggles.load_from_file(p)

    assert toggles.to_dict() == {"Toggle1": True, "Toggle2": True}
    assert report == LoadReport(applied=2, unknown=0, malformed=2)
    assert sum("malformed toggle record" in r.getMessage() for r in caplog.records) == 2


def test_undecodable_yaml_is_reported_not_fatal(tmp_path: Path) -> None:
    p = tmp_path / "toggles.yml"
    p.write_bytes(b"Toggle1: 1\n\xff: 1\n")

    toggles = ToggleSet(SampleToggles)
    report = toggles.load_from_file(p)

    assert report == LoadReport()
    assert toggles.enabled() == ()
