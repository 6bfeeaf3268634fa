from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, field_validator

_TRUE = {"1", "true", "yes", "y", "on"}


def _env_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUE


class ToggleSettings(BaseModel):
    """
    Environment configuration for loading toggles.

      TOGGLES_FILE        path of the toggle source (unset/empty: no file)
      TOGGLES_FORMAT      "lines" or "yaml" (default: by file suffix)
      TOGGLES_MISSING_OK  tolerate a missing file instead of failing
      LOG_LEVEL           logging level for the CLI
      LOG_FORMAT          "text" or "json"
    """

    file: Optional[Path] = None
    fmt: Optional[str] = None
    missing_ok: bool = False
    log_level: str = "INFO"
    log_format: str = "text"

    @field_validator("fmt")
    @classmethod
    def _check_fmt(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().lower()
        if v not in {"lines", "yaml"}:
            raise ValueError(f"unsupported toggle format: {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unsupported log level: {v!r}")
        return v

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in {"text", "json"}:
            raise ValueError(f"unsupported log format: {v!r}")
        return v

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[str | Path] = None,
    ) -> ToggleSettings:
        """
        Build settings from ``env`` (default: os.environ).

        Values from ``dotenv_path`` fill in variables the environment does
        not define; the environment always wins.
        """
        merged: dict[str, str] = {}
        if dotenv_path is not None and Path(dotenv_path).exists():
            merged.update({k: v for k, v in dotenv_values(dotenv_path).items() if v is not None})
        merged.update(os.environ if env is None else env)

        raw_file = merged.get("TOGGLES_FILE", "").strip()
        raw_fmt = merged.get("TOGGLES_FORMAT", "").strip()

        return cls(
            file=Path(raw_file) if raw_file else None,
            fmt=raw_fmt or None,
            missing_ok=_env_flag(merged.get("TOGGLES_MISSING_OK")),
            log_level=merged.get("LOG_LEVEL", "INFO") or "INFO",
            log_format=merged.get("LOG_FORMAT", "text") or "text",
        )
