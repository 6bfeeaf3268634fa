from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

# Slow CI machines trip the too_slow healthcheck; it is not a functional failure.
settings.register_profile(
    "toggles_stable",
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)

settings.load_profile("toggles_stable")


@pytest.fixture(autouse=True)
def _clean_toggle_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TOGGLES_FILE", "TOGGLES_FORMAT", "TOGGLES_MISSING_OK", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
