from __future__ import annotations

import threading
from typing import Any, Callable, Generic, Optional, TypeVar

from toggles.logging_config import get_logger
from toggles.settings import ToggleSettings
from toggles.toggle_set import ToggleSet

logger = get_logger(__name__)

T = TypeVar("T")


class LazyToggles(Generic[T]):
    """
    Process-wide toggle snapshot built on first use.

        TOGGLES = LazyToggles(Feature)
        ...
        if TOGGLES.get().is_enabled("FeatureA"):
            ...

    The first ``get()`` reads settings (TOGGLES_FILE etc.), loads the
    source once under a lock, freezes the result and publishes it. Every
    later call returns the same read-only instance.
    """

    def __init__(
        self,
        toggle_type: Any,
        settings_factory: Callable[[], ToggleSettings] = ToggleSettings.from_env,
    ) -> None:
        self._toggle_type = toggle_type
        self._settings_factory = settings_factory
        self._lock = threading.Lock()
        self._value: Optional[ToggleSet[T]] = None

    @property
    def loaded(self) -> bool:
        return self._value is not None

    def get(self) -> ToggleSet[T]:
        value = self._value
        if value is not None:
            return value
        with self._lock:
            if self._value is None:
                self._value = self._build()
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = None

    def _build(self) -> ToggleSet[T]:
        settings = self._settings_factory()
        toggles: ToggleSet[T] = ToggleSet(self._toggle_type)
        if settings.file is None:
            logger.warning("Environment variable TOGGLES_FILE not set, all toggles disabled")
        else:
            toggles.load_from_file(settings.file, settings.fmt, missing_ok=settings.missing_ok)
        return toggles.freeze()
