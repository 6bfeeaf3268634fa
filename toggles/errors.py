from __future__ import annotations


class ToggleError(Exception):
    """Base error for the toggles package."""


class ToggleOrdinalError(ToggleError, IndexError):
    """
    An ordinal outside [0, len) reached get()/set().

    Usually means a caller passed a declared enum value (discriminant)
    where the positional ordinal was expected.
    """

    def __init__(self, ordinal: object, length: int) -> None:
        self.ordinal = ordinal
        self.length = length
        super().__init__(f"toggle ordinal {ordinal!r} out of range for {length} toggles")


class MalformedRecordError(ToggleError, ValueError):
    pass


class SourceUnavailableError(ToggleError, OSError):
    """The toggle source could not be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"toggle source unavailable: {path} ({reason})")


class FrozenToggleSetError(ToggleError):
    pass


class UnknownFormatError(ToggleError, ValueError):
    pass
