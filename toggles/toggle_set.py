from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, Iterator, Mapping, Optional, Sequence, Tuple, TypeVar

import deal

from toggles.errors import FrozenToggleSetError, MalformedRecordError, ToggleOrdinalError
from toggles.logging_config import get_logger
from toggles.records import parse_flag
from toggles.variants import Variants, variants_of

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class LoadReport:
    applied: int = 0
    unknown: int = 0
    malformed: int = 0

    @property
    def total(self) -> int:
        return self.applied + self.unknown + self.malformed


class ToggleSet(Generic[T]):
    """
    Fixed-size boolean state for every variant of a toggle type.

    Storage is a packed bit mask addressed by ordinal (position in the
    declared order). Reads are O(1) by ordinal; names go through the
    name -> ordinal table built once per toggle type.

        class Feature(Enum):
            FeatureA = auto()
            FeatureB = auto()

        toggles = ToggleSet(Feature)
        toggles.set(0, True)
        toggles.set_by_name("FeatureB", True)
        print(toggles)

    Ordinals are positions, not declared values: for an IntEnum declared
    as ``A = 5`` the ordinal of ``A`` is 0 and ``get(5)`` is an error.

    No locking inside. Build once, then ``freeze()`` before sharing.
    """

    __slots__ = ("_toggle_type", "_variants", "_bits", "_frozen")

    def __init__(self, toggle_type: Any) -> None:
        self._toggle_type = toggle_type
        self._variants: Variants = variants_of(toggle_type)
        self._bits = 0
        self._frozen = False

    # ------------------------------------------------------------------
    # ordinal access
    # ------------------------------------------------------------------

    def _check_ordinal(self, ordinal: Any) -> int:
        n = len(self._variants)
        if isinstance(ordinal, bool) or not isinstance(ordinal, int) or not 0 <= ordinal < n:
            raise ToggleOrdinalError(ordinal, n)
        return int(ordinal)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise FrozenToggleSetError("toggle set is frozen (read-only)")

    @deal.post(lambda result: isinstance(result, bool), message="ToggleSet.get must return bool")
    @deal.raises(ToggleOrdinalError)
    def get(self, ordinal: int) -> bool:
        pos = self._check_ordinal(ordinal)
        return bool((self._bits >> pos) & 1)

    @deal.post(lambda result: result is None, message="ToggleSet.set returns None")
    @deal.raises(ToggleOrdinalError, FrozenToggleSetError)
    def set(self, ordinal: int, value: bool) -> None:
        pos = self._check_ordinal(ordinal)
        self._check_mutable()
        if value:
            self._bits |= 1 << pos
        else:
            self._bits &= ~(1 << pos)

    # ------------------------------------------------------------------
    # name access
    # ------------------------------------------------------------------

    @deal.pre(lambda self, name, value: isinstance(name, str), message="toggle name must be str")
    @deal.post(lambda result: isinstance(result, bool), message="ToggleSet.set_by_name must return bool")
    @deal.raises(FrozenToggleSetError)
    def set_by_name(self, name: str, value: bool) -> bool:
        """Set a toggle by display name. Unknown names are ignored; returns whether one was set."""
        self._check_mutable()
        pos = self._variants.index.get(name)
        if pos is None:
            logger.debug("Ignoring unknown toggle name %r", name)
            return False
        self.set(pos, bool(value))
        return True

    @deal.post(lambda result: result is None, message="ToggleSet.set_all returns None")
    @deal.raises(FrozenToggleSetError)
    def set_all(self, values: Mapping[str, bool]) -> None:
        """Reset everything to False, then apply every known name in ``values``."""
        self._check_mutable()
        self._bits = 0
        for pos, name in enumerate(self._variants.names):
            if name in values:
                self.set(pos, bool(values[name]))

    def load_from_collection(self, records: Iterable[Sequence[Any]]) -> LoadReport:
        """
        Apply ``(name, raw_flag)`` records in order.

        A record with the wrong field count, an unparsable flag or a name
        that is not printable text (undecodable bytes) is logged and skipped; unknown names are skipped. Nothing in the
        records themselves can abort the batch.
        """
        self._check_mutable()
        applied = unknown = malformed = 0
        for position, record in enumerate(records, start=1):
            try:
                if isinstance(record, (str, bytes)):
                    raise MalformedRecordError("expected a (name, flag) pair, got a bare string")
                name, raw_flag = record
                if not isinstance(name, str):
                    raise MalformedRecordError(f"toggle name must be str, got {type(name).__name__}")
                if not name.isprintable():
                    raise MalformedRecordError("toggle name is not printable text (undecodable bytes?)")
                value = parse_flag(raw_flag)
            except (TypeError, ValueError) as exc:
                malformed += 1
                logger.warning("Skipping malformed toggle record #%d %r: %s", position, record, exc)
                continue

            if self.set_by_name(name, value):
                applied += 1
            else:
                unknown += 1

        report = LoadReport(applied=applied, unknown=unknown, malformed=malformed)
        logger.debug(
            "Loaded toggle records: applied=%d unknown=%d malformed=%d",
            report.applied,
            report.unknown,
            report.malformed,
        )
        return report

    def load_from_file(self, path: str | Path, fmt: Optional[str] = None, *, missing_ok: bool = False) -> LoadReport:
        from toggles.loader import load_from_file

        return load_from_file(self, path, fmt=fmt, missing_ok=missing_ok)

    # ------------------------------------------------------------------
    # read helpers
    # ------------------------------------------------------------------

    @property
    def toggle_type(self) -> Any:
        return self._toggle_type

    @property
    def variants(self) -> Variants:
        return self._variants

    @property
    def frozen(self) -> bool:
        return self._frozen

    def ordinal_of(self, name: str) -> int:
        return self._variants.ordinal(name)

    def is_enabled(self, name: str) -> bool:
        pos = self._variants.index.get(name)
        if pos is None:
            return False
        return self.get(pos)

    def items(self) -> Iterator[Tuple[str, bool]]:
        for pos, name in enumerate(self._variants.names):
            yield name, bool((self._bits >> pos) & 1)

    def to_dict(self) -> Dict[str, bool]:
        return dict(self.items())

    def enabled(self) -> Tuple[str, ...]:
        return tuple(name for name, value in self.items() if value)

    def freeze(self) -> ToggleSet[T]:
        self._frozen = True
        return self

    def copy(self) -> ToggleSet[T]:
        """Mutable copy, even when this set is frozen."""
        other: ToggleSet[T] = ToggleSet(self._variants)
        other._toggle_type = self._toggle_type
        other._bits = self._bits
        return other

    def render(self) -> str:
        return "".join(f"{int(value)} {name} \n" for name, value in self.items())

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        type_name = getattr(self._toggle_type, "__name__", type(self._toggle_type).__name__)
        return f"ToggleSet({type_name}, enabled={list(self.enabled())!r})"

    def __len__(self) -> int:
        return len(self._variants)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToggleSet):
            return NotImplemented
        return self._variants.names == other._variants.names and self._bits == other._bits

    __hash__ = None  # type: ignore[assignment]
