from __future__ import annotations

import enum
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Tuple


@dataclass(frozen=True, slots=True)
class Variants:
    """
    Declared order of a toggle type plus its name -> ordinal table.

    The ordinal is the position in the declared order, never the value
    an Enum member was declared with.
    """

    names: Tuple[str, ...]
    index: Mapping[str, int]

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self):
        return iter(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.index

    def ordinal(self, name: str) -> int:
        return self.index[name]

    @classmethod
    def from_names(cls, names: Iterable[str]) -> Variants:
        ordered = tuple(names)
        table: dict[str, int] = {}
        for pos, name in enumerate(ordered):
            if not isinstance(name, str):
                raise TypeError(f"toggle name must be str, got {type(name).__name__}")
            if name in table:
                raise ValueError(f"duplicate toggle name: {name!r}")
            table[name] = pos
        return cls(names=ordered, index=MappingProxyType(table))


@lru_cache(maxsize=None)
def _enum_variants(enum_cls: type) -> Variants:
    # iterating an Enum skips aliases, so each member appears once
    return Variants.from_names(member.name for member in enum_cls)


def variants_of(toggle_type: Any) -> Variants:
    """Resolve an Enum class, a Variants table or an iterable of names."""
    if isinstance(toggle_type, Variants):
        return toggle_type
    if isinstance(toggle_type, type) and issubclass(toggle_type, enum.Enum):
        return _enum_variants(toggle_type)
    if isinstance(toggle_type, (str, bytes)):
        raise TypeError("toggle type must be an Enum class or an iterable of names, not a string")
    return Variants.from_names(toggle_type)
