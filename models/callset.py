from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from constants import RESERVED_COLUMN_NAMES


@dataclass(frozen=True)
class NamedVariantSet:
    """A caller label paired with its variant identifiers (duplicates collapsed)."""

    caller: str
    vids: frozenset[str]

    @classmethod
    def from_iterable(cls, caller: str, vids: Iterable[str]) -> NamedVariantSet:
        return cls(caller=caller, vids=frozenset(vids))

    def __len__(self) -> int:
        return len(self.vids)

    def __iter__(self):
        return iter(self.vids)

    def __contains__(self, vid: object) -> bool:
        return vid in self.vids


@dataclass(frozen=True)
class CallerPanel:
    """Ordered, fixed set of caller names.

    Membership of a variant across the panel is a tuple of booleans, one per
    caller in panel order.
    """

    callers: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(set(self.callers)) != len(self.callers):
            raise ValueError(f"Duplicate caller names in panel: {self.callers}")
        reserved = sorted(set(self.callers) & RESERVED_COLUMN_NAMES)
        if reserved:
            raise ValueError(f"Caller names {reserved} clash with output table columns")

    @classmethod
    def from_names(cls, names: Iterable[str]) -> CallerPanel:
        return cls(callers=tuple(names))

    def __len__(self) -> int:
        return len(self.callers)

    def __iter__(self):
        return iter(self.callers)

    def index(self, caller: str) -> int:
        try:
            return self.callers.index(caller)
        except ValueError:
            raise KeyError(f"Unknown caller '{caller}'; panel is {list(self.callers)}") from None

    def membership(self, vid: str, sets: Mapping[str, frozenset[str]]) -> tuple[bool, ...]:
        """Membership bit-vector of ``vid`` across the panel."""
        return tuple(vid in sets[c] for c in self.callers)

    def members(self, membership: tuple[bool, ...]) -> tuple[str, ...]:
        """Caller names whose bit is set."""
        return tuple(c for c, bit in zip(self.callers, membership) if bit)

    def mask(self, callers: Iterable[str]) -> tuple[bool, ...]:
        """Bit-vector with exactly the given callers set."""
        wanted = set(callers)
        for c in wanted:
            self.index(c)
        return tuple(c in wanted for c in self.callers)
