"""Multi-caller set comparison engine.

Decomposes N named variant-identifier collections into their exclusive
intersection lattice (the "UpSet" decomposition): every identifier in the
union is assigned to exactly one group, keyed by the combination of callers
that reported it. Also provides private-call extraction, pairwise concordance
and the per-caller membership table consumed by overlap charts.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from itertools import combinations

import pandas as pd

from constants import VIDS_SEPARATOR, VariantType
from models.callset import CallerPanel
from models.variant import VariantRecord
from validators.base import EmptyComparisonInput

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntersectionGroup:
    """Identifiers reported by exactly ``callers`` and by no other caller."""

    membership: tuple[bool, ...]
    callers: tuple[str, ...]
    vids: tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.vids)

    @property
    def degree(self) -> int:
        return len(self.callers)

    @property
    def label(self) -> str:
        return "&".join(self.callers)


@dataclass(frozen=True)
class IntersectionLattice:
    """All non-empty exclusive intersection groups over a caller panel.

    Groups are ordered by descending count; ties are broken by the
    lexicographic order of the caller-name combination.
    """

    panel: CallerPanel
    groups: tuple[IntersectionGroup, ...]
    set_sizes: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        """Size of the union of all input collections."""
        return sum(g.count for g in self.groups)

    def group_for(self, *callers: str) -> IntersectionGroup | None:
        """Return the group for exactly this caller combination, if present."""
        mask = self.panel.mask(callers)
        for g in self.groups:
            if g.membership == mask:
                return g
        return None

    def counts(self) -> dict[tuple[str, ...], int]:
        return {g.callers: g.count for g in self.groups}

    def to_frame(self) -> pd.DataFrame:
        """One row per group: caller membership flags, label, degree, count, vids.

        ``vids`` holds the group's identifiers joined by commas.
        """
        rows = []
        for g in self.groups:
            row = dict(zip(self.panel.callers, g.membership))
            row.update({
                "combination": g.label,
                "degree": g.degree,
                "count": g.count,
                "vids": VIDS_SEPARATOR.join(g.vids),
            })
            rows.append(row)
        columns = [*self.panel.callers, "combination", "degree", "count", "vids"]
        return pd.DataFrame(rows, columns=columns)


def _as_sets(collections: Mapping[str, Iterable[str]]) -> dict[str, frozenset[str]]:
    return {name: frozenset(vids) for name, vids in collections.items()}


def _resolve_panel(
    collections: Mapping[str, Iterable[str]], panel: CallerPanel | None
) -> CallerPanel:
    if panel is None:
        return CallerPanel.from_names(collections.keys())
    missing = set(panel.callers) - set(collections.keys())
    extra = set(collections.keys()) - set(panel.callers)
    if missing or extra:
        raise ValueError(
            f"Collections do not match caller panel {list(panel.callers)}: "
            f"missing={sorted(missing)}, extra={sorted(extra)}"
        )
    return panel


def compute_intersection_lattice(
    collections: Mapping[str, Iterable[str]],
    panel: CallerPanel | None = None,
) -> IntersectionLattice:
    """Compute the exclusive intersection lattice over named vid collections.

    Args:
        collections: Mapping caller name -> vid collection (duplicates allowed)
        panel: Caller order; defaults to the mapping's key order

    Returns:
        IntersectionLattice whose group counts sum to |union|

    Raises:
        EmptyComparisonInput: If the union of all collections is empty
    """
    panel = _resolve_panel(collections, panel)
    sets = _as_sets(collections)

    union: set[str] = set()
    for s in sets.values():
        union |= s

    if not union:
        raise EmptyComparisonInput(
            f"No variants in any of {len(panel)} collections ({', '.join(panel.callers)})"
        )

    by_membership: dict[tuple[bool, ...], list[str]] = defaultdict(list)
    for vid in union:
        by_membership[panel.membership(vid, sets)].append(vid)

    groups = [
        IntersectionGroup(
            membership=membership,
            callers=panel.members(membership),
            vids=tuple(sorted(members)),
        )
        for membership, members in by_membership.items()
    ]
    groups.sort(key=lambda g: (-g.count, g.callers))

    log.info(
        "Intersection lattice: %d callers, %d unique variants, %d groups",
        len(panel), len(union), len(groups),
    )
    return IntersectionLattice(
        panel=panel,
        groups=tuple(groups),
        set_sizes={name: len(sets[name]) for name in panel.callers},
    )


def private_vids(collections: Mapping[str, Iterable[str]], caller: str) -> set[str]:
    """Identifiers reported by ``caller`` and by no other caller.

    Args:
        collections: Mapping caller name -> vid collection
        caller: Caller whose private calls are wanted

    Returns:
        set_difference(caller, union(others))
    """
    if caller not in collections:
        raise KeyError(f"Unknown caller '{caller}'; have {sorted(collections)}")
    sets = _as_sets(collections)
    others: set[str] = set()
    for name, s in sets.items():
        if name != caller:
            others |= s
    return set(sets[caller] - others)


def shared_by_all(collections: Mapping[str, Iterable[str]]) -> set[str]:
    """Identifiers reported by every caller."""
    sets = list(_as_sets(collections).values())
    if not sets:
        return set()
    return set(frozenset.intersection(*sets))


def pairwise_concordance(collections: Mapping[str, Iterable[str]]) -> dict[str, dict]:
    """Compute shared/union counts and Jaccard index for each caller pair.

    Pairs follow the mapping order, keyed "<a>_vs_<b>". Jaccard is None when
    both collections are empty.
    """
    sets = _as_sets(collections)
    result = {}
    for a, b in combinations(sets.keys(), 2):
        shared = len(sets[a] & sets[b])
        union = len(sets[a] | sets[b])
        result[f"{a}_vs_{b}"] = {
            "callers": [a, b],
            "shared": shared,
            "total": union,
            "jaccard": shared / union if union > 0 else None,
        }
    return result


def build_membership_table(
    records_by_caller: Mapping[str, Iterable[VariantRecord]],
    panel: CallerPanel | None = None,
    variant_type: str | None = None,
) -> pd.DataFrame:
    """Build the per-variant membership table for annotated overlap charts.

    Args:
        records_by_caller: Mapping caller name -> loaded records
        panel: Caller order; defaults to the mapping's key order
        variant_type: Restrict to one type, or None for all

    Returns:
        DataFrame with columns vid, one boolean column per caller (panel
        order), and type; one row per unique vid, sorted by vid
    """
    panel = _resolve_panel(records_by_caller, panel)
    if variant_type is not None and variant_type not in VariantType.ALL:
        raise ValueError(f"Unknown variant type '{variant_type}'")

    type_by_vid: dict[str, str] = {}
    sets: dict[str, frozenset[str]] = {}
    for caller in panel.callers:
        caller_vids = set()
        for r in records_by_caller[caller]:
            if variant_type is not None and r.type != variant_type:
                continue
            caller_vids.add(r.vid)
            type_by_vid.setdefault(r.vid, r.type)
        sets[caller] = frozenset(caller_vids)

    rows = []
    for vid in sorted(type_by_vid):
        row = {"vid": vid}
        row.update(zip(panel.callers, panel.membership(vid, sets)))
        row["type"] = type_by_vid[vid]
        rows.append(row)

    df = pd.DataFrame(rows, columns=["vid", *panel.callers, "type"])
    for caller in panel.callers:
        df[caller] = df[caller].astype(bool)
    return df
