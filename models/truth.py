from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TruthMutation:
    """One row of the ground-truth mutation log.

    There is no chromosome column; rows join to variants by position only.
    """

    pos: int
    ref: str
    alt: str

    @property
    def alleles(self) -> tuple[str, str]:
        return (self.ref, self.alt)

    def __repr__(self) -> str:
        return f"<TruthMutation({self.pos} {self.ref}>{self.alt})>"
