from __future__ import annotations

from dataclasses import dataclass, field

from utils import format_vid
from vcf_utils import determine_variant_type


@dataclass(frozen=True)
class VariantRecord:
    """One data line of a single-sample variant file.

    ``type`` and ``vid`` are derived from the coordinates on construction.
    """

    chrom: str
    pos: int
    id: str
    ref: str
    alt: str
    qual: str = "."
    filter: str = "."
    info: str = "."
    format: str = "."
    sample: str = "."

    type: str = field(init=False)
    vid: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", determine_variant_type(self.ref, self.alt))
        object.__setattr__(self, "vid", format_vid(self.chrom, self.pos, self.ref, self.alt))

    @property
    def key(self) -> tuple[str, int, str, str]:
        return (self.chrom, self.pos, self.ref, self.alt)

    def __repr__(self) -> str:
        return f"<VariantRecord({self.chrom}:{self.pos} {self.ref}>{self.alt}, {self.type})>"
