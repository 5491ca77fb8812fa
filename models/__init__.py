"""Data models for the caller-overlap pipeline."""

from models.callset import CallerPanel, NamedVariantSet
from models.truth import TruthMutation
from models.variant import VariantRecord

__all__ = [
    "CallerPanel",
    "NamedVariantSet",
    "TruthMutation",
    "VariantRecord",
]
