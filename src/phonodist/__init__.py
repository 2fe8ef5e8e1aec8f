"""Phonetically weighted edit distance for IPA strings.

Two components share one ``PhoneticConfig``: the alignment engine in
``phonodist.levenshtein`` and the dispatch compiler in ``phonodist.codegen``.
"""

from phonodist.errors import DuplicateByteSequence, InvalidSymbol, InventoryError, PhonodistError
from phonodist.inventory import MAX_COST, PhoneticConfig, load_inventory
from phonodist.levenshtein import WeightedAligner, align, distance
from phonodist.types import AlignmentStep

__all__ = [
    "AlignmentStep",
    "DuplicateByteSequence",
    "InvalidSymbol",
    "InventoryError",
    "MAX_COST",
    "PhoneticConfig",
    "PhonodistError",
    "WeightedAligner",
    "align",
    "distance",
    "load_inventory",
]
