"""Phoneme inventory and pairwise distance configuration.

Both the alignment engine and the dispatch compiler take a
``PhoneticConfig``: the ordered set of valid phonemes plus a black-box
``distance(a, b)`` callable. Nothing here knows about articulatory
features; the distances are computed elsewhere and supplied as data.
"""

import json
import logging
import math
import os
import unicodedata
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping

from phonodist.errors import InventoryError

logger = logging.getLogger(__name__)

# Cost of a pair that is fully dissimilar or unknown
MAX_COST = 1.0

INVENTORY_PATH = Path(os.environ.get("PHONODIST_INVENTORY", "phonemes.json")).expanduser()

_NORMALIZATION_FORMS = ("NFC", "NFD", "NFKC", "NFKD")


@dataclass(frozen=True)
class PhoneticConfig:
    """Immutable phoneme inventory with its distance function."""
    phonemes: tuple[str, ...]
    distance: Callable[[str, str], float | None]
    normalization: str | None = None  # applied before UTF-8 encoding
    _members: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "phonemes", tuple(self.phonemes))
        object.__setattr__(self, "_members", frozenset(self.phonemes))
        if self.normalization is not None and self.normalization not in _NORMALIZATION_FORMS:
            raise InventoryError(
                f"Unknown normalization form: {self.normalization!r}. "
                f"Available: {list(_NORMALIZATION_FORMS)}"
            )

    def contains(self, symbol: str) -> bool:
        return symbol in self._members

    def encode(self, phoneme: str) -> bytes:
        """Return the byte sequence the dispatch code matches for *phoneme*."""
        if self.normalization:
            phoneme = unicodedata.normalize(self.normalization, phoneme)
        return phoneme.encode("utf-8")

    def lookup(self, a: str, b: str) -> float | None:
        """Recorded distance between *a* and *b*, or None if there is none."""
        value = self.distance(a, b)
        if value is None:
            return None
        return float(value)

    def cost(self, a: str, b: str) -> float:
        """Distance between *a* and *b*, with unrecorded pairs at MAX_COST."""
        value = self.lookup(a, b)
        return MAX_COST if value is None else value

    def by_byte_length(self) -> list[tuple[int, list[str]]]:
        """Group phonemes by encoded byte length, longest first."""
        groups: dict[int, list[str]] = {}
        for phoneme in self.phonemes:
            groups.setdefault(len(self.encode(phoneme)), []).append(phoneme)
        return sorted(groups.items(), reverse=True)

    @classmethod
    def from_table(
        cls,
        table: Mapping[str, Mapping[str, float]],
        phonemes: list[str] | None = None,
        normalization: str | None = None,
    ) -> "PhoneticConfig":
        """Build a config from a nested ``{a: {b: distance}}`` mapping.

        Without an explicit *phonemes* list the inventory is every symbol
        mentioned in the table, in first-seen order.
        """
        if phonemes is None:
            seen: dict[str, None] = {}
            for a, row in table.items():
                seen.setdefault(a, None)
                for b in row:
                    seen.setdefault(b, None)
            phonemes = list(seen)

        frozen = {a: dict(row) for a, row in table.items()}

        def distance(a: str, b: str) -> float | None:
            return frozen.get(a, {}).get(b)

        return cls(phonemes=tuple(phonemes), distance=distance, normalization=normalization)


def load_inventory(path: str | Path | None = None) -> PhoneticConfig:
    """Load a phoneme inventory from a JSON file.

    The file holds ``{"phonemes": [...], "distances": {a: {b: x}}}`` and an
    optional ``"normalization"`` form. ``phonemes`` may be omitted, in which
    case the keys of ``distances`` define the inventory.

    Raises:
        FileNotFoundError: if the file does not exist.
        InventoryError: if the file is not a valid inventory.
    """
    path = Path(path) if path is not None else INVENTORY_PATH
    if not path.exists():
        raise FileNotFoundError(f"Inventory not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InventoryError(f"Inventory {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("distances"), dict):
        raise InventoryError(f"Inventory {path} must be an object with a 'distances' table")

    distances = data["distances"]
    for a, row in distances.items():
        if not isinstance(row, dict):
            raise InventoryError(f"Distances for {a!r} must be an object, got {type(row).__name__}")
        for b, value in row.items():
            # bool is an int, and json accepts NaN and Infinity
            numeric = isinstance(value, (int, float)) and not isinstance(value, bool)
            if not numeric or not math.isfinite(value) or value < 0:
                raise InventoryError(f"Distance {a!r} -> {b!r} must be a finite non-negative number, got {value!r}")

    phonemes = data.get("phonemes")
    if phonemes is not None and not all(isinstance(p, str) and p for p in phonemes):
        raise InventoryError(f"Inventory {path} lists a phoneme that is not a non-empty string")

    config = PhoneticConfig.from_table(
        distances,
        phonemes=phonemes,
        normalization=data.get("normalization"),
    )
    logger.info(f"Loaded {len(config.phonemes)} phonemes from {path}")
    return config
