"""Exceptions raised by phonodist."""


class PhonodistError(Exception):
    """Base class for all phonodist errors."""


class InvalidSymbol(PhonodistError, ValueError):
    """A sequence handed to the alignment engine holds a non-inventory symbol."""

    def __init__(self, symbol: str, inventory: tuple[str, ...]):
        self.symbol = symbol
        self.inventory = inventory
        super().__init__(
            f"{symbol!r} is not a phoneme in the inventory "
            f"({len(inventory)} phonemes: {' '.join(inventory[:20])}"
            f"{' ...' if len(inventory) > 20 else ''}). "
            f"Only IPA-transcribed sequences drawn from the inventory can be aligned"
        )


class DuplicateByteSequence(PhonodistError, ValueError):
    """Two phonemes encode to the same byte path in the dispatch trie."""

    def __init__(self, phoneme: str, existing: str, byte_path: bytes):
        self.phoneme = phoneme
        self.existing = existing
        self.byte_path = byte_path
        super().__init__(
            f"Duplicate byte sequence on {phoneme!r} & {existing!r} "
            f"({list(byte_path)})"
        )


class InventoryError(PhonodistError, ValueError):
    """An inventory file could not be interpreted."""
