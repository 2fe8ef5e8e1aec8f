"""Byte trie over an encoded phoneme inventory."""

from dataclasses import dataclass, field
from typing import Callable, Iterable

from phonodist.errors import DuplicateByteSequence


@dataclass
class TrieNode:
    """One byte position; ``phoneme`` is set when a phoneme ends here."""
    children: dict[int, "TrieNode"] = field(default_factory=dict)
    phoneme: str | None = None
    byte_path: bytes = b""

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def items(self) -> list[tuple[int, "TrieNode"]]:
        """Children ordered by byte value."""
        return sorted(self.children.items())


def build_trie(
    phonemes: Iterable[str],
    encode: Callable[[str], bytes] = lambda p: p.encode("utf-8"),
) -> TrieNode:
    """Insert every phoneme's bytes into a trie.

    Raises:
        DuplicateByteSequence: if two phonemes end on the same node. The
            whole dispatch scheme depends on byte paths being unique.
    """
    root = TrieNode()
    for phoneme in phonemes:
        node = root
        encoded = encode(phoneme)
        if not encoded:
            raise ValueError(f"Phoneme {phoneme!r} encodes to an empty byte sequence")
        for depth, byte in enumerate(encoded):
            node = node.children.setdefault(byte, TrieNode(byte_path=encoded[:depth + 1]))
        if node.phoneme is not None:
            raise DuplicateByteSequence(phoneme, node.phoneme, encoded)
        node.phoneme = phoneme
    return root
