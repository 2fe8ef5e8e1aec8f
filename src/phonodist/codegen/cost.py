"""Generate ``phonetic_cost``: pairwise phoneme distance by byte dispatch.

We find the phonetic distance between two phonemes using a compiled lookup
table, implemented as nested switch statements. Hard to read when
compiled, but simple to generate and fast at runtime.

``phonetic_cost`` takes two byte strings, each with a start position and
an end (its logical length). Each span must hold exactly one phoneme, as
found by the generated ``next_phoneme_length``. The dispatch goes through
one helper per byte length of the first phoneme::

    if (phoneme1_length == 1)
      switch (string1[pos1 + 0]) {
        case 109:  // "m"
          if (phoneme2_length == 4) {
            switch (string2[pos2 + 0]) {
              case 201:
                switch (string2[pos2 + 1]) {
                  ...
                    case 138:  // "m" -> "ɲ̊"
                      return (float) 0.423;

Pairs that are unrecorded or cost exactly ``MAX_COST`` get no branch; the
trailing ``return 1.0`` covers them.
"""

import json

from phonodist.codegen import boundary
from phonodist.codegen.branches import (
    Assign,
    Case,
    Comment,
    Function,
    If,
    Module,
    Param,
    Prototype,
    Return,
    Switch,
    prune,
)
from phonodist.codegen.trie import TrieNode, build_trie
from phonodist.inventory import MAX_COST, PhoneticConfig

FUNCTION_NAME = "phonetic_cost"

PARAMS = [
    Param("const unsigned char *", "string1"),
    Param("int", "pos1"),
    Param("int", "string1_length"),
    Param("const unsigned char *", "string2"),
    Param("int", "pos2"),
    Param("int", "string2_length"),
]

HELPER_PARAMS = [
    Param("const unsigned char *", "string1"),
    Param("int", "pos1"),
    Param("const unsigned char *", "string2"),
    Param("int", "pos2"),
    Param("int", "phoneme2_length"),
]


def helper_name(length: int) -> str:
    return f"{FUNCTION_NAME}_length1_{length}"


class PhoneticCostLowering:
    """Lowers the distance table into one dispatcher plus per-length helpers."""

    def __init__(self, config: PhoneticConfig):
        self.config = config
        self.groups = config.by_byte_length()
        self.tries = {
            length: build_trie(phonemes, config.encode)
            for length, phonemes in self.groups
        }
        self.branch_count = 0

    def module(self) -> Module:
        helpers = [self.helper(length) for length, _ in self.groups]
        items = [Prototype(boundary.signature())]
        items.extend(Prototype(h) for h in helpers)
        items.append(self.dispatcher())
        items.extend(helpers)
        return Module(
            header=[
                f"Generated by {__name__}; do not edit.",
                f"Distances for {len(self.config.phonemes)} phonemes; "
                f"{self.branch_count} pairs differ from the {MAX_COST!r} fallback.",
            ],
            items=items,
        )

    def dispatcher(self) -> Function:
        call = "(string1, pos1, string2, pos2, phoneme2_length)"
        body = [
            If("pos1 < 0", [Return(MAX_COST)]),
            If("pos2 < 0", [Return(MAX_COST)]),
            If("pos1 >= string1_length", [Return(MAX_COST)]),
            If("pos2 >= string2_length", [Return(MAX_COST)]),
            Assign("int", "phoneme1_length", f"{boundary.FUNCTION_NAME}(string1, pos1, string1_length)"),
            Assign("int", "phoneme2_length", f"{boundary.FUNCTION_NAME}(string2, pos2, string2_length)"),
            # Each side must be exactly one phoneme
            If("phoneme1_length != string1_length - pos1", [Return(MAX_COST)]),
            If("phoneme2_length != string2_length - pos2", [Return(MAX_COST)]),
            Switch("phoneme1_length", [
                Case(length, [Return(helper_name(length) + call)])
                for length, _ in self.groups
            ]),
            Return(MAX_COST),
        ]
        return Function(FUNCTION_NAME, "float", PARAMS, body)

    def helper(self, length: int) -> Function:
        body = self._walk(self.tries[length], 1, 0, self._second_operand)
        body.append(Return(MAX_COST))
        return Function(helper_name(length), "float", HELPER_PARAMS, prune(body))

    def _second_operand(self, phoneme1: str) -> list:
        return [
            If(
                f"phoneme2_length == {length}",
                self._walk(self.tries[length], 2, 0, lambda p2: self._pair(phoneme1, p2)),
            )
            for length, _ in self.groups
        ]

    def _pair(self, phoneme1: str, phoneme2: str) -> list:
        value = self.config.lookup(phoneme1, phoneme2)
        if value is None or value == MAX_COST:
            return []
        self.branch_count += 1
        label = f"{json.dumps(phoneme1, ensure_ascii=False)} -> {json.dumps(phoneme2, ensure_ascii=False)}"
        return [Comment(label), Return(value)]

    def _walk(self, node: TrieNode, operand: int, depth: int, on_phoneme) -> list:
        """Branch on successive bytes of one operand down to its phoneme.

        All phonemes in a per-length trie have the same byte length, so a
        terminal node is always a leaf.
        """
        cases = []
        for byte, child in node.items():
            if child.phoneme is not None:
                body = on_phoneme(child.phoneme)
            else:
                body = self._walk(child, operand, depth + 1, on_phoneme)
            cases.append(Case(byte, body))
        return [Switch(f"string{operand}[pos{operand} + {depth}]", cases)]


def phonetic_cost_module(config: PhoneticConfig) -> Module:
    return PhoneticCostLowering(config).module()
