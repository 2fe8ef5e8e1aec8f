"""Generate ``next_phoneme_length``: phoneme segmentation by byte dispatch.

There's no simple way to break a string of IPA characters into phonemes,
so we compile the inventory into a function that, given a byte string, a
starting index and the string's length, returns the length in bytes of
the phoneme starting there, or 0 if none is found.

Pseudocode of the generated body::

    return 0 if the cursor is negative or nothing is left
    switch on byte 0, one case per possible first byte:
        return 1 if this byte completes a phoneme with no longer extension
        if more bytes remain, switch on byte 1:
            ...
        return 1 if a phoneme ends at byte 0, else the longest match so far
    return 0
"""

import json

from phonodist.codegen.branches import (
    Assign,
    Case,
    Comment,
    Function,
    If,
    Module,
    Param,
    Return,
    Switch,
)
from phonodist.codegen.trie import TrieNode, build_trie
from phonodist.inventory import PhoneticConfig

FUNCTION_NAME = "next_phoneme_length"

PARAMS = [
    Param("const unsigned char *", "string"),
    Param("int", "cursor"),
    Param("int", "length"),
]


def describe(node: TrieNode) -> str:
    """Comment text naming the phoneme that ends at *node*."""
    return f"Phoneme: {json.dumps(node.phoneme, ensure_ascii=False)}, bytes: {list(node.byte_path)}"


def signature() -> Function:
    return Function(FUNCTION_NAME, "int", PARAMS)


def next_phoneme_length_function(trie: TrieNode) -> Function:
    """Lower the whole-inventory trie into the segmentation function."""
    body = [
        If("cursor < 0", [Return(0)]),
        Assign("int", "max_length", "length - cursor"),
        If("max_length <= 0", [Return(0)]),
    ]
    body.extend(_switch(trie, depth=0, fallback=0))
    return Function(FUNCTION_NAME, "int", PARAMS, body)


def _switch(node: TrieNode, depth: int, fallback: int) -> list:
    """Branch on ``string[cursor + depth]``; *fallback* is the longest match so far."""
    cases = []
    for byte, child in node.items():
        consumed = depth + 1
        child_fallback = consumed if child.phoneme is not None else fallback
        body: list = []
        if child.phoneme is not None:
            body.append(Comment(describe(child)))
        if child.is_leaf:
            body.append(Return(consumed))
        else:
            # A longer phoneme might match; only look if the bytes exist
            body.append(If(
                f"max_length > {consumed}",
                _switch(child, consumed, child_fallback),
            ))
            body.append(Return(child_fallback))
        cases.append(Case(byte, body))
    return [Switch(f"string[cursor + {depth}]", cases), Return(fallback)]


def next_phoneme_length_module(config: PhoneticConfig) -> Module:
    trie = build_trie(config.phonemes, config.encode)
    return Module(
        header=[
            f"Generated by {__name__}; do not edit.",
            f"Segments {len(config.phonemes)} phonemes by longest byte-prefix match.",
        ],
        items=[next_phoneme_length_function(trie)],
    )
