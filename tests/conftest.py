"""Shared phoneme inventories for the test suite."""

import pytest

from phonodist.inventory import PhoneticConfig

# Byte lengths: m n a -> 1, ɲ ə -> 2, aɪ -> 3, ɲ̊ -> 4.
# "a" is a prefix of "aɪ" and "ɲ" is a prefix of "ɲ̊".
IPA_PHONEMES = ["m", "n", "ɲ", "ɲ̊", "a", "aɪ", "ə"]

IPA_DISTANCES = {
    ("m", "n"): 0.3,
    ("n", "m"): 0.3,
    ("n", "ɲ"): 0.2,
    ("ɲ", "n"): 0.25,
    ("ɲ", "ɲ̊"): 0.1,
    ("ɲ̊", "ɲ"): 0.1,
    ("m", "ɲ̊"): 0.423,
    ("ɲ̊", "m"): 0.423,
    ("a", "aɪ"): 0.4,
    ("aɪ", "a"): 0.4,
    ("a", "ə"): 0.35,
    ("ə", "a"): 0.35,
    ("aɪ", "ə"): 1.25,   # above the fallback; must survive code generation
    ("ə", "aɪ"): 1.25,
    ("m", "a"): 1.0,     # equal to the fallback; no branch emitted
}


def ipa_distance(a: str, b: str) -> float | None:
    if a == b:
        return 0.0
    return IPA_DISTANCES.get((a, b))


def expected_cost(a: str, b: str) -> float:
    value = ipa_distance(a, b)
    return 1.0 if value is None else value


@pytest.fixture(scope="session")
def ipa_config() -> PhoneticConfig:
    return PhoneticConfig(phonemes=tuple(IPA_PHONEMES), distance=ipa_distance)


@pytest.fixture
def golden_config() -> PhoneticConfig:
    """Inventory {a, b, ab} with a symmetric distance table."""
    return PhoneticConfig.from_table({
        "a": {"a": 0.0, "b": 1.0, "ab": 0.5},
        "b": {"a": 1.0, "b": 0.0, "ab": 0.7},
        "ab": {"a": 0.5, "b": 0.7, "ab": 0.0},
    })


@pytest.fixture
def asymmetric_config() -> PhoneticConfig:
    return PhoneticConfig.from_table({
        "p": {"p": 0.0, "b": 0.2},
        "b": {"p": 0.8, "b": 0.0},
    })


@pytest.fixture(scope="session")
def ipa_expected_cost():
    """Expected lookup result for a pair of IPA test phonemes."""
    return expected_cost
