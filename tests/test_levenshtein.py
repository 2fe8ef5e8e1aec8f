"""Tests for the phonetically weighted Levenshtein distance."""

import logging

import pytest

from phonodist.errors import InvalidSymbol
from phonodist.inventory import PhoneticConfig
from phonodist.levenshtein import WeightedAligner, align, distance, format_matrix


class TestMatrix:
    def test_golden_matrix(self, golden_config):
        matrix = WeightedAligner(golden_config).matrix(["a", "b"], ["ab"])
        assert matrix.shape == (2, 3)
        assert matrix[0].tolist() == pytest.approx([0.0, 0.5, 1.5])
        assert matrix[1].tolist() == pytest.approx([0.5, 0.5, 1.2])

    def test_boundaries_are_chained_not_counted(self, golden_config):
        # Row 0: seeded by d(a, b), then adds d(a, b) and d(b, ab)
        # Column 0: seeded by d(a, b), then adds d(b, a)
        matrix = WeightedAligner(golden_config).matrix(["a", "b", "ab"], ["b", "a"])
        assert matrix[0].tolist() == pytest.approx([0.0, 1.0, 2.0, 2.7])
        assert matrix[:, 0].tolist() == pytest.approx([0.0, 1.0, 2.0])

    def test_shared_entry_uses_first_symbols(self, asymmetric_config):
        # Both boundaries share d(seq1[0], seq2[0]), even when the table is asymmetric
        matrix = WeightedAligner(asymmetric_config).matrix(["p"], ["b", "p"])
        assert matrix[0, 1] == pytest.approx(0.2)
        assert matrix[1, 0] == pytest.approx(0.2)
        assert matrix[2, 0] == pytest.approx(0.2 + 0.8)

    def test_empty_sequence_shape(self, golden_config):
        matrix = WeightedAligner(golden_config).matrix([], ["a", "b"])
        assert matrix.shape == (3, 1)
        assert matrix[:, 0].tolist() == pytest.approx([0.0, 0.0, 1.0])

    def test_matrix_logged_at_debug(self, golden_config, caplog):
        with caplog.at_level(logging.DEBUG, logger="phonodist.levenshtein"):
            WeightedAligner(golden_config).matrix(["a"], ["b"])
        assert "Alignment matrix" in caplog.text


class TestDistance:
    def test_golden_fixture(self, golden_config):
        assert distance(golden_config, ["a", "b"], ["ab"]) == pytest.approx(1.2)

    @pytest.mark.parametrize("seq", [["a"], ["a", "b"], ["ab", "a", "b", "ab"], ["b", "b"]])
    def test_identity_is_zero(self, golden_config, seq):
        assert distance(golden_config, seq, list(seq)) == 0.0

    def test_both_empty_is_zero(self, golden_config):
        assert distance(golden_config, [], []) == 0.0

    def test_empty_against_sequence_is_chained_distance(self, golden_config):
        # d(a, b) + d(b, ab), not the symbol count
        assert distance(golden_config, [], ["a", "b", "ab"]) == pytest.approx(1.7)
        assert distance(golden_config, ["a", "b", "ab"], []) == pytest.approx(1.7)

    def test_empty_against_single_symbol(self, golden_config):
        assert distance(golden_config, [], ["ab"]) == 0.0

    @pytest.mark.parametrize("a, b", [
        (["a", "b"], ["ab"]),
        (["a"], ["b", "ab"]),
        (["ab", "b", "a"], ["a", "ab"]),
        (["b"], ["a", "a", "ab"]),
    ])
    def test_symmetric_table_gives_symmetric_distance(self, golden_config, a, b):
        assert distance(golden_config, a, b) == pytest.approx(distance(golden_config, b, a))

    def test_asymmetric_table_gives_asymmetric_distance(self, asymmetric_config):
        assert distance(asymmetric_config, ["p"], ["b"]) == pytest.approx(0.2)
        assert distance(asymmetric_config, ["b"], ["p"]) == pytest.approx(0.8)

    def test_no_transposition_term(self, golden_config):
        # A swapped pair costs two substitutions
        assert distance(golden_config, ["a", "b"], ["b", "a"]) == pytest.approx(2.0)

    @pytest.mark.parametrize("a, b", [
        (["a"], ["b"]),
        (["a", "b"], ["ab"]),
        (["ab", "a"], ["b", "b", "a"]),
        (["b", "ab"], ["a"]),
    ])
    def test_appending_a_symbol_has_bounded_effect(self, golden_config, a, b):
        for extra in golden_config.phonemes:
            bound = max(golden_config.cost(extra, t) for t in b)
            longer = distance(golden_config, a + [extra], b)
            assert distance(golden_config, a, b) >= longer - bound - 1e-9

    def test_string_input_is_split_into_characters(self, golden_config):
        assert distance(golden_config, "ab", "ba") == pytest.approx(2.0)

    def test_unrecorded_pair_costs_max(self):
        config = PhoneticConfig.from_table({"x": {"x": 0.0}, "y": {"y": 0.0}})
        assert distance(config, ["x"], ["y"]) == pytest.approx(1.0)

    def test_distance_is_float(self, golden_config):
        assert isinstance(distance(golden_config, ["a"], ["b"]), float)


class TestInvalidSymbol:
    def test_first_sequence(self, golden_config):
        with pytest.raises(InvalidSymbol) as exc:
            distance(golden_config, ["a", "z"], ["a"])
        assert exc.value.symbol == "z"
        assert exc.value.inventory == ("a", "b", "ab")

    def test_second_sequence(self, golden_config):
        with pytest.raises(InvalidSymbol, match="'q'"):
            distance(golden_config, ["a"], ["b", "q"])

    def test_against_empty_sequence(self, golden_config):
        with pytest.raises(InvalidSymbol):
            distance(golden_config, ["ʔ"], [])

    def test_is_a_value_error(self, golden_config):
        with pytest.raises(ValueError):
            align(golden_config, ["a"], ["abc"])

    def test_string_with_unknown_character(self, golden_config):
        # "ab" as a string is two phonemes, "a" and "b"; "c" is not one
        with pytest.raises(InvalidSymbol) as exc:
            distance(golden_config, "abc", "a")
        assert exc.value.symbol == "c"


class TestAlign:
    def test_golden_alignment(self, golden_config):
        steps = align(golden_config, ["a", "b"], ["ab"])
        assert [s.operation for s in steps] == ["insert", "substitute"]
        assert [s.cost for s in steps] == pytest.approx([0.5, 1.2])
        assert (steps[0].source, steps[0].target) == ("a", None)
        assert (steps[1].source, steps[1].target) == ("b", "ab")
        assert (steps[1].row, steps[1].column) == (1, 2)

    def test_identical_sequences_are_all_same(self, golden_config):
        steps = align(golden_config, ["a", "b"], ["a", "b"])
        assert [s.operation for s in steps] == ["same", "same"]
        assert [(s.source, s.target) for s in steps] == [("a", "a"), ("b", "b")]

    def test_walks_boundary_to_origin(self, golden_config):
        steps = align(golden_config, [], ["a", "b"])
        assert [s.operation for s in steps] == ["same", "delete"]
        assert [s.target for s in steps] == ["a", "b"]
        assert all(s.source is None for s in steps)
        assert (steps[0].row, steps[0].column) == (1, 0)

    def test_both_empty(self, golden_config):
        assert align(golden_config, [], []) == []

    @pytest.mark.parametrize("a, b", [
        (["a", "b"], ["ab"]),
        (["ab", "b", "a"], ["a", "ab"]),
        (["b"], ["a", "a", "ab"]),
    ])
    def test_last_step_carries_distance(self, golden_config, a, b):
        steps = align(golden_config, a, b)
        assert steps[-1].cost == pytest.approx(distance(golden_config, a, b))
        assert (steps[-1].row, steps[-1].column) == (len(b), len(a))

    @pytest.mark.parametrize("a, b", [
        (["a", "b"], ["b", "a"]),
        (["ab", "b", "a"], ["a", "ab"]),
    ])
    def test_every_symbol_consumed_once(self, golden_config, a, b):
        steps = align(golden_config, a, b)
        assert [s.source for s in steps if s.source is not None] == a
        assert [s.target for s in steps if s.target is not None] == b

    def test_tie_prefers_substitute(self, golden_config):
        # At the final cell substitute and insert predecessors both hold 0.5
        steps = align(golden_config, ["a", "b"], ["ab"])
        assert steps[-1].operation == "substitute"

    def test_invalid_symbol(self, golden_config):
        with pytest.raises(InvalidSymbol):
            align(golden_config, ["x"], ["a"])


class TestFormatMatrix:
    def test_labels_and_rows(self, golden_config):
        seq1, seq2 = ["a", "b"], ["ab"]
        text = format_matrix(WeightedAligner(golden_config).matrix(seq1, seq2), seq1, seq2)
        lines = text.splitlines()
        assert len(lines) == len(seq2) + 2
        assert "a" in lines[0] and "b" in lines[0]
        assert lines[2].startswith("ab ")
        assert "1.200000" in lines[2]
