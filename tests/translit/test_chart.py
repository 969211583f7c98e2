import logging
import math

import pytest
from src.translit.chart import OutOfRange, TransliterationChart
from src.translit.edge import ChartEdge
from src.translit.script import ScriptMapping

from tests.translit.helpers import LATIN, latin_chart


def _add_chain(chart, texts, score=1.0):
    for i, text in enumerate(texts):
        chart.add_edge(ChartEdge(i, i + 1, text, score), "foo")


class TestConstruction:
    def test_mapping_must_cover_same_string(self):
        with pytest.raises(ValueError):
            TransliterationChart("abc", ScriptMapping.uniform("ab", LATIN))

    def test_length_in_codepoints(self):
        chart = latin_chart("a𝔸b")
        assert len(chart) == 3


class TestAddEdge:
    def test_edge_past_end_rejected(self):
        chart = latin_chart("ab")
        with pytest.raises(OutOfRange):
            chart.add_edge(ChartEdge(1, 3, "x", 1.0), "foo")

    def test_negative_start_rejected(self):
        chart = latin_chart("ab")
        with pytest.raises(OutOfRange):
            chart.add_edge(ChartEdge(-1, 1, "x", 1.0), "foo")

    def test_edge_ending_at_input_end_accepted(self):
        chart = latin_chart("ab")
        chart.add_edge(ChartEdge(0, 2, "x", 1.0), "foo")
        assert len(chart.edges) == 1


class TestLookups:
    @pytest.fixture
    def chart(self):
        chart = latin_chart("abcd")
        _add_chain(chart, "abcd")
        chart.add_edge(ChartEdge(1, 3, "foo", 2.5), "long")
        return chart

    def test_edges_starting_at(self, chart):
        texts = [e.span_transliteration for e in chart.edges_starting_at(1)]
        assert texts == ["b", "foo"]

    def test_edges_ending_at(self, chart):
        texts = [e.span_transliteration for e in chart.edges_ending_at(3)]
        assert texts == ["c", "foo"]

    def test_edges_from_to(self, chart):
        assert [e.span_transliteration for e in chart.edges_from_to(1, 3)] == ["foo"]
        assert chart.edges_from_to(0, 3) == []

    def test_edges_from_to_rejects_bad_spans(self, chart):
        with pytest.raises(ValueError):
            chart.edges_from_to(2, 2)
        with pytest.raises(ValueError):
            chart.edges_from_to(-1, 2)

    def test_edges_including(self, chart):
        assert [e.span_transliteration for e in chart.edges_including(2)] == ["c", "foo"]
        assert [e.span_transliteration for e in chart.edges_including(3)] == ["d"]

    def test_empty_positions(self, chart):
        assert chart.edges_starting_at(4) == []
        assert chart.edges_ending_at(0) == []
        assert chart.edges_including(4) == []

    def test_lookups_are_snapshots(self, chart):
        ending = chart.edges_ending_at(3)
        for edge in ending:
            chart.add_edge(ChartEdge(edge.start_position, 3, edge.span_transliteration + "!",
                                     edge.score), "copy")
        assert len(ending) == 2
        assert len(chart.edges_ending_at(3)) == 4


class TestDerivedEdges:
    def test_add_extended(self):
        chart = latin_chart("abc")
        base = ChartEdge(0, 1, "a", 1.0)
        chart.add_edge(base, "base")
        chart.add_extended(base, 3, "abc", 2.0, "extend")
        edge = chart.edges_from_to(0, 3)[0]
        assert edge.span_transliteration == "abc"
        assert edge.score == 2.0
        assert chart.derivation(edge) == "extend [from: base]"

    def test_add_extended_to_same_end(self):
        chart = latin_chart("a")
        base = ChartEdge(0, 1, "a", 1.0)
        chart.add_edge(base, "base")
        chart.add_extended(base, 1, "ah", 1.5, "same")
        assert len(chart.edges_from_to(0, 1)) == 2

    def test_add_extended_cannot_shrink(self):
        chart = latin_chart("abc")
        base = ChartEdge(0, 2, "ab", 1.0)
        chart.add_edge(base, "base")
        with pytest.raises(ValueError):
            chart.add_extended(base, 1, "a", 1.0, "shrink")

    def test_add_merged_spans_union(self):
        chart = latin_chart("abcd")
        left = ChartEdge(0, 2, "ab", 1.0)
        right = ChartEdge(2, 4, "cd", 1.0)
        chart.add_edge(left, "left")
        chart.add_edge(right, "right")
        chart.add_merged(left, right, "ABCD", 3.0, "merge")
        merged = chart.edges_from_to(0, 4)[0]
        assert merged.start_position == left.start_position
        assert merged.end_position == right.end_position
        assert merged.span_transliteration == "ABCD"
        assert chart.derivation(merged) == "merge [left: left] [right: right]"

    def test_add_merged_requires_adjacency(self):
        chart = latin_chart("abcd")
        left = ChartEdge(0, 1, "a", 1.0)
        right = ChartEdge(2, 4, "cd", 1.0)
        with pytest.raises(ValueError):
            chart.add_merged(left, right, "acd", 2.0, "gap")

    def test_add_derived_records_sources(self):
        chart = latin_chart("ab")
        a = ChartEdge(0, 1, "a", 1.0)
        b = ChartEdge(1, 2, "b", 1.0)
        chart.add_edge(a, "first")
        chart.add_edge(b, "second")
        chart.add_derived([a, b], ChartEdge(0, 2, "ab", 2.5), "combined")
        derived = chart.edges_from_to(0, 2)[0]
        assert chart.derivation(derived) == "combined [from: first] [from: second]"

    def test_derivations_can_be_switched_off(self):
        chart = latin_chart("a", track_derivations=False)
        edge = ChartEdge(0, 1, "a", 1.0)
        chart.add_edge(edge, "why")
        assert chart.derivation(edge) is None
        assert chart.best_decoding() == "a"

    def test_derivation_of_foreign_edge(self):
        chart = latin_chart("a")
        assert chart.derivation(ChartEdge(0, 1, "a", 1.0)) is None


class TestBestDecoding:
    def test_no_edges_no_path(self):
        chart = latin_chart("abcde")
        assert chart.best_decoding() is None
        assert chart.best_score() == -math.inf

    def test_empty_input_decodes_to_empty_string(self):
        chart = latin_chart("")
        assert chart.best_decoding() == ""
        assert chart.best_score() == 0.0

    def test_simple_chain(self):
        chart = latin_chart("abc")
        _add_chain(chart, "abc")
        assert chart.best_decoding() == "abc"
        assert chart.best_score() == pytest.approx(3.0)

    def test_long_arc_wins(self):
        chart = latin_chart("abcd")
        _add_chain(chart, "abcd")
        chart.add_edge(ChartEdge(1, 3, "foo", 2.5), "foo")
        assert chart.best_decoding() == "afood"

    def test_gap_means_no_path(self):
        chart = latin_chart("abc")
        chart.add_edge(ChartEdge(0, 1, "a", 1.0), "foo")
        chart.add_edge(ChartEdge(2, 3, "c", 1.0), "foo")
        assert chart.best_decoding() is None

    def test_unreachable_edges_do_not_count(self):
        chart = latin_chart("abc")
        chart.add_edge(ChartEdge(0, 2, "ab", 1.0), "foo")
        chart.add_edge(ChartEdge(2, 3, "c", 1.0), "foo")
        # nothing ends at position 1
        chart.add_edge(ChartEdge(1, 3, "zz", 100.0), "foo")
        assert chart.best_decoding() == "abc"

    def test_negative_edge_on_best_path(self):
        chart = latin_chart("abc")
        chart.add_edge(ChartEdge(0, 1, "", -1000.0), "foo")
        chart.add_edge(ChartEdge(1, 3, "zz", 100.0), "foo")
        chart.add_edge(ChartEdge(0, 3, "abc", 3.0), "foo")
        assert chart.best_decoding() == "abc"

    def test_empty_transliterations(self):
        chart = latin_chart("ab")
        chart.add_edge(ChartEdge(0, 1, "a", 1.0), "foo")
        chart.add_edge(ChartEdge(1, 2, "", 1.0), "deleted")
        assert chart.best_decoding() == "a"

    def test_negative_scores(self):
        chart = latin_chart("ab")
        chart.add_edge(ChartEdge(0, 2, "x", -5.0), "foo")
        assert chart.best_decoding() == "x"

    def test_ties_go_to_first_added(self):
        chart = latin_chart("a")
        chart.add_edge(ChartEdge(0, 1, "x", 1.0), "first")
        chart.add_edge(ChartEdge(0, 1, "y", 1.0), "second")
        assert chart.best_decoding() == "x"

    def test_path_ties_go_to_first_relaxed(self):
        chart = latin_chart("ab")
        _add_chain(chart, "ab")
        # (0, 2) is relaxed before (1, 2) and an equal score does not replace it
        chart.add_edge(ChartEdge(0, 2, "AB", 2.0), "same score")
        assert chart.best_decoding() == "AB"

    def test_deterministic(self):
        chart = latin_chart("abcd")
        _add_chain(chart, "abcd")
        chart.add_edge(ChartEdge(0, 2, "x", 2.0), "tie")
        chart.add_edge(ChartEdge(2, 4, "y", 2.0), "tie")
        first = chart.best_decoding()
        assert all(chart.best_decoding() == first for _ in range(5))

    def test_adding_edges_never_lowers_best_score(self):
        chart = latin_chart("abcd")
        _add_chain(chart, "abcd")
        previous = chart.best_score()
        for edge in [ChartEdge(0, 2, "x", 0.5), ChartEdge(1, 4, "y", 10.0),
                     ChartEdge(3, 4, "z", -3.0), ChartEdge(0, 4, "w", 11.5)]:
            chart.add_edge(edge, "more")
            assert chart.best_score() >= previous
            previous = chart.best_score()
        assert chart.best_decoding() == "w"

    def test_codepoint_positions(self):
        chart = latin_chart("𝔸b")
        chart.add_edge(ChartEdge(0, 1, "A", 1.0), "foo")
        chart.add_edge(ChartEdge(1, 2, "b", 1.0), "foo")
        assert chart.best_decoding() == "Ab"

    def test_missing_backpointer_is_no_path(self, monkeypatch, caplog):
        chart = latin_chart("a")
        monkeypatch.setattr(chart, "_relax", lambda: ([0.0, 1.0], [None, None]))
        with caplog.at_level(logging.ERROR):
            assert chart.best_decoding() is None
        assert "no backpointer" in caplog.text
