"""
Tests for tornelo_ranking.aggregator.
"""
import pytest

from conftest import record
from tornelo_ranking.aggregator import aggregate, total_players
from tornelo_ranking.extractor import extract


class TestAggregate:

    def test_merges_player_across_sections(self):
        result = aggregate({
            "A": [record("X", 5, rating=1500)],
            "B": [record("X", 4.5, rating=1550)],
        })

        assert len(result) == 1
        player = result[0]
        assert player.name == "X"
        assert player.rating == 1550
        assert player.total_points == 9.5
        assert player.sections == {"A": 5, "B": 4.5}
        assert player.rank == 1

    def test_keeps_highest_rating(self):
        result = aggregate({
            "A": [record("X", 1, rating=1600)],
            "B": [record("X", 1, rating=1580)],
        })

        assert result[0].rating == 1600

    def test_sorted_by_points_then_rating(self):
        result = aggregate({
            "A": [
                record("Low", 2, rating=2000),
                record("High", 5, rating=1200),
                record("TieWeak", 3, rating=1400),
                record("TieStrong", 3, rating=1700),
            ],
        })

        assert [p.name for p in result] == ["High", "TieStrong", "TieWeak", "Low"]
        assert [p.rank for p in result] == [1, 2, 3, 4]

    def test_full_ties_get_sequential_ranks_in_first_seen_order(self):
        result = aggregate({
            "A": [
                record("P1", 6, rating=1800),
                record("P2", 5, rating=1700),
                record("Second", 4, rating=1600),
                record("First", 4, rating=1600),
            ],
        })

        assert [(p.name, p.rank) for p in result[2:]] == [("Second", 3), ("First", 4)]

    def test_missing_section_has_no_key(self):
        result = aggregate({
            "A": [record("X", 3), record("Y", 2)],
            "B": [record("X", 1)],
        })

        y = next(p for p in result if p.name == "Y")
        assert y.sections == {"A": 2}

    def test_duplicate_in_same_section_overwrites_section_entry(self):
        result = aggregate({"A": [record("X", 3), record("X", 1)]})

        assert result[0].sections == {"A": 1}
        assert result[0].total_points == 4

    def test_names_are_not_normalized(self):
        result = aggregate({
            "A": [record("Jan Peeters", 3)],
            "B": [record("Jan  Peeters", 2)],
        })

        assert len(result) == 2

    def test_empty_sections(self):
        assert aggregate({}) == []
        assert aggregate({"A": [], "B": []}) == []

    def test_empty_section_contributes_nothing(self):
        with_empty = aggregate({"A": [record("X", 3)], "B": []})
        without = aggregate({"A": [record("X", 3)]})

        assert [p.to_dict() for p in with_empty] == [p.to_dict() for p in without]

    def test_fresh_result_each_run(self):
        results = {"A": [record("X", 3)]}

        first = aggregate(results)
        second = aggregate(results)

        assert first[0] is not second[0]
        assert second[0].total_points == 3


class TestAggregateProperties:

    @pytest.fixture
    def section_results(self, blok1_text, blok2_text):
        return {"blok-1": extract(blok1_text), "blok-2": extract(blok2_text)}

    def test_total_points_conserved(self, section_results):
        result = aggregate(section_results)

        expected = sum(r.points for records in section_results.values() for r in records)
        assert sum(p.total_points for p in result) == pytest.approx(expected)

    def test_rank_monotonic(self, section_results):
        result = aggregate(section_results)

        for a, b in zip(result, result[1:]):
            assert a.total_points >= b.total_points
            if a.total_points == b.total_points:
                assert a.rating >= b.rating
            assert b.rank == a.rank + 1

    def test_section_order_does_not_change_totals(self, section_results):
        forward = aggregate(section_results)
        backward = aggregate(dict(reversed(list(section_results.items()))))

        def as_totals(players):
            return {p.name: (p.total_points, p.rating, p.sections) for p in players}

        assert as_totals(forward) == as_totals(backward)

    def test_fixture_season_ranking(self, section_results):
        result = aggregate(section_results)

        assert [(p.rank, p.name, p.total_points, p.rating) for p in result] == [
            (1, "Jan Peeters", 7.0, 1850),
            (2, "Anna Smit", 6.0, 1710),
            (3, "Piet Janssens", 3.5, 1600),
            (4, "Eva Maes", 1.5, 1520),
            (5, "Karel De Smet", 0.5, 1450),
        ]


def test_total_players():
    assert total_players({"A": [record("X", 1), record("Y", 1)], "B": [record("X", 2)]}) == 3
    assert total_players({"A": []}) == 0
