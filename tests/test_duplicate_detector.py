"""
Duplicate detection tests.

Coordinates are offset in latitude only: 0.00045 degrees is ~50 m,
0.009 degrees is ~1 km.
"""

import pytest

from civic_triage.duplicate_detector import (
    SIMILARITY_THRESHOLD,
    find_duplicates,
    score_pair,
)

LAT, LON = 12.9716, 77.5946


class TestScorePair:
    """Composite similarity between two issues."""

    def test_all_signals_fire(self, make_issue):
        """50 m apart, same category, 4/7 shared words, 2 days apart."""
        first = make_issue(id="a", category="pothole", days_old=2, lat=LAT, lon=LON,
                           description="big pothole on main road")
        second = make_issue(id="b", category="pothole", lat=LAT + 0.00045, lon=LON,
                            description="pothole on main road near market")

        match = score_pair(second, first)

        assert match.similarity == pytest.approx(0.4 + 0.3 * 4 / 7 + 0.2 + 0.1, abs=1e-6)
        assert match.reasons.proximity is True
        assert match.reasons.text_similar is True
        assert match.reasons.same_category is True
        assert match.reasons.recently_reported is True
        assert match.issue is first

    def test_text_flag_requires_more_than_half(self, make_issue):
        a = make_issue(description="a b c")
        b = make_issue(description="b c d")

        assert score_pair(a, b).reasons.text_similar is False

    def test_far_apart_is_not_proximate(self, make_issue):
        a = make_issue(lat=LAT, lon=LON)
        b = make_issue(lat=LAT + 0.009, lon=LON)

        assert score_pair(a, b).reasons.proximity is False

    def test_missing_location_is_never_proximate(self, make_issue):
        a = make_issue(lat=LAT, lon=LON)
        b = make_issue()

        assert score_pair(a, b).reasons.proximity is False
        assert score_pair(b, a).reasons.proximity is False

    def test_recency_is_symmetric(self, make_issue):
        old = make_issue(days_old=10)
        new = make_issue(days_old=0)

        assert score_pair(old, new).reasons.recently_reported is False
        assert score_pair(new, old).reasons.recently_reported is False

    def test_reasons_to_dict_uses_document_keys(self, make_issue):
        reasons = score_pair(make_issue(), make_issue()).reasons.to_dict()

        assert set(reasons) == {"proximity", "textSimilar", "sameCategory", "recentlyReported"}


class TestFindDuplicates:
    """Tests for find_duplicates over a snapshot."""

    def test_returns_match_for_nearby_similar_report(self, make_issue):
        first = make_issue(id="a", category="pothole", days_old=2, lat=LAT, lon=LON,
                           description="big pothole on main road")
        second = make_issue(id="b", category="pothole", lat=LAT + 0.00045, lon=LON,
                            description="pothole on main road near market")

        matches = find_duplicates(second, [first])

        assert len(matches) == 1
        assert matches[0].issue.id == "a"
        assert matches[0].similarity > SIMILARITY_THRESHOLD

    def test_candidate_excluded_by_id(self, make_issue):
        candidate = make_issue(id="a", lat=LAT, lon=LON)
        stored_copy = make_issue(id="a", lat=LAT, lon=LON)

        assert find_duplicates(candidate, [stored_copy]) == []

    def test_candidate_excluded_by_identity(self, make_issue):
        candidate = make_issue(lat=LAT, lon=LON)

        assert find_duplicates(candidate, [candidate]) == []

    def test_unpersisted_candidate_compares_against_records_without_id(self, make_issue):
        candidate = make_issue(lat=LAT, lon=LON)
        other = make_issue(lat=LAT, lon=LON)

        assert len(find_duplicates(candidate, [other])) == 1

    def test_exactly_threshold_is_not_a_match(self, make_issue):
        """Proximity 0.4 + category 0.2, disjoint text, 10 days apart: 0.6."""
        candidate = make_issue(id="a", category="pothole", lat=LAT, lon=LON,
                               description="dark lamp")
        other = make_issue(id="b", category="pothole", days_old=10, lat=LAT, lon=LON,
                           description="water leak")

        assert score_pair(candidate, other).similarity == 0.6
        assert find_duplicates(candidate, [other]) == []

    def test_identical_text_without_location_is_not_a_match(self, make_issue):
        """Text 0.3 + category 0.2 + recency 0.1 stops at 0.6."""
        candidate = make_issue(id="a", category="water", description="pipe burst here")
        other = make_issue(id="b", category="water", description="pipe burst here")

        assert find_duplicates(candidate, [other]) == []

    def test_sorted_by_similarity_descending(self, make_issue):
        candidate = make_issue(id="c", category="pothole", lat=LAT, lon=LON,
                               description="pothole on main road")
        weaker = make_issue(id="weak", category="pothole", lat=LAT, lon=LON,
                            description="pothole")
        stronger = make_issue(id="strong", category="pothole", lat=LAT, lon=LON,
                              description="pothole on main road")

        matches = find_duplicates(candidate, [weaker, stronger])

        assert [m.issue.id for m in matches] == ["strong", "weak"]
        assert matches[0].similarity == pytest.approx(1.0)
        assert matches[1].similarity == pytest.approx(0.775)

    def test_ties_keep_snapshot_order(self, make_issue):
        candidate = make_issue(id="c", lat=LAT, lon=LON)
        snapshot = [make_issue(id=str(i), lat=LAT, lon=LON) for i in range(4)]

        matches = find_duplicates(candidate, snapshot)

        assert [m.issue.id for m in matches] == ["0", "1", "2", "3"]

    def test_empty_snapshot(self, make_issue):
        assert find_duplicates(make_issue(), []) == []

    def test_never_returns_at_or_below_threshold(self, make_issue):
        candidate = make_issue(id="c", category="water", lat=LAT, lon=LON,
                               description="water pipe leak on street")
        snapshot = [
            make_issue(id="1", category="water", lat=LAT, lon=LON, description="leak"),
            make_issue(id="2", category="garbage", lat=LAT + 0.009, lon=LON),
            make_issue(id="3", category="water", days_old=30, description="water pipe leak"),
            make_issue(id="4", category="parks", lat=LAT, lon=LON, days_old=8),
        ]

        for match in find_duplicates(candidate, snapshot):
            assert match.similarity > SIMILARITY_THRESHOLD
            assert match.issue.id != "c"
