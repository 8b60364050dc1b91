"""
Tests for the remediation priority score.
"""

import pytest

from civic_triage.priority_scorer import (
    PRIORITY_MAX,
    calculate_priority,
    priority_breakdown,
)


class TestPriorityScorer:
    """Test suite for calculate_priority."""

    def test_defaults_impact_to_fifty(self, make_issue, now):
        """20 + 10 + 0 + 50*0.3 + 30 = 75."""
        issue = make_issue(category="general", severity="medium")

        priority, breakdown = priority_breakdown(issue, [], now=now)
        assert breakdown["impact_score_used"] == 50
        assert priority == 75

    def test_zero_impact_is_not_treated_as_missing(self, make_issue, now):
        """20 + 10 + 0 + 0 + 30 = 60."""
        issue = make_issue(category="general", severity="medium", impact_score=0)

        assert calculate_priority(issue, [], now=now) == 60

    def test_uses_stored_impact(self, make_issue, now):
        """10 + 15 + 0 + 40*0.3 + 0 = 37 (issue is 45 days old)."""
        issue = make_issue(category="garbage", severity="low", impact_score=40, days_old=45)

        assert calculate_priority(issue, [], now=now) == 37

    def test_duplicates_add_five_each(self, make_issue, now):
        issue = make_issue(category="general", severity="low", impact_score=20, days_old=30)
        # 10 + 10 + 6 + 0 = 26 before duplicates
        assert calculate_priority(issue, [], now=now) == 26
        assert calculate_priority(issue, ["a", "b", "c"], now=now) == 41

    def test_time_urgency_has_zero_floor(self, make_issue, now):
        issue = make_issue(category="general", severity="medium", impact_score=10, days_old=90)

        _, breakdown = priority_breakdown(issue, [], now=now)
        assert breakdown["time_urgency"] == 0

    def test_unweighted_category_uses_default(self, make_issue, now):
        issue = make_issue(category="safety", severity="medium", impact_score=0, days_old=30)

        _, breakdown = priority_breakdown(issue, [], now=now)
        assert breakdown["category"] == 10

    def test_capped_at_100(self, make_issue, now):
        issue = make_issue(category="water", severity="critical", impact_score=100)

        priority, breakdown = priority_breakdown(issue, [1, 2, 3], now=now)
        assert priority == PRIORITY_MAX
        assert breakdown["capped"] is True

    def test_rounds_fractional_impact_contribution(self, make_issue, now):
        """20 + 25 + 0 + 33*0.3 (9.9) + 0 = 54.9 -> 55."""
        issue = make_issue(category="pothole", severity="medium", impact_score=33, days_old=31)

        assert calculate_priority(issue, [], now=now) == 55

    @pytest.mark.parametrize("days_old,duplicates,impact", [
        (-3650, [], None),
        (3650, [], None),
        (0, list(range(40)), None),
        (15, [], None),
        (0, [], -1000),
        (3650, [], -1000),
    ])
    def test_always_integer_in_range(self, make_issue, now, days_old, duplicates, impact):
        issue = make_issue(category="water", severity="critical", days_old=days_old,
                           impact_score=impact)

        priority = calculate_priority(issue, duplicates, now=now)
        assert isinstance(priority, int)
        assert 0 <= priority <= 100

    def test_negative_total_floors_at_zero(self, make_issue, now):
        """40 + 35 + 0 + (-1000 * 0.3) + 30 = -195 -> 0."""
        issue = make_issue(category="water", severity="critical", impact_score=-1000)

        priority, breakdown = priority_breakdown(issue, [], now=now)
        assert breakdown["raw_total"] == -195
        assert priority == 0
