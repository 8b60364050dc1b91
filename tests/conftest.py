"""
Pytest configuration for civic_triage tests.

Test Tier System:
- fast (default): Pure unit tests over in-memory issue records
- medium: API TestClient tests, CLI runs touching the filesystem
- slow: reserved; excluded by default

Run tiers:
- pytest                          # Fast + medium (default addopts excludes slow)
- pytest -m fast                  # Unit tests only
- pytest -m medium                # API/CLI only

Note: Unmarked tests are auto-assigned to 'fast' tier. To add a new test:
- No marker needed for fast (unit) tests
- Add @pytest.mark.medium for API TestClient tests
- Tests marked @pytest.mark.integration (without tier) default to 'medium'

Time-dependent scores (impact, priority, recency) are computed against the
fixed `now` fixture so results do not drift with the wall clock.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from civic_triage.models import IssueRecord  # noqa: E402

FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Tier Auto-Assignment
# =============================================================================

def pytest_collection_modifyitems(config, items):
    """
    Automatically assign tier markers to unmarked tests.

    Tests are fast by default unless explicitly marked as medium or slow.
    Tests marked @pytest.mark.integration (but no tier) are assigned to
    'medium'.
    """
    for item in items:
        has_tier = (
            list(item.iter_markers(name='fast')) or
            list(item.iter_markers(name='medium')) or
            list(item.iter_markers(name='slow'))
        )
        if has_tier:
            continue

        if list(item.iter_markers(name='skip')):
            continue

        if list(item.iter_markers(name='integration')):
            item.add_marker(pytest.mark.medium)
            continue

        item.add_marker(pytest.mark.fast)


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def now():
    """Fixed reference time for scoring."""
    return FIXED_NOW


@pytest.fixture
def make_issue(now):
    """
    Factory for IssueRecords with sensible defaults.

    Usage:
        issue = make_issue(id="a", category="water", days_old=3,
                           lat=12.97, lon=77.59, priority=80)
    """
    def _make(days_old=0, lat=None, lon=None, **fields):
        fields.setdefault("description", "Issue reported by a citizen")
        fields.setdefault("created_at", now - timedelta(days=days_old))
        if lat is not None and lon is not None:
            fields["location"] = {"latitude": lat, "longitude": lon}
        return IssueRecord(**fields)

    return _make


@pytest.fixture(scope="session")
def project_root():
    """Return project root path (session-scoped for efficiency)."""
    return PROJECT_ROOT
