"""
Analytics module for civic_triage.

Dashboard rollups over issue snapshots.
"""

from .insights import (
    AIProcessingStats,
    DailyTrend,
    DashboardInsights,
    Hotspot,
    InsightsService,
    IssueStats,
    build_insights,
)

__all__ = [
    'AIProcessingStats',
    'DailyTrend',
    'DashboardInsights',
    'Hotspot',
    'InsightsService',
    'IssueStats',
    'build_insights',
]
