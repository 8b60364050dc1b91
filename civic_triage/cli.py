#!/usr/bin/env python
"""
civic_triage CLI - classify descriptions and summarize issue exports.

Usage:
    civic-triage classify "Water pipe burst near the school"
    civic-triage optimize issues.json     # Department plans and routes
    civic-triage insights issues.json     # Dashboard rollups
    civic-triage serve                    # Run the HTTP API
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from pydantic import ValidationError

from civic_triage.analytics.insights import build_insights
from civic_triage.classifier import classify_issue
from civic_triage.config import EngineConfig
from civic_triage.logging_utils import configure_logging
from civic_triage.models import IssueRecord, load_issues
from civic_triage.resource_optimizer import ResourceOptimizer

logger = logging.getLogger(__name__)


class InputError(Exception):
    """Raised when an issues file cannot be read or validated."""


def read_issues(path: str) -> List[IssueRecord]:
    """Load a JSON array of stored issue documents."""
    try:
        raw = json.loads(Path(path).read_text())
    except OSError as e:
        raise InputError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise InputError(f"{path} must contain a JSON array of issues")

    try:
        return load_issues(raw)
    except ValidationError as e:
        raise InputError(f"{path} contains an invalid issue record:\n{e}") from e


def cmd_classify(args):
    """Classify a single description."""
    result = classify_issue(args.description, args.category)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    print(f"\nCategory:    {result.category} ({result.confidence:.0%} confidence)")
    print(f"Department:  {result.department}")
    print(f"Severity:    {result.severity}")
    print(f"Urgency:     {result.urgency}")
    print(f"Est. cost:   {result.estimated_cost}")
    print()


def cmd_optimize(args):
    """Show department plans for open issues."""
    issues = read_issues(args.file)
    result = ResourceOptimizer().optimize(issues)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
        return

    if not result.departments:
        print("\nNo pending issues.\n")
        return

    print(f"\n{'Department':<20} {'Issues':<7} {'High':<6} {'Cost':<10} {'Days':<5} {'Eff.':<6} {'Routes':<6}")
    print("-" * 65)
    for plan in result.departments:
        print(
            f"{plan.department:<20} {plan.total_issues:<7} {plan.high_priority_issues:<6} "
            f"{plan.total_cost:<10.0f} {plan.estimated_days:<5} {plan.efficiency:<6.0f} {len(plan.routes):<6}"
        )
    print()
    print(f"Pending: {result.total_pending_issues} | Total cost: {result.total_estimated_cost:.0f} "
          f"| Avg efficiency: {result.average_efficiency:.0f}%")

    for suggestion in result.suggestions:
        print(f"  [{suggestion.type}] {suggestion.message}")
    print()


def cmd_insights(args):
    """Show dashboard rollups for an issues export."""
    config = EngineConfig.from_env()
    issues = read_issues(args.file)
    insights = build_insights(issues, hotspot_limit=config.hotspot_limit)

    if args.json:
        print(json.dumps(insights.to_dict(), indent=2, default=str))
        return

    stats = insights.stats
    print(f"\n# Issues: {stats.total} total, {stats.pending} pending, {stats.resolved} resolved")
    if stats.avg_resolution_hours is not None:
        print(f"  Avg resolution time: {stats.avg_resolution_hours}h")

    print("\nTop categories:")
    for category, count in insights.top_categories:
        print(f"  - {category}: {count}")

    print("\nDepartment workload:")
    for department, count in insights.department_workload.items():
        print(f"  - {department}: {count}")

    if insights.hotspots:
        print("\nHotspots:")
        for hotspot in insights.hotspots:
            center = hotspot.center
            where = f"{center.latitude:.4f},{center.longitude:.4f}" if center else "unknown"
            print(f"  - {where}: {hotspot.count} issues, avg impact {hotspot.avg_impact:.0f}")
    print()


def cmd_serve(args):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("civic_triage.api.main:app", host=args.host, port=args.port, reload=args.reload)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="civic_triage CLI - issue classification and dashboard summaries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  civic-triage classify "Overflowing garbage bin, terrible smell"
  civic-triage classify "Lamp out" --category streetlight
  civic-triage optimize export.json --json
  civic-triage insights export.json
  civic-triage serve --port 8000
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # classify
    p_classify = subparsers.add_parser("classify", help="Classify an issue description")
    p_classify.add_argument("description", help="Free-text description")
    p_classify.add_argument("-c", "--category", default=None, help="Reporter-selected category")
    p_classify.add_argument("--json", action="store_true", help="Print JSON")
    p_classify.set_defaults(func=cmd_classify)

    # optimize
    p_optimize = subparsers.add_parser("optimize", help="Department plans and routes")
    p_optimize.add_argument("file", help="JSON array of issue records")
    p_optimize.add_argument("--json", action="store_true", help="Print JSON")
    p_optimize.set_defaults(func=cmd_optimize)

    # insights
    p_insights = subparsers.add_parser("insights", help="Dashboard rollups")
    p_insights.add_argument("file", help="JSON array of issue records")
    p_insights.add_argument("--json", action="store_true", help="Print JSON")
    p_insights.set_defaults(func=cmd_insights)

    # serve
    p_serve = subparsers.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("-p", "--port", type=int, default=8000)
    p_serve.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
