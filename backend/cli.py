"""
Command-line entry point for progression analytics.

Commands:
    snapshots INPUT [-o OUTPUT]   Compute snapshots from a JSON file of workout logs
    recompute --user-id ID        Recompute and store snapshots for a user
    targets --user-id ID          Print next-session targets
    analytics --user-id ID        Print the progression analytics report
"""
import argparse
import json
import logging
import sys
from datetime import date
from typing import List, Optional

import sentry_sdk

from application.exceptions import DatabaseNotConfiguredError, ProgressionDataError
from backend.core.progression_compute import compute_progression_snapshots
from backend.core.progression_service import ProgressionService
from backend.database import get_supabase_client
from backend.settings import Settings, get_settings
from infrastructure.db import SupabaseProgressionRepository

logger = logging.getLogger(__name__)


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized for progression analytics")


def build_service(settings: Settings) -> ProgressionService:
    """Wire the Supabase repository into a ProgressionService."""
    repo = SupabaseProgressionRepository(get_supabase_client(settings))
    return ProgressionService(repo, settings=settings)


def _load_workouts(path: str) -> list:
    with open(path, 'r') as f:
        data = json.load(f)
    # Accept either a bare list or {"workouts": [...]}
    if isinstance(data, dict):
        data = data.get("workouts", [])
    if not isinstance(data, list):
        raise ProgressionDataError("Input must be a list of workout logs")
    return data


def _write(payload, output: Optional[str] = None) -> None:
    text = json.dumps(payload, indent=2)
    if output:
        with open(output, 'w') as f:
            f.write(text + "\n")
    else:
        print(text)


def _split_names(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    return value.split(",")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Strength progression analytics")
    sub = parser.add_subparsers(dest="command", required=True)

    snap = sub.add_parser("snapshots", help="Compute snapshots from a workout log JSON file")
    snap.add_argument("input", help="Input JSON file path")
    snap.add_argument("-o", "--output", help="Output JSON file path (default: stdout)")

    recompute = sub.add_parser("recompute", help="Recompute and store snapshots for a user")
    recompute.add_argument("--user-id", required=True)

    targets = sub.add_parser("targets", help="Print next-session targets for a user")
    targets.add_argument("--user-id", required=True)
    targets.add_argument("--exercises", help="Comma-separated exercise names")

    analytics = sub.add_parser("analytics", help="Print the progression analytics report")
    analytics.add_argument("--user-id", required=True)
    analytics.add_argument("--today", type=date.fromisoformat, help="Anchor date (YYYY-MM-DD)")
    analytics.add_argument("--period-days", type=int, help="Adherence window in days")

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    _init_sentry(settings)

    try:
        if args.command == "snapshots":
            snapshots = compute_progression_snapshots(_load_workouts(args.input))
            _write([s.model_dump() for s in snapshots], args.output)
            return

        service = build_service(settings)

        if args.command == "recompute":
            result = service.recompute_snapshots(args.user_id)
        elif args.command == "targets":
            result = service.get_next_targets(args.user_id, _split_names(args.exercises))
        else:
            result = service.get_performance_analytics(
                args.user_id,
                today=args.today,
                period_days=args.period_days,
            )
        _write(result.to_dict())

    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        sys.exit(1)
    except (ProgressionDataError, DatabaseNotConfiguredError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
