"""Daily readiness check: adjusts today's workout from a biometric snapshot.

Usage:
    python -m readiness_scheduler.daily --once      # single run (for cron)
    python -m readiness_scheduler.daily --daemon    # APScheduler loop
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from datetime import date
from pathlib import Path

from autoregulation_engine.engine import AutoregulationEngine
from autoregulation_engine.models.analysis import WorkoutAdjustment
from autoregulation_engine.settings import validate_settings
from biometric_sources.exceptions import SnapshotFormatError
from biometric_sources.snapshot import Snapshot, parse_snapshot

from readiness_scheduler.config import (
    DAILY_HOUR,
    DAILY_MINUTE,
    SNAPSHOT_PATH,
    settings_overrides,
)

logger = logging.getLogger(__name__)


def _load_snapshot(path: Path) -> Snapshot:
    """Load and parse a snapshot JSON file."""
    with open(path) as f:
        return parse_snapshot(json.load(f))


def daily_job(snapshot_path: Path | None = None, today: date | None = None) -> WorkoutAdjustment | None:
    """Execute one daily cycle: load the snapshot, adjust today's workout, check the week.

    Args:
        snapshot_path: Snapshot file; defaults to AUTOREG_SNAPSHOT.
        today: Date to evaluate; defaults to the snapshot's "today", then
            the system date.

    Returns:
        The WorkoutAdjustment for today, or None when the workout stands.
    """
    path = snapshot_path or SNAPSHOT_PATH
    logger.info("Starting daily readiness check from %s", path)

    # 1. Load snapshot
    try:
        snapshot = _load_snapshot(path)
    except FileNotFoundError:
        logger.error("Snapshot not found at %s", path)
        return None
    except json.JSONDecodeError as exc:
        logger.error("Snapshot at %s is not valid JSON: %s", path, exc)
        return None
    except SnapshotFormatError as exc:
        logger.error("Malformed snapshot section %s: %s", exc.section, exc)
        return None

    run_date = today or snapshot.today or date.today()

    # 2. Merge environment overrides over snapshot settings
    settings = validate_settings(
        {**dataclasses.asdict(snapshot.settings), **settings_overrides()}
    )

    # 3. Adjust today's workout
    workout = snapshot.store.get_workout(run_date) or snapshot.workout
    summary = snapshot.store.get_goal_summary(snapshot.goal.id) if snapshot.goal else None
    source = snapshot.source
    engine = AutoregulationEngine(catalog=snapshot.catalog)

    adjustment = engine.analyze_and_adjust_todays_workout(
        workout,
        source.recovery_records(),
        source.strain_records(),
        source.sleep_records(),
        today=run_date,
        config=settings,
        goal=snapshot.goal,
        summary=summary,
    )
    if adjustment is None:
        logger.info("No adjustment for %s", run_date.isoformat())
    else:
        adjusted = adjustment.adjusted_workout
        logger.info(
            "%s -> %s (%s, %s, confidence %.2f)",
            adjustment.original_workout.title,
            adjusted.title,
            adjusted.intensity.label,
            adjusted.duration,
            adjustment.confidence_score,
        )
        for note in adjusted.adjustment_notes:
            logger.info("  %s", note)

    # 4. Weekly program check
    program_id = (workout.program_id if workout else "") or (snapshot.goal.id if snapshot.goal else "")
    if program_id:
        weekly = engine.analyze_weekly_program_performance(
            program_id,
            source.recovery_records(),
            source.strain_records(),
            source.sleep_records(),
            as_of=run_date,
            config=settings,
            goal=snapshot.goal,
            summary=summary,
        )
        if weekly is not None:
            logger.info(
                "Weekly check for %s: %s (%s)",
                program_id,
                weekly.overall_reason,
                weekly.adjustment_type.name,
            )

    logger.info("Daily readiness check complete")
    return adjustment


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(description="Autoregulation daily readiness check")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    parser.add_argument("--snapshot", type=Path, default=None, help="Snapshot JSON path")
    args = parser.parse_args()

    if args.once:
        daily_job(args.snapshot)
    else:
        from apscheduler.schedulers.blocking import BlockingScheduler

        scheduler = BlockingScheduler()
        scheduler.add_job(
            daily_job,
            "cron",
            hour=DAILY_HOUR,
            minute=DAILY_MINUTE,
            id="daily_readiness_check",
            kwargs={"snapshot_path": args.snapshot},
        )
        logger.info(
            "Scheduler started, daily check at %02d:%02d",
            DAILY_HOUR,
            DAILY_MINUTE,
        )
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
