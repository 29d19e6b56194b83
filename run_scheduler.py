#!/usr/bin/env python3
"""
Tutoring Schedule Conflict Checker.

This script checks proposed session times against a roster and reports
gaps, open slots and roster-wide conflicts.

Usage:
    python run_scheduler.py --roster ROSTER.json [--date YYYY-MM-DD] [options]

Examples:
    # Check a proposed session
    python run_scheduler.py --roster roster.json --date 2025-10-15 --time 14:30 --duration 60

    # Check while editing an existing session (never compared with itself)
    python run_scheduler.py --roster roster.json --date 2025-10-15 --time 15:00 --exclude s42

    # Gaps and open slots for a day
    python run_scheduler.py --roster roster.json --date 2025-10-15 --gaps --slots

    # Best-scored slots for an onsite session
    python run_scheduler.py --roster roster.json --date 2025-10-15 --smart --session-type onsite

    # Before restoring a vacation session
    python run_scheduler.py --roster roster.json --restore student_7 s42

    # Scan the whole roster and save JSON + CSV reports
    python run_scheduler.py --roster roster.json --scan --save-report
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional

from tutor_scheduler.engine import ConflictChecker, SlotAnalyzer
from tutor_scheduler.engine.time_utils import format_time_localized, minutes_to_time
from tutor_scheduler.models.conflict import ConflictResult, ConflictSeverity, SessionTimeInfo
from tutor_scheduler.models.session import SessionType
from tutor_scheduler.models.slot import SessionGap, SmartRecommendations, TimeSlot
from tutor_scheduler.reporting import (
    build_report,
    gaps_to_dataframe,
    scan_to_dataframe,
    slots_to_dataframe,
    smart_slots_to_dataframe,
)
from tutor_scheduler.roster_loader import load_roster
from tutor_scheduler.utils.config import config
from tutor_scheduler.utils.file_utils import generate_filename, save_csv, save_json
from tutor_scheduler.utils.logger import setup_logger


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_WARNING = 2
EXIT_INTERRUPTED = 130


def parse_arguments(argv: Optional[List[str]] = None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Check tutoring session times for conflicts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--roster",
        required=True,
        type=Path,
        help="Roster JSON file ({\"students\": [...], \"groups\": [...]})"
    )

    parser.add_argument("--date", help="Target date in YYYY-MM-DD format")
    parser.add_argument("--time", help="Proposed start time (HH:MM)")
    parser.add_argument("--duration", type=int, help="Proposed duration in minutes")
    parser.add_argument("--exclude", help="Session id being edited")

    parser.add_argument("--gaps", action="store_true", help="Show gaps between sessions on --date")
    parser.add_argument("--slots", action="store_true", help="Show all open slots on --date")
    parser.add_argument(
        "--suggested",
        action="store_true",
        help="Show curated slots on --date (common teaching hours first)"
    )
    parser.add_argument(
        "--smart",
        action="store_true",
        help="Show scored slots and day tips on --date"
    )
    parser.add_argument(
        "--session-type",
        choices=[t.value for t in SessionType],
        help="Type of the session being placed (used by --smart)"
    )
    parser.add_argument("--scan", action="store_true", help="Scan the whole roster for conflicts")

    parser.add_argument(
        "--restore",
        nargs=2,
        metavar=("OWNER_ID", "SESSION_ID"),
        help="Check whether restoring a cancelled/vacation session would conflict"
    )

    parser.add_argument(
        "--save-report",
        action="store_true",
        help="Save JSON and CSV reports under OUTPUT_DIR/reports"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)"
    )

    args = parser.parse_args(argv)

    needs_date = args.time or args.gaps or args.slots or args.suggested or args.smart
    if needs_date and not args.date:
        parser.error("--date is required with --time, --gaps, --slots, --suggested and --smart")

    if not (needs_date or args.scan or args.restore):
        parser.error(
            "nothing to do: pass --time, --gaps, --slots, --suggested, --smart, --scan or --restore"
        )

    return args


def display_conflict(title: str, result: ConflictResult):
    """Print a conflict result."""
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)
    print(f"Severity: {result.severity.value}   Type: {result.type.value}")

    if not result.has_conflict:
        print("✓ No conflicts")
        return

    for idx, detail in enumerate(result.conflicts, 1):
        print(f"{idx:2d}. [{detail.type.value:7s}] {detail.message}")
        print(f"    {detail.message_ar}")

    if result.suggestions:
        print("\nSuggested times:")
        for suggestion in result.suggestions:
            print(f"  - {suggestion.time}  {suggestion.label}  |  {suggestion.label_ar}")


def display_gaps(date: str, gaps: List[SessionGap]):
    """Print the session/gap table for a date."""
    print("\n" + "=" * 60)
    print(f"SESSIONS ON {date}")
    print("=" * 60)

    if not gaps:
        print("No active sessions")
        return

    for gap in gaps:
        gap_text = "-" if gap.gap_after is None else f"{gap.gap_after:4d}min"
        flag = f" ✗ {gap.conflict_type.value}" if gap.has_conflict else ""
        print(
            f"{minutes_to_time(gap.start_minutes)}-{minutes_to_time(gap.end_minutes)} | "
            f"{gap.owner.name:20s} | gap {gap_text} ({gap.gap_severity.value}){flag}"
        )


def display_slots(title: str, slots: List[TimeSlot]):
    print("\n" + "-" * 60)
    print(f"{title}: {len(slots)}")
    print("-" * 60)
    for slot in slots:
        print(f"  {slot.time}  {slot.time_localized:>10s}  {slot.period.value}")


def display_smart(recommendations: SmartRecommendations):
    print("\n" + "-" * 60)
    print(f"Smart slots: {len(recommendations.slots)}")
    print("-" * 60)
    for slot in recommendations.slots:
        tags = "، ".join(slot.tags)
        print(f"  {slot.time}  {slot.score:3d}  {slot.tier.value:7s}  {tags}")
    for tip in recommendations.tips:
        print(f"  {tip.icon} {tip.text}")


def display_scan(scan: Dict[str, ConflictResult]):
    print("\n" + "=" * 60)
    print("ROSTER SCAN")
    print("=" * 60)
    print(f"Sessions with conflicts: {len(scan)}")
    for session_id, result in scan.items():
        names = ", ".join(c.owner.name for c in result.conflicts)
        print(f"  {session_id:12s} {result.severity.value:8s} {result.type.value:8s} {names}")


def save_reports(report: dict, frames: dict, output_dir: Path):
    """
    Save the JSON report and one CSV per table.

    Args:
        report: JSON-ready report
        frames: Mapping of table name to DataFrame
        output_dir: Target directory
    """
    json_path = output_dir / generate_filename("schedule_report", "json")
    if save_json(report, json_path):
        print(f"\nReport saved to: {json_path}")

    for name, frame in frames.items():
        csv_path = output_dir / generate_filename(name, "csv")
        if save_csv(frame, csv_path):
            print(f"{name} table saved to: {csv_path}")


def exit_code_for(results: List[ConflictResult]) -> int:
    """ERROR anywhere -> 1, otherwise WARNING anywhere -> 2, else 0."""
    severities = {result.severity for result in results}
    if ConflictSeverity.ERROR in severities:
        return EXIT_ERROR
    if ConflictSeverity.WARNING in severities:
        return EXIT_WARNING
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_arguments(argv)

    logger = setup_logger(
        "tutor_scheduler",
        level=getattr(logging, args.log_level or config.log_level, logging.INFO)
    )

    try:
        logger.info("Validating configuration")
        config.validate()
        options = config.to_engine_options()

        roster_result = load_roster(args.roster)
        if roster_result.is_failure:
            logger.error(f"Failed to load roster: {roster_result.message}")
            print(f"ERROR: Failed to load roster\n{roster_result.message}")
            return EXIT_ERROR

        roster = roster_result.value
        checker = ConflictChecker(roster, options)
        analyzer = SlotAnalyzer(roster, options)

        checked: List[ConflictResult] = []
        report_parts = {"date": args.date}
        frames = {}

        if args.time:
            result = checker.check_conflict(
                SessionTimeInfo(date=args.date, start_time=args.time, duration=args.duration),
                exclude_session_id=args.exclude,
            )
            display_conflict(
                f"CHECK {args.date} {args.time} ({format_time_localized(args.time)})",
                result
            )
            checked.append(result)
            report_parts["conflict"] = result

        if args.restore:
            owner_id, session_id = args.restore
            result = checker.check_restore_conflict(owner_id, session_id)
            display_conflict(f"RESTORE {owner_id}/{session_id}", result)
            checked.append(result)
            report_parts.setdefault("conflict", result)

        if args.gaps:
            gaps = analyzer.get_sessions_with_gaps(args.date)
            display_gaps(args.date, gaps)
            report_parts["gaps"] = gaps
            frames["gaps"] = gaps_to_dataframe(gaps)

        if args.slots or args.suggested:
            slots = []
            if args.slots:
                slots = analyzer.get_available_slots(args.date, args.duration)
                display_slots("Open slots", slots)
            if args.suggested:
                suggested = analyzer.get_suggested_slots(args.date, args.duration)
                display_slots("Suggested slots", suggested)
                slots = slots or suggested
            report_parts["slots"] = slots
            frames["slots"] = slots_to_dataframe(slots)

        if args.smart:
            smart = analyzer.get_smart_recommendations(
                args.date,
                args.duration,
                session_type=SessionType(args.session_type) if args.session_type else None,
                exclude_session_id=args.exclude,
            )
            display_smart(smart)
            report_parts["smart"] = smart
            frames["smart_slots"] = smart_slots_to_dataframe(smart)

        if args.scan:
            scan = checker.scan_all_conflicts()
            display_scan(scan)
            checked.extend(scan.values())
            report_parts["scan"] = scan
            frames["scan"] = scan_to_dataframe(scan)

        if args.save_report:
            save_reports(build_report(**report_parts), frames, config.output_dir / "reports")

        return exit_code_for(checked)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED

    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        print(f"\nERROR: {e}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
