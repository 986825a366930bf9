#!/usr/bin/env python3
"""
CLI for vehicle maintenance suggestions.

Shows which maintenance is due or coming up, the logged history,
and lets you log new maintenance or update the odometer.
"""

import argparse
import json
import logging
import math
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

import yaml
from tabulate import tabulate

from engine import (
    Category,
    MaintenanceRecord,
    Status,
    Suggestion,
    default_catalog,
    group_by_status,
    load_catalog,
    load_logbook,
    save_odometer,
    save_record,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format a distance for display."""
    if km is None or math.isinf(km):
        return "-"
    return f"{km:,.0f}"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_days(days: Optional[float]) -> str:
    """Format remaining days as months/days, e.g. '3mo 15d' or '-14d'."""
    if days is None or math.isinf(days):
        return "-"
    days = math.ceil(days)
    sign = "-" if days < 0 else ""
    months, rest = divmod(abs(days), 30)
    if months:
        return f"{sign}{months}mo {rest}d"
    return f"{sign}{rest}d"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Suggest command
# =============================================================================


def make_suggestion_table(suggestions: List[Suggestion]) -> List[List[str]]:
    """Convert suggestions to table rows."""
    rows = []
    for s in suggestions:
        days = format_days(s.due_info.remaining_days)
        if s.due_info.projected and days != "-":
            days = f"~{days}"
        rows.append(
            [
                s.title,
                f"{s.score}",
                format_km(s.due_info.remaining_km),
                days,
                s.due_info.due_date.isoformat() if s.due_info.due_date else "-",
                s.confidence.value,
            ]
        )
    return rows


STATUS_HEADINGS = {
    Status.CRITICAL: "CRITICAL:",
    Status.SOON: "SOON:",
    Status.UPCOMING: "UPCOMING:",
    Status.OK: "OK:",
}


def cmd_suggest(args):
    """Show ranked maintenance suggestions grouped by status."""
    logbook = load_logbook(args.vehicle_file)
    catalog = load_catalog(args.catalog) if args.catalog else default_catalog()
    today = date.fromisoformat(args.today) if args.today else date.today()

    suggestions = logbook.suggestions(catalog=catalog, today=today)

    if args.json:
        print(json.dumps([s.to_dict() for s in suggestions], indent=2, ensure_ascii=False))
        return 0

    vehicle = logbook.vehicle
    print(f"Vehicle: {logbook.name}")
    print(f"Odometer: {format_km(vehicle.odometer_km)} km (as of {today.isoformat()})")
    if vehicle.has_declared_pace:
        print(f"Average distance: {format_km(vehicle.average_distance_per_month_km)} km/month")
    print(f"Records: {len(logbook.records)}")
    print(f"Due now: {sum(1 for s in suggestions if s.is_due)}")
    print()

    if not suggestions:
        print("No maintenance suggestions.")
        return 0

    headers = ["Task", "Score", "Remaining (km)", "Remaining (time)", "Due (date)", "Confidence"]
    for status, group in group_by_status(suggestions).items():
        if not group:
            continue
        print(STATUS_HEADINGS[status])
        print(tabulate(make_suggestion_table(group), headers=headers, tablefmt="simple"))
        print()

    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(records: List[MaintenanceRecord]) -> List[List[str]]:
    """Convert maintenance records to table rows."""
    rows = []
    for record in records:
        service_date = record.service_date
        rows.append(
            [
                service_date.isoformat() if service_date else str(record.date),
                format_km(record.mileage_km),
                record.title,
                record.category.value if record.category else "-",
                record.performed_by or "-",
                format_cost(record.cost),
                truncate(record.notes),
            ]
        )
    return rows


def cmd_history(args):
    """View maintenance history."""
    category = Category.parse(args.category)
    if args.category and category is None:
        print(f"Error: Unknown category '{args.category}'")
        return 1

    logbook = load_logbook(args.vehicle_file)

    records = logbook.get_history_sorted(sort_by=args.sort, reverse=not args.asc)

    if category is not None:
        selected = logbook.get_records_for_category(category)
        records = [r for r in records if r in selected]

    if args.since:
        since = date.fromisoformat(args.since)
        records = [r for r in records if r.service_date and r.service_date >= since]

    total_cost = sum(r.cost for r in records if r.cost is not None)
    last = logbook.last_record

    print(f"Vehicle: {logbook.name}")
    print(f"Odometer: {format_km(logbook.vehicle.odometer_km)} km")
    if last:
        last_info = f"{last.service_date or last.date}"
        if last.mileage_km:
            last_info += f" @ {last.mileage_km:,.0f} km"
        print(f"Last maintenance: {last_info}")
    print(f"Total records: {len(logbook.records)}")
    if args.category or args.since:
        print(f"Showing: {len(records)} (filtered)")
    if total_cost > 0:
        print(f"Total cost: ${total_cost:,.2f}")
    print()

    if not records:
        print("No maintenance records found.")
        return 0

    headers = ["Date", "Mileage (km)", "Title", "Category", "Performed By", "Cost", "Notes"]
    print(tabulate(make_history_table(records), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args):
    """Add a new maintenance record."""
    category = Category.parse(args.category)
    if args.category and category is None:
        print(f"Error: Unknown category '{args.category}'")
        print("\nAvailable categories:")
        for c in Category:
            print(f"  {c.value}")
        return 1

    record = MaintenanceRecord(
        title=args.title,
        date=args.date or date.today().isoformat(),
        mileage_km=args.mileage,
        cost=args.cost,
        category=category,
        notes=args.notes,
        performed_by=args.by,
    )

    print(f"Adding maintenance record to {args.vehicle_file}:")
    print(f"  Title:    {record.title}")
    print(f"  Category: {category.value if category else '-'}")
    print(f"  Date:     {record.date}")
    if record.mileage_km:
        print(f"  Mileage:  {record.mileage_km:,.0f} km")
    if record.performed_by:
        print(f"  By:       {record.performed_by}")
    if record.notes:
        print(f"  Notes:    {record.notes}")
    if record.cost:
        print(f"  Cost:     ${record.cost:.2f}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_record(args.vehicle_file, record)
    print("Record saved.")

    return 0


# =============================================================================
# Update Odometer command
# =============================================================================


def cmd_update_odometer(args):
    """Update the current odometer reading."""
    logbook = load_logbook(args.vehicle_file)

    print(f"Vehicle: {logbook.name}")
    print(f"Current odometer: {format_km(logbook.vehicle.odometer_km)} km")
    print(f"New odometer:     {format_km(args.odometer)} km")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_odometer(args.vehicle_file, args.odometer)
    print("Odometer updated.")

    return 0


# =============================================================================
# Catalog command
# =============================================================================


def cmd_catalog(args):
    """List the maintenance tasks suggestions are drawn from."""
    catalog = load_catalog(args.catalog) if args.catalog else default_catalog()

    print(f"Tasks: {len(catalog)}")
    print()

    rows = []
    for task in catalog:
        interval = []
        if task.distance_interval_km:
            interval.append(f"{task.distance_interval_km:,.0f} km")
        if task.time_interval_days:
            interval.append(f"{task.time_interval_days} days")
        rows.append(
            [
                task.id,
                task.display_title,
                task.category.value,
                " / ".join(interval),
                task.declared_due_field or "-",
            ]
        )

    headers = ["Id", "Task", "Category", "Interval", "Declared Due"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance suggestions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/fit.yaml suggest
  %(prog)s vehicles/fit.yaml suggest --today 2026-10-01 --json
  %(prog)s vehicles/fit.yaml history --category oil
  %(prog)s vehicles/fit.yaml history --since 2024-01-01
  %(prog)s vehicles/fit.yaml log "Oil change" --category oil \\
      --mileage 58000 --by self
  %(prog)s vehicles/fit.yaml update-odometer 58000
  %(prog)s vehicles/fit.yaml catalog
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to logbook YAML file",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        help="Task catalog YAML file (default: bundled catalog)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Suggest subcommand
    suggest_parser = subparsers.add_parser(
        "suggest", help="Show what maintenance is due or coming up"
    )
    suggest_parser.add_argument(
        "--today",
        type=str,
        help="Reference date in YYYY-MM-DD format (default: today)",
    )
    suggest_parser.add_argument(
        "--json",
        action="store_true",
        help="Print suggestions as JSON",
    )

    # History subcommand
    history_parser = subparsers.add_parser("history", help="View maintenance history")
    history_parser.add_argument(
        "--category",
        type=str,
        help="Filter to a category (e.g., 'oil', 'brake_fluid')",
    )
    history_parser.add_argument(
        "--since",
        type=str,
        help="Show only records since date (YYYY-MM-DD)",
    )
    history_parser.add_argument(
        "--sort",
        choices=["date", "mileage", "category"],
        default="date",
        help="Sort order (default: date)",
    )
    history_parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new maintenance record")
    log_parser.add_argument("title", type=str, help="Record title (e.g., 'Oil change')")
    log_parser.add_argument(
        "--category",
        type=str,
        help="Maintenance category (e.g., 'oil', 'tire_rotation')",
    )
    log_parser.add_argument(
        "--date",
        type=str,
        help="Date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument("--mileage", type=float, help="Odometer (km) at time of maintenance")
    log_parser.add_argument("--by", type=str, help="Who performed the work")
    log_parser.add_argument("--notes", type=str, help="Notes about the maintenance")
    log_parser.add_argument("--cost", type=float, help="Cost of maintenance")
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Update Odometer subcommand
    odometer_parser = subparsers.add_parser(
        "update-odometer", help="Update current odometer reading"
    )
    odometer_parser.add_argument("odometer", type=float, help="Current odometer (km)")
    odometer_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    # Catalog subcommand
    subparsers.add_parser("catalog", help="List maintenance tasks")

    return parser


COMMANDS = {
    "suggest": cmd_suggest,
    "history": cmd_history,
    "log": cmd_log,
    "update-odometer": cmd_update_odometer,
    "catalog": cmd_catalog,
}


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1

    try:
        return COMMANDS[args.command](args)
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
