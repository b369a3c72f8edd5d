#!/usr/bin/env python3
"""
Unified CLI for vehicle upkeep tracking.

Commands:
  status         - Show what maintenance is overdue, due soon, or OK
  vehicles       - List tracked vehicles
  add-vehicle    - Add a vehicle
  update-miles   - Update a vehicle's current mileage
  delete-vehicle - Remove a vehicle (and its records unless --keep-records)
  log            - Add a new service record
  history        - View service history
  delete-record  - Remove a service record
  edit-record    - Change fields of a service record
  report         - Spend summary, optionally exported as CSV
  schedules      - List the built-in maintenance schedules
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from upkeep import (
    DEFAULT_SCHEDULES,
    DueItem,
    ServiceRecord,
    Status,
    ValidationError,
    Vehicle,
    label_for_type,
    parse_cost,
    parse_date,
    parse_service_type,
    tracked_types,
    type_token,
)
from upkeep.config import load_settings
from upkeep.csv_export import build_record_rows, to_csv
from upkeep.money import format_money_cents
from upkeep.reports import (
    compute_all_due,
    filter_records,
    orphaned_records,
    partition_by_status,
    records_for_vehicle,
    spend_summary,
    overdue,
    upcoming,
)
from upkeep.store import (
    delete_record,
    delete_vehicle,
    find_vehicle,
    load_records,
    load_vehicles,
    new_id,
    records_path,
    replace_record,
    save_records,
    save_vehicles,
    vehicles_path,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[int]) -> str:
    """Format mileage for display."""
    return f"{miles:,}" if miles is not None else "-"


def format_cost(cents: Optional[int]) -> str:
    """Format a cost in cents for display."""
    return f"${format_money_cents(cents)}" if cents is not None else "-"


def format_remaining(item: DueItem) -> str:
    """Format remaining miles for display."""
    if item.distance_to_due is None:
        return "-"
    return f"{item.distance_to_due:,}"


def format_time_remaining(item: DueItem) -> str:
    """Format remaining time for display (e.g., '3mo 15d' or '-2mo 5d')."""
    if item.days_to_due is None:
        return "-"

    days = abs(item.days_to_due)
    sign = "-" if item.days_to_due < 0 else ""
    months = days // 30
    remaining_days = days % 30
    if months > 0:
        return f"{sign}{months}mo {remaining_days}d"
    return f"{sign}{days}d"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Shared loading
# =============================================================================


class Context:
    """Paths, settings and loaded collections for one command."""

    def __init__(self, args, settings):
        self.settings = settings
        data_dir = args.data_dir or self.settings.data_dir
        self.vehicles_file = vehicles_path(data_dir)
        self.records_file = records_path(data_dir)
        self.vehicles = load_vehicles(self.vehicles_file)
        self.records = load_records(self.records_file)

    def vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        vehicle = find_vehicle(self.vehicles, vehicle_id)
        if vehicle is None:
            print(f"Error: Unknown vehicle '{vehicle_id}'")
        return vehicle

    def record(self, prefix: str) -> Optional[ServiceRecord]:
        """Find a record by id or a unique id prefix."""
        matches = [r for r in self.records if r.id.startswith(prefix)]
        if not matches:
            print(f"Error: Unknown record '{prefix}'")
            return None
        if len(matches) > 1:
            print(f"Error: Record id '{prefix}' is ambiguous ({len(matches)} matches)")
            return None
        return matches[0]

    def save_vehicles(self) -> bool:
        if not save_vehicles(self.vehicles_file, self.vehicles):
            print(f"Error: Could not save {self.vehicles_file}")
            return False
        return True

    def save_records(self) -> bool:
        if not save_records(self.records_file, self.records):
            print(f"Error: Could not save {self.records_file}")
            return False
        return True


# =============================================================================
# Status command
# =============================================================================


def make_due_table(items: List[DueItem]) -> List[List[str]]:
    """Convert due items to table rows."""
    rows = []
    for item in items:
        rows.append(
            [
                item.vehicle_label,
                item.type_label,
                format_miles(item.due_by_mileage),
                item.due_by_date or "-",
                format_remaining(item),
                format_time_remaining(item),
            ]
        )
    return rows


def cmd_status(args, ctx: Context):
    """Show what maintenance is overdue, due soon, or OK."""
    lead_miles = ctx.settings.lead_miles
    if args.lead_miles is not None:
        lead_miles = args.lead_miles
    lead_days = ctx.settings.lead_days
    if args.lead_days is not None:
        lead_days = args.lead_days
    today = args.today or date.today().isoformat()

    vehicles = ctx.vehicles
    if args.vehicle:
        vehicle = ctx.vehicle(args.vehicle)
        if vehicle is None:
            return 1
        vehicles = [vehicle]

    if not vehicles:
        print("No vehicles found.")
        return 0

    items = compute_all_due(vehicles, ctx.records, today, lead_miles, lead_days)
    buckets = partition_by_status(items)

    print(f"As of: {today}")
    print(f"Lead window: {lead_miles:,} mi / {lead_days} days")
    print(f"Vehicles: {len(vehicles)}")
    print()

    headers = [
        "Vehicle",
        "Service",
        "Due (mi)",
        "Due (date)",
        "Remaining (mi)",
        "Remaining (time)",
    ]

    late = overdue(items, lead_miles, lead_days)
    soon = upcoming(items, lead_miles, lead_days)

    if late:
        print("OVERDUE:")
        print(tabulate(make_due_table(late), headers=headers, tablefmt="simple"))
        print()

    if soon:
        print("DUE SOON:")
        print(tabulate(make_due_table(soon), headers=headers, tablefmt="simple"))
        print()

    ok = buckets[Status.OK]
    if args.all and ok:
        ok = sorted(ok, key=lambda i: (i.vehicle_label, i.type_label))
        print("OK:")
        print(tabulate(make_due_table(ok), headers=headers, tablefmt="simple"))
        print()
    elif not late and not soon:
        print("Nothing due.")

    return 0


# =============================================================================
# Vehicle commands
# =============================================================================


def cmd_vehicles(args, ctx: Context):
    """List tracked vehicles."""
    if not ctx.vehicles:
        print("No vehicles found.")
        return 0

    rows = [
        [v.id, v.label, format_miles(v.current_mileage)]
        for v in sorted(ctx.vehicles, key=lambda v: v.label)
    ]
    print(tabulate(rows, headers=["Id", "Vehicle", "Mileage"], tablefmt="simple"))

    orphans = orphaned_records(ctx.vehicles, ctx.records)
    if orphans:
        print()
        print(f"Warning: {len(orphans)} record(s) reference a missing vehicle")
    return 0


def cmd_add_vehicle(args, ctx: Context):
    """Add a vehicle."""
    if args.mileage < 0:
        print("Error: Mileage must not be negative")
        return 1

    vehicle = Vehicle(
        id=new_id(),
        make=args.make,
        model=args.model,
        year=args.year,
        current_mileage=args.mileage,
        nickname=args.nickname,
    )

    print(f"Adding vehicle to {ctx.vehicles_file}:")
    print(f"  Vehicle: {vehicle.label}")
    print(f"  Mileage: {vehicle.current_mileage:,}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    ctx.vehicles.append(vehicle)
    if not ctx.save_vehicles():
        return 1
    print(f"Vehicle saved. Id: {vehicle.id}")
    return 0


def cmd_update_miles(args, ctx: Context):
    """Update a vehicle's current mileage."""
    vehicle = ctx.vehicle(args.vehicle_id)
    if vehicle is None:
        return 1
    if args.mileage < 0:
        print("Error: Mileage must not be negative")
        return 1

    print(f"Vehicle: {vehicle.label}")
    print(f"Current mileage: {vehicle.current_mileage:,}")
    print(f"New mileage:     {args.mileage:,}")
    if args.mileage < vehicle.current_mileage:
        print("Warning: new mileage is lower than the current reading")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    vehicle.current_mileage = args.mileage
    if not ctx.save_vehicles():
        return 1
    print("Mileage updated.")
    return 0


def cmd_delete_vehicle(args, ctx: Context):
    """Remove a vehicle and, unless asked otherwise, its records."""
    vehicle = ctx.vehicle(args.vehicle_id)
    if vehicle is None:
        return 1

    own_records = [r for r in ctx.records if r.vehicle_id == vehicle.id]
    print(f"Deleting vehicle: {vehicle.label}")
    if args.keep_records:
        print(f"Keeping {len(own_records)} service record(s)")
    else:
        print(f"Deleting {len(own_records)} service record(s)")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    ctx.vehicles, ctx.records = delete_vehicle(
        ctx.vehicles, ctx.records, vehicle.id, cascade=not args.keep_records
    )
    if not ctx.save_vehicles() or not ctx.save_records():
        return 1
    print("Vehicle deleted.")
    return 0


# =============================================================================
# Record commands
# =============================================================================


def cmd_log(args, ctx: Context):
    """Add a new service record."""
    vehicle = ctx.vehicle(args.vehicle_id)
    if vehicle is None:
        return 1

    try:
        service_type = parse_service_type(args.type.lower())
        service_date = parse_date(args.date or date.today().isoformat()).isoformat()
        cost_cents = parse_cost(args.cost)
    except ValidationError as e:
        print(f"Error: {e}")
        return 1
    if args.mileage < 0:
        print("Error: Mileage must not be negative")
        return 1

    record = ServiceRecord(
        id=new_id(),
        vehicle_id=vehicle.id,
        type=service_type,
        service_date=service_date,
        mileage=args.mileage,
        cost_cents=cost_cents,
        shop_name=(args.shop or "").strip() or None,
        notes=(args.notes or "").strip() or None,
    )

    print(f"Adding service record to {ctx.records_file}:")
    print(f"  Vehicle: {vehicle.label}")
    print(f"  Service: {label_for_type(record.type)}")
    print(f"  Date:    {record.service_date}")
    print(f"  Mileage: {record.mileage:,}")
    if record.shop_name:
        print(f"  Shop:    {record.shop_name}")
    if record.notes:
        print(f"  Notes:   {record.notes}")
    if record.cost_cents is not None:
        print(f"  Cost:    {format_cost(record.cost_cents)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    ctx.records.insert(0, record)
    if not ctx.save_records():
        return 1
    print("Record saved.")
    return 0


def make_history_table(
    records: List[ServiceRecord], vehicles: List[Vehicle]
) -> List[List[str]]:
    """Convert service records to table rows."""
    labels = {v.id: v.label for v in vehicles}
    rows = []
    for record in records:
        rows.append(
            [
                record.service_date,
                labels.get(record.vehicle_id, record.vehicle_id),
                label_for_type(record.type),
                format_miles(record.mileage),
                record.shop_name or "-",
                format_cost(record.cost_cents),
                truncate(record.notes),
                record.id[:8],
            ]
        )
    return rows


def cmd_history(args, ctx: Context):
    """View service history."""
    if args.vehicle:
        vehicle = ctx.vehicle(args.vehicle)
        if vehicle is None:
            return 1
        entries = records_for_vehicle(ctx.records, vehicle.id)
    else:
        entries = sorted(
            ctx.records, key=lambda r: (r.service_date, r.mileage), reverse=True
        )

    if args.type:
        needle = args.type.lower()
        entries = [
            e
            for e in entries
            if needle in label_for_type(e.type).lower() or needle in type_token(e.type)
        ]

    if args.since:
        try:
            entries = filter_records(entries, date_from=args.since)
        except ValidationError as e:
            print(f"Error: {e}")
            return 1

    total_cost = sum(e.cost_cents for e in entries if e.cost_cents is not None)

    print(f"Total services: {len(ctx.records)}")
    if args.vehicle or args.type or args.since:
        print(f"Showing: {len(entries)} (filtered)")
    if total_cost > 0:
        print(f"Total cost: {format_cost(total_cost)}")
    print()

    if not entries:
        print("No service records found.")
        return 0

    headers = ["Date", "Vehicle", "Service", "Mileage", "Shop", "Cost", "Notes", "Id"]
    print(
        tabulate(
            make_history_table(entries, ctx.vehicles), headers=headers, tablefmt="simple"
        )
    )
    return 0


def cmd_delete_record(args, ctx: Context):
    """Remove a service record by id (a unique id prefix is enough)."""
    record = ctx.record(args.record_id)
    if record is None:
        return 1

    print(
        f"Deleting record: {label_for_type(record.type)} on {record.service_date}"
        f" @ {record.mileage:,} mi"
    )
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    ctx.records = delete_record(ctx.records, record.id)
    if not ctx.save_records():
        return 1
    print("Record deleted.")
    return 0


def cmd_edit_record(args, ctx: Context):
    """Change fields of an existing service record; unset flags keep their value."""
    old = ctx.record(args.record_id)
    if old is None:
        return 1

    try:
        service_type = old.type
        if args.type is not None:
            service_type = parse_service_type(args.type.lower())
        service_date = old.service_date
        if args.date is not None:
            service_date = parse_date(args.date).isoformat()
        cost_cents = old.cost_cents
        if args.cost is not None:
            cost_cents = parse_cost(args.cost)
    except ValidationError as e:
        print(f"Error: {e}")
        return 1
    mileage = old.mileage if args.mileage is None else args.mileage
    if mileage < 0:
        print("Error: Mileage must not be negative")
        return 1

    # An empty --shop or --notes clears the field
    shop_name = old.shop_name
    if args.shop is not None:
        shop_name = args.shop.strip() or None
    notes = old.notes
    if args.notes is not None:
        notes = args.notes.strip() or None

    record = ServiceRecord(
        id=old.id,
        vehicle_id=old.vehicle_id,
        type=service_type,
        service_date=service_date,
        mileage=mileage,
        cost_cents=cost_cents,
        shop_name=shop_name,
        notes=notes,
    )

    changes = [
        ("Service", label_for_type(old.type), label_for_type(record.type)),
        ("Date", old.service_date, record.service_date),
        ("Mileage", f"{old.mileage:,}", f"{record.mileage:,}"),
        ("Cost", format_cost(old.cost_cents), format_cost(record.cost_cents)),
        ("Shop", old.shop_name or "-", record.shop_name or "-"),
        ("Notes", old.notes or "-", record.notes or "-"),
    ]
    changes = [c for c in changes if c[1] != c[2]]
    if not changes:
        print("No changes.")
        return 0

    print(f"Editing record {record.id} in {ctx.records_file}:")
    for field, before, after in changes:
        print(f"  {field + ':':<8} {before} -> {after}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    ctx.records = replace_record(ctx.records, record)
    if not ctx.save_records():
        return 1
    print("Record saved.")
    return 0


# =============================================================================
# Report command
# =============================================================================


def cmd_report(args, ctx: Context):
    """Spend summary over a date range, optionally written as CSV."""
    vehicle_id = None
    if args.vehicle:
        vehicle = ctx.vehicle(args.vehicle)
        if vehicle is None:
            return 1
        vehicle_id = vehicle.id

    try:
        entries = filter_records(
            ctx.records,
            vehicle_id=vehicle_id,
            date_from=args.date_from,
            date_to=args.date_to,
        )
    except ValidationError as e:
        print(f"Error: {e}")
        return 1

    summary = spend_summary(entries)
    print(f"Range: {args.date_from or 'start'} to {args.date_to or 'end'}")
    print(f"Total spend: {format_cost(summary.total_cents)}")
    print(f"Records: {summary.count}")
    print(f"Avg cost / record: {format_cost(summary.average_cents)}")
    print()

    if summary.count:
        print("Spend by type:")
        rows = [[label_for_type(t), format_cost(c)] for t, c in summary.by_type]
        print(tabulate(rows, headers=["Type", "Total"], tablefmt="simple"))
        print()
        print("Spend by month:")
        rows = [[m, format_cost(c)] for m, c in summary.by_month]
        print(tabulate(rows, headers=["Month", "Total"], tablefmt="simple"))
    else:
        print("No data in the selected range.")

    if args.csv:
        csv_text = to_csv(build_record_rows(entries, ctx.vehicles))
        try:
            args.csv.write_text(csv_text + "\n" if csv_text else "")
        except OSError as e:
            logger.error("Failed to write CSV export %s: %s", args.csv, e)
            print(f"Error: Could not write {args.csv}")
            return 1
        print()
        print(f"Wrote {len(entries)} row(s) to {args.csv}")

    return 0


# =============================================================================
# Schedules command
# =============================================================================


def cmd_schedules(args, ctx: Context):
    """List the built-in maintenance schedules."""
    rows = []
    for service_type in tracked_types():
        rule = DEFAULT_SCHEDULES[service_type]
        interval = []
        if rule.mileage_interval:
            interval.append(f"{rule.mileage_interval:,} mi")
        if rule.month_interval:
            interval.append(f"{rule.month_interval} mo")
        rows.append([label_for_type(service_type), " / ".join(interval)])

    print(tabulate(rows, headers=["Service", "Interval"], tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle upkeep tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s add-vehicle Subaru BRZ 2015 --mileage 52000 --nickname Zippy
  %(prog)s status
  %(prog)s status --today 2024-07-15 --lead-miles 500
  %(prog)s log <vehicle-id> oil_change --mileage 53000 --cost 45.99 --shop "Quick Lube"
  %(prog)s history --vehicle <vehicle-id>
  %(prog)s report --from 2024-01-01 --to 2024-12-31 --csv report.csv
  %(prog)s update-miles <vehicle-id> 54000
""",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help=(
            "Directory holding vehicles.yaml and records.yaml "
            "(default: $UPKEEP_DATA_DIR or ~/.upkeep)"
        ),
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show what maintenance is overdue, due soon, or OK"
    )
    status_parser.add_argument("--vehicle", type=str, help="Limit to one vehicle id")
    status_parser.add_argument(
        "--today", type=str, help="Evaluate as of this date (YYYY-MM-DD)"
    )
    status_parser.add_argument(
        "--lead-miles", type=int, help="Miles before due that count as due soon"
    )
    status_parser.add_argument(
        "--lead-days", type=int, help="Days before due that count as due soon"
    )
    status_parser.add_argument(
        "--all", action="store_true", help="Also list items that are OK"
    )

    # Vehicle subcommands
    subparsers.add_parser("vehicles", help="List tracked vehicles")

    add_vehicle_parser = subparsers.add_parser("add-vehicle", help="Add a vehicle")
    add_vehicle_parser.add_argument("make", type=str)
    add_vehicle_parser.add_argument("model", type=str)
    add_vehicle_parser.add_argument("year", type=int)
    add_vehicle_parser.add_argument(
        "--mileage", type=int, default=0, help="Current odometer reading"
    )
    add_vehicle_parser.add_argument("--nickname", type=str, help="Display nickname")
    add_vehicle_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be added without saving"
    )

    update_miles_parser = subparsers.add_parser(
        "update-miles", help="Update a vehicle's current mileage"
    )
    update_miles_parser.add_argument("vehicle_id", type=str)
    update_miles_parser.add_argument("mileage", type=int, help="Current mileage")
    update_miles_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be updated without saving"
    )

    delete_vehicle_parser = subparsers.add_parser(
        "delete-vehicle", help="Remove a vehicle and its service records"
    )
    delete_vehicle_parser.add_argument("vehicle_id", type=str)
    delete_vehicle_parser.add_argument(
        "--keep-records",
        action="store_true",
        help="Keep the vehicle's service records (they become orphaned)",
    )
    delete_vehicle_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be deleted without saving"
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new service record")
    log_parser.add_argument("vehicle_id", type=str)
    log_parser.add_argument(
        "type", type=str, help="Service type (e.g., 'oil_change', 'inspection')"
    )
    log_parser.add_argument(
        "--date", type=str, help="Service date in YYYY-MM-DD format (default: today)"
    )
    log_parser.add_argument(
        "--mileage", type=int, required=True, help="Mileage at time of service"
    )
    log_parser.add_argument("--cost", type=str, help="Cost of service (e.g., '45.99')")
    log_parser.add_argument("--shop", type=str, help="Shop that performed the service")
    log_parser.add_argument("--notes", type=str, help="Notes about the service")
    log_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be added without saving"
    )

    # History subcommand
    history_parser = subparsers.add_parser("history", help="View service history")
    history_parser.add_argument("--vehicle", type=str, help="Limit to one vehicle id")
    history_parser.add_argument(
        "--type",
        type=str,
        help="Filter to service types containing text (case-insensitive, e.g., 'oil')",
    )
    history_parser.add_argument(
        "--since", type=str, help="Show only records since date (YYYY-MM-DD)"
    )

    delete_record_parser = subparsers.add_parser(
        "delete-record", help="Remove a service record"
    )
    delete_record_parser.add_argument(
        "record_id", type=str, help="Record id or a unique prefix of it"
    )
    delete_record_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be deleted without saving"
    )

    edit_record_parser = subparsers.add_parser(
        "edit-record", help="Change fields of a service record"
    )
    edit_record_parser.add_argument(
        "record_id", type=str, help="Record id or a unique prefix of it"
    )
    edit_record_parser.add_argument("--type", type=str, help="New service type")
    edit_record_parser.add_argument(
        "--date", type=str, help="New service date (YYYY-MM-DD)"
    )
    edit_record_parser.add_argument("--mileage", type=int, help="New service mileage")
    edit_record_parser.add_argument(
        "--cost", type=str, help="New cost (an empty string clears it)"
    )
    edit_record_parser.add_argument(
        "--shop", type=str, help="New shop name (an empty string clears it)"
    )
    edit_record_parser.add_argument(
        "--notes", type=str, help="New notes (an empty string clears them)"
    )
    edit_record_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would change without saving"
    )

    # Report subcommand
    report_parser = subparsers.add_parser(
        "report", help="Spend summary, optionally exported as CSV"
    )
    report_parser.add_argument("--vehicle", type=str, help="Limit to one vehicle id")
    report_parser.add_argument(
        "--from", dest="date_from", type=str, help="Start date (YYYY-MM-DD, inclusive)"
    )
    report_parser.add_argument(
        "--to", dest="date_to", type=str, help="End date (YYYY-MM-DD, inclusive)"
    )
    report_parser.add_argument(
        "--csv", type=Path, help="Also write the matching records to this CSV file"
    )

    # Schedules subcommand
    subparsers.add_parser("schedules", help="List the built-in maintenance schedules")

    return parser


COMMANDS = {
    "status": cmd_status,
    "vehicles": cmd_vehicles,
    "add-vehicle": cmd_add_vehicle,
    "update-miles": cmd_update_miles,
    "delete-vehicle": cmd_delete_vehicle,
    "log": cmd_log,
    "history": cmd_history,
    "delete-record": cmd_delete_record,
    "edit-record": cmd_edit_record,
    "report": cmd_report,
    "schedules": cmd_schedules,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValidationError as e:
        print(f"Error: {e}")
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx = Context(args, settings)

    try:
        return COMMANDS[args.command](args, ctx)
    except ValidationError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
