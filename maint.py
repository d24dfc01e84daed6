#!/usr/bin/env python3
"""
Unified CLI for the vehicle maintenance ledger.

Commands:
  init          - Create an empty ledger file
  set-authority - Bind the ledger authority (once)
  log           - Record a new maintenance event
  update        - Amend a record you authored
  show          - Show a single record
  history       - List records for a vehicle, newest first
  count         - Show how many records have been logged
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from maintlog import (
    HostContext,
    LedgerConfig,
    MaintenanceLog,
    MaintenanceRecord,
    Result,
    create_ledger,
    load_ledger,
    save_ledger,
)

DEFAULT_CALLER = "ST1TEST"

# =============================================================================
# Formatting helpers
# =============================================================================


def format_parts(parts: List[str]) -> str:
    """Format a parts list for display."""
    return ", ".join(parts) if parts else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_error(result: Result) -> str:
    """Describe a failed result, e.g. 'INVALID_VIN (101)'."""
    return f"{result.error.name} ({int(result.error)})"


def make_record_table(log: MaintenanceLog, record_ids: List[int]) -> List[List[str]]:
    """Convert record ids to table rows."""
    rows = []
    for record_id in record_ids:
        record = log.get_record(record_id)
        if record is None:
            continue
        rows.append(
            [
                str(record_id),
                str(record.timestamp),
                record.service_type,
                record.recorded_by,
                format_parts(record.parts),
                truncate(record.details),
            ]
        )
    return rows


def print_record(record_id: int, record: MaintenanceRecord) -> None:
    print(f"Record:       {record_id}")
    print(f"  VIN:        {record.vin}")
    print(f"  Service:    {record.service_type}")
    print(f"  Mechanic:   {record.mechanic}")
    print(f"  Parts:      {format_parts(record.parts)}")
    print(f"  Details:    {record.details or '-'}")
    print(f"  Timestamp:  {record.timestamp}")
    print(f"  Recorded by: {record.recorded_by}")


def host_for_write(args, stored_height: int) -> HostContext:
    """Build the host context for a write. Defaults to one block past the stored height."""
    host = HostContext(args.caller, stored_height)
    if args.height is not None:
        host.set_block_height(args.height)
    else:
        host.advance()
    return host


def commit(args, log: MaintenanceLog, host: HostContext) -> None:
    if args.dry_run:
        print("(dry run - no changes made)")
        return
    save_ledger(args.ledger_file, log, host.block_height)


# =============================================================================
# Init command
# =============================================================================


def cmd_init(args):
    """Create an empty ledger file."""
    if args.ledger_file.exists():
        print(f"Error: File already exists: {args.ledger_file}")
        return 1

    config = LedgerConfig.from_env(max_records=args.max_records)
    create_ledger(args.ledger_file, config)
    print(f"Created ledger {args.ledger_file} (capacity {config.max_records:,} records)")
    return 0


# =============================================================================
# Authority command
# =============================================================================


def cmd_set_authority(args):
    """Bind the ledger authority."""
    log, height = load_ledger(args.ledger_file)
    result = log.gate.set_authority_contract(args.principal)
    if not result.ok:
        print(f"Error: {format_error(result)}")
        if log.gate.authority is not None:
            print(f"Authority is already bound to {log.gate.authority}")
        return 1

    print(f"Authority bound to {args.principal}")
    if args.dry_run:
        print("(dry run - no changes made)")
        return 0
    save_ledger(args.ledger_file, log, height)
    return 0


# =============================================================================
# Log / update commands
# =============================================================================


def cmd_log(args):
    """Record a new maintenance event."""
    log, height = load_ledger(args.ledger_file)
    host = host_for_write(args, height)

    result = log.log_maintenance(host, args.vin, args.service_type, args.part, args.details)
    if not result.ok:
        print(f"Error: {format_error(result)}")
        return 1

    print(f"Logged record {result.value} to {args.ledger_file}:")
    print_record(result.value, log.get_record(result.value))
    print()
    commit(args, log, host)
    return 0


def cmd_update(args):
    """Amend an existing record."""
    log, height = load_ledger(args.ledger_file)
    host = host_for_write(args, height)

    result = log.update_maintenance(
        host, args.record_id, args.service_type, args.part, args.details
    )
    if not result.ok:
        print(f"Error: {format_error(result)}")
        return 1

    print(f"Updated record {args.record_id} in {args.ledger_file}:")
    print_record(args.record_id, log.get_record(args.record_id))
    print()
    commit(args, log, host)
    return 0


# =============================================================================
# Read commands
# =============================================================================


def cmd_show(args):
    """Show a single record."""
    log, _ = load_ledger(args.ledger_file)
    record = log.get_record(args.record_id)
    if record is None:
        print(f"No record with id {args.record_id}.")
        return 1
    print_record(args.record_id, record)
    return 0


def cmd_history(args):
    """List records for a vehicle, newest first."""
    log, _ = load_ledger(args.ledger_file)
    record_ids = log.get_records_by_vin(args.vin)

    print(f"Vehicle: {args.vin}")
    if not record_ids:
        print("No maintenance records found.")
        return 0
    print(f"Records: {len(record_ids)}")
    print()

    headers = ["ID", "Time", "Service", "Recorded By", "Parts", "Details"]
    print(tabulate(make_record_table(log, record_ids), headers=headers, tablefmt="simple"))
    return 0


def cmd_count(args):
    """Show how many records have been logged."""
    log, height = load_ledger(args.ledger_file)
    count = log.get_record_count().value

    print(f"Authority: {log.gate.authority or '(unbound)'}")
    print(f"Block height: {height}")
    print(f"Records: {count:,} of {log.max_records:,}")
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance ledger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ledgers/fleet.yaml init
  %(prog)s ledgers/fleet.yaml set-authority ST2AUTHORITY
  %(prog)s ledgers/fleet.yaml --as ST1MECHANIC log 1HGCM82633A004352 \\
      "Oil Change" --part "Oil Filter" --details "Changed engine oil"
  %(prog)s ledgers/fleet.yaml --as ST1MECHANIC update 0 "Tire Rotation" --part Tires
  %(prog)s ledgers/fleet.yaml history 1HGCM82633A004352
  %(prog)s ledgers/fleet.yaml show 0
""",
    )
    parser.add_argument(
        "ledger_file",
        type=Path,
        help="Path to ledger YAML file",
    )
    parser.add_argument(
        "--as",
        dest="caller",
        type=str,
        default=os.environ.get("MAINT_CALLER", DEFAULT_CALLER),
        help="Calling principal (default: $MAINT_CALLER or %(default)s)",
    )
    parser.add_argument(
        "--height",
        type=int,
        help="Block height for writes (default: stored height + 1)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would change without saving",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Create an empty ledger file")
    init_parser.add_argument(
        "--max-records",
        type=int,
        help="Ledger capacity (default: $MAINT_MAX_RECORDS or 10000)",
    )

    authority_parser = subparsers.add_parser(
        "set-authority", help="Bind the ledger authority (once)"
    )
    authority_parser.add_argument("principal", type=str, help="Authority principal")

    for name, help_text in (
        ("log", "Record a new maintenance event"),
        ("update", "Amend a record you authored"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        if name == "log":
            sub.add_argument("vin", type=str, help="Vehicle identification number")
        else:
            sub.add_argument("record_id", type=int, help="Record id to amend")
        sub.add_argument("service_type", type=str, help="Service type (e.g., 'Oil Change')")
        sub.add_argument(
            "--part",
            action="append",
            default=[],
            help="Part used (repeat for several)",
        )
        sub.add_argument("--details", type=str, default="", help="Free-text details")

    show_parser = subparsers.add_parser("show", help="Show a single record")
    show_parser.add_argument("record_id", type=int, help="Record id")

    history_parser = subparsers.add_parser(
        "history", help="List records for a vehicle, newest first"
    )
    history_parser.add_argument("vin", type=str, help="Vehicle identification number")

    subparsers.add_parser("count", help="Show how many records have been logged")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Validate ledger file exists
    if args.command != "init" and not args.ledger_file.exists():
        print(f"Error: File not found: {args.ledger_file}")
        return 1

    # Dispatch to command handler
    handlers = {
        "init": cmd_init,
        "set-authority": cmd_set_authority,
        "log": cmd_log,
        "update": cmd_update,
        "show": cmd_show,
        "history": cmd_history,
        "count": cmd_count,
    }
    try:
        return handlers[args.command](args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
