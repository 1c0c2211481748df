#!/usr/bin/env python3
"""
Interactive admin console harness for the reservation desk.

Usage:
  python3 scripts/console_local.py [--base-url http://localhost:4000] [--interval 4]

What it does:
- Loads the reservation list from a running API and keeps polling it in the background
- Prints a notice whenever new reservations arrive between polls
- Lets you filter, search, view, change status and delete reservations
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass

from timeless.application.exceptions import ActionInProgressError
from timeless.application.use_cases.admin_console import AdminConsole
from timeless.application.utils.formatting import format_reservation_summary
from timeless.application.utils.reservation_filters import FILTER_KEYS
from timeless.core.config import settings
from timeless.core.logging_config import configure_logging
from timeless.domain.entities.arrival_notice import ArrivalNotice
from timeless.wiring.dependencies import get_admin_console, start_console_polling

HELP = """Commands:
  list                     -> show reservations for the current filter/search
  filter <all|new|pending|confirmed|cancelled>
  search <text>            -> free-text search (empty clears it)
  view <id>                -> show one reservation (clears its NEW mark)
  status <id> <status>     -> change status
  delete <id>              -> delete permanently
  refresh                  -> reload now
  quit"""


def _print_notice(notice: ArrivalNotice) -> None:
    print(f"\n*** {notice.title}: {notice.message}")


def _print_list(console: AdminConsole) -> None:
    counts = console.counts()
    chips = "  ".join(f"{key} ({counts.get(key, 0)})" for key in FILTER_KEYS)
    print(f"\n{chips}")
    print(f"filter={console.status_filter} search={console.query!r}")
    print("-" * 72)
    rows = console.visible()
    if not rows:
        print("No reservations found.")
        return
    for r in rows:
        flag = "NEW " if console.is_new_arrival(r.id) else "    "
        print(
            f"{flag}{r.id:<8} {r.status.value:<10} {r.full_name:<22} "
            f"{r.check_in.isoformat()} -> {r.check_out.isoformat()}  {r.guests} guests"
        )


def _report(console: AdminConsole) -> None:
    if console.last_error:
        print(f"Error: {console.last_error}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Reservation desk console")
    parser.add_argument("--base-url", default=settings.API_BASE_URL)
    parser.add_argument("--interval", type=float, default=settings.CONSOLE_POLL_INTERVAL_SECONDS)
    args = parser.parse_args()

    configure_logging("WARNING")
    console = get_admin_console(base_url=args.base_url, on_notice=_print_notice)
    console.refresh()
    _report(console)
    poller = start_console_polling(console, args.interval)

    print("\nReservation Desk Console")
    print("-" * 72)
    print(f"API: {args.base_url}  (polling every {args.interval:g}s)")
    print(HELP)
    _print_list(console)

    try:
        while True:
            try:
                line = input("\n> ").strip()
            except (EOFError, KeyboardInterrupt):
                print("\nBye!")
                return

            if not line:
                continue
            cmd, _, rest = line.partition(" ")
            cmd = cmd.lower()
            rest = rest.strip()

            if cmd in ("quit", "exit"):
                print("Bye!")
                return
            if cmd == "help":
                print(HELP)
                continue
            if cmd == "list":
                _print_list(console)
                continue
            if cmd == "refresh":
                console.refresh()
                _report(console)
                _print_list(console)
                continue
            if cmd == "filter":
                try:
                    console.set_filter(rest or "all")
                except ValueError as e:
                    print(e)
                    continue
                _print_list(console)
                continue
            if cmd == "search":
                console.set_query(rest)
                _print_list(console)
                continue
            if cmd == "view":
                reservation = console.select(rest)
                print(format_reservation_summary(reservation) if reservation else "No such reservation in view.")
                continue
            if cmd == "status":
                reservation_id, _, status = rest.partition(" ")
                try:
                    updated = console.set_status(reservation_id, status.strip())
                except ActionInProgressError as e:
                    print(e.message)
                    continue
                if updated:
                    print(f"{updated.id} is now {updated.status.value}")
                _report(console)
                continue
            if cmd == "delete":
                try:
                    deleted = console.delete(rest)
                except ActionInProgressError as e:
                    print(e.message)
                    continue
                if deleted:
                    print(f"{rest} deleted")
                _report(console)
                continue

            print("Unknown command. Type 'help'.")
    finally:
        poller.stop(timeout=1.0)


if __name__ == "__main__":
    main()
