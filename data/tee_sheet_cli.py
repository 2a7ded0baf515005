"""Generate, print and optionally save an event's tee sheet from the command line.

    python3 data/tee_sheet_cli.py --init-schema
    python3 data/tee_sheet_cli.py <event_id> --start 08:30 --interval 10
    python3 data/tee_sheet_cli.py <event_id> --regenerate --save --ntp "3, 7" --ld 12
"""

import argparse
import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database.connection import DatabasePool
from database.db_manager import DatabaseManager
from teesheet import config
from teesheet.competitions import format_hole_numbers, parse_hole_numbers
from teesheet.context import load_event_context
from teesheet.editor import EditSession, open_event_session, regenerate
from teesheet.exceptions import TeeSheetInputError
from teesheet.handicap import format_handicap, format_handicap_index, handicaps_for_player
from teesheet.logging_config import setup_logging
from teesheet.saver import TeeSheetSaver
from teesheet.times import require_hhmm, start_time_on


def print_tee_sheet(session: EditSession, course_config) -> None:
    for i, group in enumerate(session.groups, start=1):
        print(f"\nGroup {i}  {group.time.strftime('%H:%M')}")
        for player in group.players:
            result = handicaps_for_player(player, course_config)
            guest = " (guest)" if player.is_guest else ""
            print(
                f"  {player.name + guest:<30} HI {format_handicap_index(player.handicap_index):>5}"
                f"  PH {format_handicap(result.playing_handicap):>4}"
            )
    if session.unassigned:
        print("\nUnassigned:")
        for player in session.unassigned:
            print(f"  {player.name}")


async def run(args) -> int:
    pool = DatabasePool()
    await pool.initialize(dsn=config.DATABASE_URL)
    db = DatabaseManager(pool.pool)

    try:
        if args.init_schema:
            await db.initialize_schema()
            print(f"Schema initialized from {db.schema_path}")
            if not args.event_id:
                return 0

        context = await load_event_context(db, args.event_id)
        if context is None:
            print(f"Event not found: {args.event_id}")
            return 1

        print(f"{context.event.name or 'Event'} - {context.course.name if context.course else 'no course'}")
        for note in context.assumptions:
            print(f"  note: {note}")

        session = open_event_session(context.event, context.members)
        if args.regenerate or not session.groups:
            start = None
            if args.start:
                require_hhmm(args.start)
                start = start_time_on(session.tee_sheet.start_time.date(), args.start)
            regenerate(
                session,
                context.course_config,
                start_time=start,
                interval_minutes=args.interval,
                confirmed=True,
            )

        print_tee_sheet(session, context.course_config)

        if not args.save:
            return 0

        ntp = parse_hole_numbers(args.ntp)
        ld = parse_hole_numbers(args.ld)
        result = await TeeSheetSaver(db.events).save(
            session,
            context.members,
            context.event.guests,
            context.course_config,
            notes=args.notes,
            nearest_to_pin_holes=ntp,
            longest_drive_holes=ld,
        )
        if not result.success:
            print(f"\nSave failed: {result.error}")
            return 1
        print(
            f"\nSaved {result.saved_group_count} groups / {result.saved_player_count} players"
            f" (NTP {format_hole_numbers(ntp)}, LD {format_hole_numbers(ld)})"
        )
        if not result.verified:
            print(f"Warning: save not verified: {result.error}")
            return 2
        return 0
    except TeeSheetInputError as e:
        print(f"Error: {e}")
        return 1
    finally:
        await pool.close()


def main():
    parser = argparse.ArgumentParser(description="Build and save society tee sheets")
    parser.add_argument("event_id", nargs="?", help="Event id (uuid)")
    parser.add_argument("--init-schema", action="store_true", help="Create tables before running")
    parser.add_argument("--regenerate", action="store_true", help="Replace any saved groups")
    parser.add_argument("--start", help="First tee time, HH:MM")
    parser.add_argument("--interval", type=int, help="Minutes between groups")
    parser.add_argument("--save", action="store_true", help="Save the tee sheet to the event")
    parser.add_argument("--notes", help="Tee sheet notes")
    parser.add_argument("--ntp", help='Nearest-the-pin holes, e.g. "3, 7"')
    parser.add_argument("--ld", help="Longest-drive holes")
    args = parser.parse_args()

    if not args.event_id and not args.init_schema:
        parser.error("event_id is required unless --init-schema is given")

    setup_logging(config.LOG_LEVEL)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
