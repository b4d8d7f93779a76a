#!/usr/bin/env python3
"""
Weekly Calendar CLI.

Usage:
    weekcal.py add --day <day> --item "Text" [--location "Place"] [--recurring]
    weekcal.py show
    weekcal.py clear --day <day>
    weekcal.py archive-week
    weekcal.py history [--search TEXT] [--json]

Day names accept shorthands: m, t, w, th, f, sa (or s), su.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))
from archive import archive_summary, archive_week, search_archives
from store import Store
from theme import BOLD, BRIGHT_CYAN, BRIGHT_YELLOW, DIM, GREEN, YELLOW, color
from utils import capitalize_first, get_log_level

logger = logging.getLogger(__name__)


def _day_label(day_key: str) -> str:
    return color(capitalize_first(day_key), BRIGHT_CYAN, BOLD)


def _text(value: str) -> str:
    """argparse type for free text: reject arguments that are not valid UTF-8."""
    try:
        value.encode('utf-8')
    except UnicodeEncodeError:
        raise argparse.ArgumentTypeError(f"not valid UTF-8: {value!r}")
    return value


def cmd_add(args, store: Store):
    """Add an item to a day."""
    calendar = store.load_calendar()
    day_key = calendar.add_item(args.day, args.item, args.location, args.recurring)
    store.save_calendar(calendar)

    location_msg = color(f" at {args.location}", DIM) if args.location is not None else ''
    print(f"{color('Added', GREEN, BOLD)} '{color(args.item, BRIGHT_YELLOW)}{location_msg}' "
          f"{color('to', GREEN)} {_day_label(day_key)}")


def cmd_show(args, store: Store):
    store.load_calendar().show()


def cmd_clear(args, store: Store):
    """Remove every item from a day."""
    calendar = store.load_calendar()
    day_key = calendar.clear_day(args.day)
    store.save_calendar(calendar)
    print(f"{color('Cleared all items from', YELLOW, BOLD)} {_day_label(day_key)} "
          f"{color('successfully', YELLOW, BOLD)}")


def cmd_archive_week(args, store: Store):
    """Snapshot the week, then start a new one holding only recurring tasks."""
    calendar = store.load_calendar()
    preserved = archive_week(calendar, store)
    carried = calendar.carry_forward(preserved)
    store.save_calendar(calendar)

    print(color("Week archived and cleared successfully", GREEN, BOLD))
    if carried:
        print(f"Carried forward {carried} recurring task{'s' if carried != 1 else ''}")


def cmd_history(args, store: Store):
    """List archived weeks, or search their tasks."""
    archives = store.load_archive_log()

    if args.search:
        hits = search_archives(archives, args.search)
        if args.json:
            payload = [
                {'timestamp': h['timestamp'], 'day': h['day'], **h['task'].to_dict()}
                for h in hits
            ]
            print(json.dumps(payload, indent=2, ensure_ascii=False))
            return
        if not hits:
            print(f"No archived tasks matching '{args.search}'.")
            return
        for hit in hits:
            task = hit['task']
            location = f" (at {task.location})" if task.location is not None else ''
            print(f"{hit['timestamp']}  {capitalize_first(hit['day'])}: {task.description}{location}")
        return

    summary = archive_summary(archives)
    if args.json:
        print(json.dumps(summary, indent=2, ensure_ascii=False))
        return
    if not summary:
        print("No archived weeks yet.")
        return
    for entry in summary:
        print(f"{entry['timestamp']}  {entry['total']} task(s), {entry['recurring']} recurring")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='weekcal', description='A simple CLI weekly calendar')
    subparsers = parser.add_subparsers(dest='command', required=True)

    add_parser = subparsers.add_parser('add', help='Add an item to a specific day')
    add_parser.add_argument('-d', '--day', required=True, type=_text, help='Day of the week')
    add_parser.add_argument('-i', '--item', required=True, type=_text, help='Item to add')
    add_parser.add_argument('-l', '--location', type=_text, help='Location where the task will happen')
    add_parser.add_argument('-r', '--recurring', action='store_true',
                            help='Carry this item into the next week when archiving')
    add_parser.set_defaults(func=cmd_add)

    show_parser = subparsers.add_parser('show', help='Show all items for the week')
    show_parser.set_defaults(func=cmd_show)

    clear_parser = subparsers.add_parser('clear', help='Clear all items from a specific day')
    clear_parser.add_argument('-d', '--day', required=True, type=_text, help='Day of the week')
    clear_parser.set_defaults(func=cmd_clear)

    archive_parser = subparsers.add_parser('archive-week',
                                           help='Archive the current week and clear all items')
    archive_parser.set_defaults(func=cmd_archive_week)

    history_parser = subparsers.add_parser('history', help='List or search archived weeks')
    history_parser.add_argument('--search', type=_text, help='Only show archived tasks containing this text')
    history_parser.add_argument('--json', action='store_true', help='Output as JSON')
    history_parser.set_defaults(func=cmd_history)

    return parser


def main(argv=None):
    logging.basicConfig(level=get_log_level(), format="%(levelname)s: %(message)s")
    args = build_parser().parse_args(argv)
    store = Store()
    logger.debug(f"Using data directory {store.data_dir}")
    args.func(args, store)


if __name__ == '__main__':
    main()
