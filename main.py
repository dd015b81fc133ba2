#!/usr/bin/env python3
"""
Body Weight Tracker
Logs one weight per day and renders history, calendar and chart output
from a JSON-file store.
"""

import argparse
import asyncio
import sys
from datetime import date, timedelta
from typing import List, Optional

from bodyweight.analysis.day_status import calendar_layout, month_day_statuses
from bodyweight.charts.geometry import ChartPadding, RenderedChart
from bodyweight.charts.sparkline import sparkline
from bodyweight.charts.weight_chart import build_weight_chart
from bodyweight.config_loader import load_config
from bodyweight.database.adapters import JsonFileAdapter
from bodyweight.database.weight_store import WeightRecordStore, chronological
from bodyweight.exceptions import InvalidSample, StorageFailure
from bodyweight.logging_utils import configure_logging
from bodyweight.utils import canonical_date_key, parse_date_key
from bodyweight.validation import parse_weight_input
from bodyweight.viz.weight_figure import save_weight_chart

SPARK_LEVELS = "▁▂▃▄▅▆▇█"


def parse_day(text: str, today: Optional[date] = None) -> date:
    """Parse 'today', 'yesterday' or a YYYY-MM-DD key."""
    today = today or date.today()
    lowered = text.strip().lower()
    if lowered == "today":
        return today
    if lowered == "yesterday":
        return today - timedelta(days=1)
    return parse_date_key(text.strip())


def parse_month(text: str):
    """Parse YYYY-MM into (year, month)."""
    try:
        year_text, month_text = text.split("-")
        year, month = int(year_text), int(month_text)
    except ValueError:
        raise ValueError(f"Month must look like YYYY-MM, got {text!r}")
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range: {month}")
    return year, month


def create_store(config: dict) -> WeightRecordStore:
    storage = config["storage"]
    return WeightRecordStore(JsonFileAdapter(storage["path"]), key=storage["key"])


def render_calendar(year: int, month: int, statuses: dict, today: Optional[date] = None) -> List[str]:
    """Text grid: '*' logged, '-' missing, no marker for future days."""
    layout = calendar_layout(year, month, statuses, today=today)
    lines = [f"{date(year, month, 1):%B %Y}", "  S    M    T    W    T    F    S"]

    cells = ["     "] * layout.leading_blanks
    for cell in layout.cells:
        marker = " " if cell.is_future else ("*" if cell.logged else "-")
        cells.append(f" {cell.day:>2}{marker} ")

    for start in range(0, len(cells), 7):
        lines.append("".join(cells[start:start + 7]).rstrip())

    lines.append(f"Logged {layout.logged_count} of {len(layout.cells)} days")
    return lines


def render_trend(values: List[float]) -> str:
    """Terminal sparkline from the general sparkline reducer."""
    height = float(len(SPARK_LEVELS) - 1)
    line = sparkline(values, width=max(len(values) - 1, 1), height=height)
    if line is None:
        return ""
    points = line.points if len(values) > 1 else line.points[:1]
    return "".join(SPARK_LEVELS[int(round(height - y))] for _, y in points)


async def cmd_log(store: WeightRecordStore, args, config: dict) -> int:
    weight = parse_weight_input(args.weight)
    at = parse_day(args.date) if args.date else None
    entry = await store.save(weight, at)
    print(f"Logged {entry.weight:g} for {entry.date}")
    return 0


async def cmd_show(store: WeightRecordStore, args, config: dict) -> int:
    latest = await store.latest()
    if latest is None:
        print("No weight logged yet")
        return 0

    stats = await store.get_stats()
    print(f"Latest: {latest.weight:g} on {latest.date} "
          f"(written {latest.recorded_at:%Y-%m-%d %H:%M})")
    print(f"Entries: {stats['total_entries']} ({stats['first_date']} to {stats['last_date']})")
    return 0


async def cmd_history(store: WeightRecordStore, args, config: dict) -> int:
    if args.start or args.end:
        start = parse_day(args.start) if args.start else date.min
        end = parse_day(args.end) if args.end else date.today()
        entries = await store.in_range(start, end)
    elif args.limit:
        entries = await store.recent(args.limit)
    else:
        entries = await store.load_all()

    if not entries:
        print("No entries")
        return 0

    for entry in chronological(entries):
        print(f"{entry.date}  {entry.weight:>7.1f}")
    return 0


async def cmd_delete(store: WeightRecordStore, args, config: dict) -> int:
    day = parse_day(args.date)
    if await store.delete(day):
        print(f"Deleted entry for {canonical_date_key(day)}")
        return 0
    print(f"No entry for {canonical_date_key(day)}")
    return 1


async def cmd_calendar(store: WeightRecordStore, args, config: dict) -> int:
    today = date.today()
    year, month = parse_month(args.month) if args.month else (today.year, today.month)
    statuses = month_day_statuses(year, month, await store.load_all())
    for line in render_calendar(year, month, statuses, today=today):
        print(line)
    return 0


async def cmd_chart(store: WeightRecordStore, args, config: dict) -> int:
    chart_config = config["chart"]
    width = args.width or chart_config["width"]
    height = args.height or chart_config["height"]
    padding = ChartPadding.from_dict(chart_config["padding"])

    entries = await store.load_all()
    if args.days:
        cutoff = date.today() - timedelta(days=args.days - 1)
        entries = [entry for entry in entries if entry.date >= canonical_date_key(cutoff)]

    chart = build_weight_chart(entries, width, height, padding)
    output_dir = args.output or config["viz"]["output_dir"]
    path = save_weight_chart(chart, output_dir, viz_config=config["viz"], width=width, height=height)

    if isinstance(chart, RenderedChart):
        summary = chart.summary
        print(f"Chart of {chart.sample_count} entries written to {path}")
        if summary.show_badge:
            print(f"Change: {summary.badge_text}")
        else:
            print("Change: none")
    else:
        print(f"{chart.message}. {chart.hint}.")
        print(f"Placeholder written to {path}")
    return 0


async def cmd_trend(store: WeightRecordStore, args, config: dict) -> int:
    entries = chronological(await store.recent(args.count))
    if not entries:
        print("No entries")
        return 0
    values = [entry.weight for entry in entries]
    print(f"{render_trend(values)}  {values[0]:g} -> {values[-1]:g}")
    return 0


async def cmd_export(store: WeightRecordStore, args, config: dict) -> int:
    count = await store.export_to_csv(args.path)
    print(f"Exported {count} entries to {args.path}")
    return 0


COMMANDS = {
    "log": cmd_log,
    "show": cmd_show,
    "history": cmd_history,
    "delete": cmd_delete,
    "calendar": cmd_calendar,
    "chart": cmd_chart,
    "trend": cmd_trend,
    "export": cmd_export,
}


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="bodyweight",
        description="Log one body weight per day and chart it.",
    )
    parser.add_argument("--config", default="config.toml", help="Configuration file")
    parser.add_argument("--data-dir", help="Override the storage directory")

    sub = parser.add_subparsers(dest="command", required=True)

    log = sub.add_parser("log", help="Record today's (or a given day's) weight")
    log.add_argument("weight", help="Weight value, 0 < weight < 1000")
    log.add_argument("--date", help="YYYY-MM-DD, 'today' or 'yesterday'")

    sub.add_parser("show", help="Show the latest entry")

    history = sub.add_parser("history", help="List entries oldest first")
    history.add_argument("--from", dest="start", help="First day (inclusive)")
    history.add_argument("--to", dest="end", help="Last day (inclusive)")
    history.add_argument("--limit", type=int, help="Only the N most recently written entries")

    delete = sub.add_parser("delete", help="Remove the entry for a day")
    delete.add_argument("date", help="YYYY-MM-DD, 'today' or 'yesterday'")

    cal = sub.add_parser("calendar", help="Logged / missing days of a month")
    cal.add_argument("--month", help="YYYY-MM, defaults to the current month")

    chart = sub.add_parser("chart", help="Write the weight chart as HTML")
    chart.add_argument("--output", help="Output directory")
    chart.add_argument("--width", type=float)
    chart.add_argument("--height", type=float)
    chart.add_argument("--days", type=int, help="Only the last N days")

    trend = sub.add_parser("trend", help="Terminal sparkline of recent entries")
    trend.add_argument("--count", type=int, default=14)

    export = sub.add_parser("export", help="Export entries to CSV")
    export.add_argument("path")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = create_parser().parse_args(argv)

    config = load_config(args.config)
    if args.data_dir:
        config["storage"]["path"] = args.data_dir
    configure_logging(config["logging"]["level"], config["logging"]["structured"])

    store = create_store(config)
    try:
        return asyncio.run(COMMANDS[args.command](store, args, config))
    except InvalidSample as e:
        print(f"Invalid weight: {e.reason}", file=sys.stderr)
        return 1
    except StorageFailure as e:
        print(f"Storage Error: {e}", file=sys.stderr)
        print("   Stored history could not be read or written.", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Input Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
