"""Entry point: lays out the configured month and its neighbours."""

import argparse
import logging
import os
import sys
from datetime import date

from calendar_logic import minus_month, plus_month
from events import InvalidRange
from navigator import CalendarPager
from preview import month_text, render_month
from settings import initial_date, load_events, load_settings

logger = logging.getLogger("month_grid")


def _parse_month(value: str) -> date:
    try:
        year, month = value.split("-")
        return date(int(year), int(month), 1)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="month-grid",
        description="Lay out a month grid with events and write previews.",
    )
    parser.add_argument("--date", type=_parse_month, help="month to show (YYYY-MM)")
    parser.add_argument("--settings", help="settings JSON file")
    parser.add_argument("--width", type=int, help="month view width in pixels")
    parser.add_argument("--out", default=".", help="directory for preview images")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings(args.settings)
    events = load_events(settings)
    width = args.width or settings["month_view_width"]
    pager = CalendarPager(args.date or initial_date(settings), events)

    try:
        triple = pager.triple()
    except InvalidRange as exc:
        logger.error("Cannot lay out %s: %s", pager.date.strftime("%Y-%m"), exc)
        return 1

    print(month_text(triple.current, settings["day_names"]))

    os.makedirs(args.out, exist_ok=True)
    months = (minus_month(pager.date), pager.date, plus_month(pager.date))
    for d, cells in zip(months, triple):
        path = os.path.join(args.out, f"month-{d:%Y-%m}.png")
        render_month(cells, width, settings["day_names"]).save(path)
        logger.info("Wrote %s (%d cells)", path, len(cells))
    return 0


if __name__ == "__main__":
    sys.exit(main())
