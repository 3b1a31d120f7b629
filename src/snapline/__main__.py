"""Entry point for `python -m snapline` or the `snapline` console script."""

from __future__ import annotations

import argparse
import logging
import sys

from snapline.chart_loader import ChartLoadError, load_chart
from snapline.colors import snap_color
from snapline.config import DEFAULT_KEY_COUNT
from snapline.modifiers import MODIFIERS, shift
from snapline.session import GameplaySession
from snapline.snap import snap_fraction
from snapline.timing import EmptyIndexError

logger = logging.getLogger("snapline")


def _category_label(category: int | None) -> str:
    return "none" if category is None else snap_fraction(category)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="snapline: beat snap breakdown of a chart")
    parser.add_argument("chart", help="MIDI or MusicXML file")
    parser.add_argument("--key-count", type=int, default=DEFAULT_KEY_COUNT, help="Number of lanes")
    parser.add_argument("--modifier", action="append", default=[], choices=sorted(MODIFIERS),
                        help="Modifier to apply before classifying (repeatable)")
    parser.add_argument("--offset", type=float, default=None, help="Offset in ms used by the shift modifier")
    parser.add_argument("--list", action="store_true", help="Print every object with its snap")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)
    if args.offset is not None and "shift" not in args.modifier:
        parser.error("--offset requires --modifier shift")
    if "shift" in args.modifier and args.offset is None:
        parser.error("--modifier shift requires --offset")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        chart = load_chart(args.chart, key_count=args.key_count)
        session = GameplaySession(chart)
        for name in args.modifier:
            modifier = MODIFIERS[name]
            if modifier is shift:
                session.apply(modifier, args.offset)
            else:
                session.apply(modifier)
        session.refresh_snaps()
    except (ChartLoadError, EmptyIndexError) as exc:
        logger.error("%s", exc)
        return 1

    try:
        print(f"{chart.title}: {len(session.objects)} objects, {len(session.timing_index)} timing points")
        if args.list:
            for obj in session.objects:
                r, g, b = snap_color(obj.snap_category)
                print(
                    f"  {obj.effective_start_time:10.1f}ms lane {obj.info.lane} "
                    f"{obj.effective_kind.name:<4} {_category_label(obj.snap_category):>5} #{r:02x}{g:02x}{b:02x}"
                )

        histogram = session.snap_histogram()
        for category in sorted(histogram, key=lambda c: (c is None, c or 0)):
            print(f"  {_category_label(category):>5}: {histogram[category]}")
        print(f"  peak density: {session.peak_density()} objects/s")
    finally:
        session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
