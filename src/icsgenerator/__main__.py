"""Entry point for running icsgenerator as a module.

Usage: python -m icsgenerator DOCUMENT.json [-o OUT.ics] [--past N] [--future N]
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pytz
from dateutil import parser as dateutil_parser

from icsgenerator.config.settings import load_config
from icsgenerator.core.ics_builder import generate_ics
from icsgenerator.core.models import CalendarDocument, YearRange
from icsgenerator.exceptions.errors import CalendarGeneratorError
from icsgenerator.utils.filenames import calendar_filename

logger = logging.getLogger("icsgenerator")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="icsgenerator",
        description="Generate an .ics calendar file from a JSON calendar document.",
    )
    parser.add_argument("document", help="Path to the calendar document (JSON)")
    parser.add_argument("-o", "--output", help="Output .ics path (default: derived from the calendar name)")
    parser.add_argument("--past", type=int, help="Years before the current year to include birthdays for")
    parser.add_argument("--future", type=int, help="Years after the current year to include birthdays for")
    parser.add_argument("--now", help="Generation time (ISO 8601), default: current UTC time")
    parser.add_argument("--env-file", help="Optional .env file with ICSGEN_* settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_config(args.env_file)
        year_range = YearRange(
            past=config.years_past if args.past is None else args.past,
            future=config.years_future if args.future is None else args.future,
        )
        now = dateutil_parser.parse(args.now) if args.now else datetime.now(pytz.utc)

        with open(args.document, encoding="utf-8") as fh:
            payload = json.load(fh)
        document = CalendarDocument.from_dict(payload, default_timezone=config.default_timezone)
    except (OSError, ValueError, CalendarGeneratorError) as e:
        logger.error("Could not load calendar document %s: %s", args.document, e)
        return 1

    content = generate_ics(document, year_range, now, config)

    output = Path(args.output) if args.output else Path(calendar_filename(document.name))
    try:
        output.write_bytes(content.encode("utf-8"))
    except OSError as e:
        logger.error("Could not write %s: %s", output, e)
        return 1

    logger.info("Wrote %s", output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
