#!/usr/bin/env python3
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from .config import config
from .errors import NoDataError
from .presets import ATTRIBUTE_CHOICES, PRESETS, build_request
from .session import ScrapeSession, describe_failure
from .status import StatusReporter

logger = logging.getLogger(__name__)


def _print_status(text: str, kind: str) -> None:
    print(text, file=sys.stderr)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose or config.enable_debug else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def cmd_scrape(args: argparse.Namespace) -> int:
    try:
        request = build_request(args.selector, args.attribute, args.preset)
    except KeyError as e:
        print(str(e).strip("'"), file=sys.stderr)
        return 2
    if not request.selector:
        print("Please enter a CSS selector (--selector or --preset)", file=sys.stderr)
        return 2

    session = ScrapeSession(status=StatusReporter(sink=None if args.json else _print_status))
    try:
        outcome = asyncio.run(
            session.scrape_url(
                args.url,
                request.selector,
                request.attribute,
                static=args.static,
                headless=False if args.headful else None,
            )
        )
    except Exception as e:
        logger.error(f"Scraping error: {e}")
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
    if not outcome.ok:
        if not args.json:
            info = describe_failure(outcome)
            print(f"{info['message']}. {info['suggestion']}", file=sys.stderr)
        return 1
    if not args.json:
        for line in session.preview():
            print(line)

    if args.export:
        try:
            path = session.export(args.export)
        except NoDataError as e:
            print(str(e), file=sys.stderr)
            return 0
        print(f"Saved {path}", file=sys.stderr)
    return 0


def cmd_presets(args: argparse.Namespace) -> int:
    for name, request in PRESETS.items():
        print(f"{name:10} {request.selector!r} -> {request.attribute}")
    print("attributes: " + ", ".join(ATTRIBUTE_CHOICES) + " (or any attribute name)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pagescrape", description="pagescrape - extract values from page elements by CSS selector")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="sub")

    p_scrape = sub.add_parser("scrape", help="Scrape a page")
    p_scrape.add_argument("url", help="Page URL")
    p_scrape.add_argument("-s", "--selector", help="CSS selector, e.g. 'a[href]'")
    p_scrape.add_argument("-a", "--attribute", help=f"One of {', '.join(ATTRIBUTE_CHOICES)} or any attribute name")
    p_scrape.add_argument("-p", "--preset", choices=sorted(PRESETS), help="Use a preset selector/attribute")
    p_scrape.add_argument("--static", action="store_true", help="Fetch HTML over HTTP instead of using a browser")
    p_scrape.add_argument("--headful", action="store_true", help="Show the browser window")
    p_scrape.add_argument("--export", metavar="DIR", help="Write scraped-data-<date>.csv into DIR")
    p_scrape.add_argument("--json", action="store_true", help="Print the outcome as JSON")
    p_scrape.set_defaults(func=cmd_scrape)

    p_presets = sub.add_parser("presets", help="List presets and attribute choices")
    p_presets.set_defaults(func=cmd_presets)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 2
    setup_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
