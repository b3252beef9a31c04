"""Command line entry point: print an RSS document for one source."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import Settings
from .core import FeedMaker
from .exceptions import RSSMakerError
from .writer import to_xml

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("must be positive")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rss-maker", description="Build RSS feeds from web sources.")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("-o", "--output", help="write the feed to this file instead of stdout")
    sub = parser.add_subparsers(dest="source", required=True)

    ng = sub.add_parser("natgeo", help="National Geographic latest stories")
    ng.add_argument("--url", help="listing page URL")

    vk = sub.add_parser("vk", help="VK community wall")
    vk.add_argument("domain", help="community screen name")
    vk.add_argument("--count", type=_positive_int, default=20, help="number of posts (default: 20)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    maker = FeedMaker(Settings.from_env())
    try:
        if args.source == "natgeo":
            feed = maker.natgeo(args.url)
        else:
            feed = maker.vk(args.domain, count=args.count)
    except RSSMakerError as e:
        logger.error("%s", e)
        return 1

    document = to_xml(feed)
    if args.output:
        with open(args.output, "wb") as fh:
            fh.write(document)
        logger.info("Wrote %d items to %s", len(feed.items), args.output)
    else:
        sys.stdout.buffer.write(document)
        sys.stdout.buffer.write(b"\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
