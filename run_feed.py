"""Convenience script for building a Zhihu Daily feed locally."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure the src directory is on the Python path so the zhihupurify package can be imported
SRC_PATH = Path(__file__).resolve().parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from zhihupurify.config import FeedConfig  # noqa: E402  (import after path setup)
from zhihupurify.exceptions import FeedError  # noqa: E402
from zhihupurify.services.feed import FeedBuilder  # noqa: E402


def main(argv: list[str] | None = None) -> None:
    """Build the feed for the requested date and print it as JSON."""

    parser = argparse.ArgumentParser(description="Fetch a purified Zhihu Daily feed")
    parser.add_argument("date", help="Date segment of the index URL, e.g. 20240105")
    parser.add_argument("--config", help="Path to a JSON configuration file")
    parser.add_argument(
        "--partial",
        action="store_true",
        help="Skip stories whose detail cannot be fetched instead of failing",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        config = FeedConfig.from_file(args.config) if args.config else FeedConfig.from_env()
    except (FileNotFoundError, ValueError) as exc:
        logging.error("Could not load configuration: %s", exc)
        sys.exit(1)

    try:
        with FeedBuilder(config=config) as builder:
            if args.partial:
                result = builder.report_for_date(args.date)
            else:
                result = builder.feed_for_date(args.date)
    except FeedError as exc:
        logging.error("Failed to build feed for %s: %s", args.date, exc)
        sys.exit(1)

    print(result.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
