"""
Tornelo Season Standings

Scrapes the standings of every tournament section, combines them into one
season ranking and writes the WordPress widget files. Meant to be run by hand
or from cron.
"""

import argparse
import logging
import sys
from typing import List, Optional

from tornelo_ranking.config import LOG_FILE, LOG_LEVEL, load_config
from tornelo_ranking.errors import ConfigError, NoDataError
from tornelo_ranking.pipeline import build_standings, load_section_texts, run
from tornelo_ranking.render import format_top, write_outputs
from tornelo_ranking.utils import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Combine Tornelo section standings into a season ranking.")
    parser.add_argument("--config", help="JSON file overriding the default configuration")
    parser.add_argument("--fetcher", choices=["http", "browser"], help="How section pages are fetched")
    parser.add_argument("--output-dir", help="Directory for standings.html / standings.json / tornelo-data.json")
    parser.add_argument("--from-dir", help="Parse saved debug-text-<section>.txt files instead of fetching")
    parser.add_argument("--debug-dir", help="Save the raw text of every fetched section page here")
    parser.add_argument("--no-cache", action="store_true", help="Always fetch fresh pages")
    parser.add_argument("--log-level", default=LOG_LEVEL, type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], help="Logging level")
    parser.add_argument("--log-file", default=LOG_FILE, help="Log file (empty string for console only)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file or None)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(str(e))
        return 2

    if args.fetcher:
        config.fetcher = args.fetcher
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.debug_dir:
        config.debug_dir = args.debug_dir
    if args.no_cache:
        config.cache_minutes = 0

    try:
        if args.from_dir:
            standings = build_standings(load_section_texts(args.from_dir, config.sections), config.sections)
        else:
            standings = run(config)
    except ConfigError as e:
        logger.error(str(e))
        return 2
    except NoDataError as e:
        logger.error(str(e))
        logger.error(
            "Possible issues: the page structure has changed, the content requires login, "
            "or the page needs a browser to render (--fetcher browser)"
        )
        return 1

    paths = write_outputs(standings, config.output_dir)

    print(f"Combined {len(standings.players)} unique players")
    for kind, path in paths.items():
        print(f"  {kind:<7} {path}")
    print()
    print("=" * 46)
    print("TOP 10 PLAYERS")
    print("=" * 46)
    print(format_top(standings, 10))
    return 0


if __name__ == "__main__":
    sys.exit(main())
