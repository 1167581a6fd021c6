#!/usr/bin/env python3
"""
PLATE SEARCH CLI - Command-line access to the plate corpus
==========================================================

    python search_cli.py seed data/license_plates.json
    python search_cli.py search "köln" --page 1 --limit 20
    python search_cli.py list

Results are printed as JSON. The database path comes from --db or
PLATE_DB_PATH.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from config import DB_PATH, LOG_FORMAT, LOG_LEVEL, PREFILTER_ENABLED, get_log_file
from db_adapter import RepositoryError, SqlitePlateRepository, load_plates_json
from search_service import InvalidPaginationError, PlateSearchService, resolve_pagination

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REPOSITORY_ERROR = 1
EXIT_INVALID_INPUT = 2


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging: stderr plus the optional log file"""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file = get_log_file()
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search German license-plate district codes")
    parser.add_argument("--db", default=DB_PATH, help="SQLite database file (default: %(default)s)")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="Replace the corpus with the plates of a JSON file")
    seed.add_argument("json_file", help="JSON list of {code, city, region, state}")

    sub.add_parser("list", help="Print every plate ordered by code")

    search = sub.add_parser("search", help="Ranked search")
    search.add_argument("query", help="Free-text query (code, city or state)")
    search.add_argument("--page", type=int, default=None)
    search.add_argument("--limit", type=int, default=None)
    search.add_argument("--no-prefilter", action="store_true",
                        help="Always score the full corpus")
    return parser


def _print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    repository = SqlitePlateRepository(args.db)
    try:
        if args.command == "seed":
            count = repository.replace_all(load_plates_json(args.json_file))
            _print_json({"seeded": count, "db": args.db})

        elif args.command == "list":
            _print_json([p.model_dump(mode="json") for p in repository.fetch_all()])

        elif args.command == "search":
            page, limit = resolve_pagination(args.page, args.limit)
            service = PlateSearchService(repository, prefilter=PREFILTER_ENABLED and not args.no_prefilter)
            _print_json(service.search(args.query, page, limit).to_dict())

    except InvalidPaginationError as e:
        logger.error(str(e))
        return EXIT_INVALID_INPUT
    except RepositoryError as e:
        logger.error(f"Repository failure: {e}")
        return EXIT_REPOSITORY_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
