"""Command line entry point: run one search over a JSON content tree."""

import argparse
import json
import os
import sys

from .config import get_settings
from .models import SearchArgs, SearchRequest, SearchSurface
from .pipeline import SearchContentIndexStep
from .providers import load_content_tree
from .utils.errors import ConfigurationError
from .utils.logging import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Content search step")
    parser.add_argument(
        "--tree",
        required=True,
        help="Path to a JSON content tree",
    )
    parser.add_argument("--query", required=True, help="Free-text query")
    parser.add_argument("--root", help="Id of the entity bounding the search")
    parser.add_argument(
        "--database-root",
        help="Id of the database root (defaults to the first index root)",
    )
    parser.add_argument("--language", help="Preferred content language")
    parser.add_argument("--limit", type=int, help="Maximum number of results")
    parser.add_argument(
        "--surface",
        choices=[surface.value for surface in SearchSurface],
        default=SearchSurface.OTHER.value,
        help="UI surface issuing the search",
    )
    parser.add_argument(
        "--show-hidden",
        action="store_true",
        help="Include hidden items",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the search and print one JSON line per result."""
    args = parse_args(argv)

    # Command-line options take precedence over the environment
    if args.log_level:
        os.environ["CONTENT_SEARCH_LOG_LEVEL"] = args.log_level
    if args.show_hidden:
        os.environ["CONTENT_SEARCH_SEARCH__SHOW_HIDDEN_ITEMS"] = "true"

    get_settings.cache_clear()
    settings = get_settings()
    logger = configure_logging(settings.log_level)

    try:
        with open(args.tree, encoding="utf-8") as f:
            tree = json.load(f)
        repository, registry = load_content_tree(tree)
    except (OSError, json.JSONDecodeError, ConfigurationError) as e:
        logger.error(f"Could not load content tree {args.tree}: {e}")
        return 1

    indexes = tree.get("indexes", [])
    database_root = args.database_root or (indexes[0]["root"] if indexes else None)

    request = SearchRequest(
        text_query=args.query,
        root_scope=args.root,
        content_language=args.language,
        limit=args.limit if args.limit is not None else settings.search.default_limit,
        surface=SearchSurface(args.surface),
    )
    search_args = SearchArgs(request=request, database_root=database_root)

    step = SearchContentIndexStep(registry, config=settings.search)
    step.process(search_args)

    if search_args.use_legacy_search_engine:
        logger.warning("Content search is disabled; legacy search engine required")
        return 2

    for result in search_args.result.results:
        sys.stdout.write(result.model_dump_json() + "\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
