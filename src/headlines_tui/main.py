#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .app import HeadlinesApp
from .config import (
    get_int_setting,
    load_api_key,
    load_config,
    load_render_style,
    query_from_config,
    setup_logging,
)
from .errors import HeadlinesError
from .fetcher import ContentFetcher
from .session import Session
from .sources.manager import AVAILABLE_SOURCES, get_loader

logger = logging.getLogger("headlines")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Terminal News Reader")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=str, help="Write an INFO log to this file")
    parser.add_argument(
        "--source",
        choices=sorted(AVAILABLE_SOURCES),
        help="Where to load the article batch from",
    )
    parser.add_argument("--query", dest="q", type=str, help="Free-text search query")
    parser.add_argument("--category", type=str, help="News category (or RSS feed name)")
    parser.add_argument("--language", type=str, help="Two-letter language code")
    parser.add_argument("--days", type=int, help="Only articles from the last N days")
    parser.add_argument(
        "--sort-by",
        choices=["relevancy", "popularity", "publishedAt"],
        help="Result ordering",
    )
    parser.add_argument("--batch-size", type=int, help="Number of articles to load")
    parser.add_argument("--workers", type=int, help="Articles fetched in parallel")
    return parser


# --- Entrypoint ---
def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    log_path = setup_logging(args.debug, args.log_file)
    if log_path:
        print(f"Logging to: {log_path}", file=sys.stderr)

    config = load_config()
    if args.batch_size:
        config["batch_size"] = args.batch_size
    source_name = args.source or config.get("source", "newsapi")

    session = Session()
    try:
        query = query_from_config(
            config,
            {
                "q": args.q,
                "category": args.category,
                "language": args.language,
                "days": args.days,
                "sort_by": args.sort_by,
            },
            source_name=source_name,
        )
        workers = args.workers or get_int_setting(config, "workers", 1)
        api_key = load_api_key(config) if source_name == "newsapi" else None
        loader = get_loader(config, api_key, source_name)
        fetcher = ContentFetcher(timeout=config.get("http_timeout"))
        print("Fetching articles...", file=sys.stderr)
        session.populate(loader, fetcher, query, workers=workers)
    except (HeadlinesError, ValueError) as e:
        logger.error("Startup failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        app = HeadlinesApp(session, frame_style=load_render_style(config))
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)
        sys.exit(1)
    if app.return_code:
        sys.exit(app.return_code)


if __name__ == "__main__":
    main()
