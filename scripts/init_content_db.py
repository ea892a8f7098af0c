"""
CLI helper to create the content document the API serves.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from helpcenter.config import get_settings
from helpcenter.store import (
    CONTENT_COLLECTIONS,
    JsonFileDocumentStore,
    SqlDocumentStore,
    empty_content_document,
)

logger = logging.getLogger(__name__)


def build_document(seed_path: str | None) -> dict:
    doc = empty_content_document()
    if seed_path:
        with open(seed_path, "r", encoding="utf-8") as f:
            seed = json.load(f)
        for key in (*CONTENT_COLLECTIONS, "settings"):
            if key in seed:
                doc[key] = seed[key]
    return doc


def main() -> int:
    parser = argparse.ArgumentParser(description="Initialise the content document")
    parser.add_argument(
        "--seed",
        type=str,
        default=None,
        help="JSON file whose collections are copied into the new document",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing document",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")

    settings = get_settings()
    if settings.database_url:
        store = SqlDocumentStore(settings.database_url, name="content", default={})
        exists = bool(store.load())
        target = settings.database_url
    else:
        store = JsonFileDocumentStore(settings.content_db_path)
        exists = store.path.exists()
        target = str(store.path)

    if exists and not args.force:
        logger.error("%s already holds a content document (use --force)", target)
        return 1

    store.save(build_document(args.seed))
    logger.info("Wrote content document to %s", target)
    return 0


if __name__ == "__main__":
    sys.exit(main())
