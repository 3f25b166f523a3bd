"""Elasticsearch index maintenance for the ``elasticsearch`` catalog backend."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable

from elasticsearch import helpers
from elasticsearch.exceptions import BadRequestError, NotFoundError

from .catalog import ElasticsearchCatalog
from .config import settings
from .importer import load_products

logger = logging.getLogger(__name__)

# Matching happens in Python, so the mapping only needs to store the raw
# strings; ``keyword`` sub-fields keep exact values available for inspection.
PRODUCT_MAPPING = {
    "mappings": {
        "dynamic": True,
        "properties": {
            "id": {"type": "keyword"},
            "name": {"type": "text", "fields": {"raw": {"type": "keyword"}}},
            "description": {"type": "text", "fields": {"raw": {"type": "keyword", "ignore_above": 8191}}},
        },
    }
}


def _iter_actions(index: str, products: Iterable[dict]) -> Iterable[dict]:
    for product in products:
        yield {
            "_index": index,
            "_id": str(product["id"]),
            "_source": product,
        }


async def ensure_index(catalog: ElasticsearchCatalog) -> None:
    """Create the products index if it is missing."""

    indices = catalog.client.indices
    if await asyncio.to_thread(indices.exists, index=catalog.index):
        return
    logger.info("Creating index %s", catalog.index)
    try:
        await asyncio.to_thread(indices.create, index=catalog.index, body=PRODUCT_MAPPING)
    except BadRequestError as exc:
        if getattr(exc, "error", "") == "resource_already_exists_exception":
            logger.info("Index %s was created concurrently", catalog.index)
            return
        logger.exception("Failed to create index %s", catalog.index)
        raise


async def import_products(catalog: ElasticsearchCatalog, path: Path | None = None) -> int:
    products = load_products(path or Path(settings.catalog_path))
    if not products:
        return 0
    actions = list(_iter_actions(catalog.index, products))
    await asyncio.to_thread(helpers.bulk, catalog.client, actions, refresh=True)
    logger.info("Imported %s products into %s", len(actions), catalog.index)
    return len(actions)


async def import_if_empty(catalog: ElasticsearchCatalog, path: Path | None = None) -> int:
    existing = await asyncio.to_thread(catalog.count)
    if existing:
        logger.info("Index %s already holds %s products; skipping import", catalog.index, existing)
        return 0
    return await import_products(catalog, path)


async def reindex_data(catalog: ElasticsearchCatalog, path: Path | None = None) -> int:
    """Drop and rebuild the index from the seed file."""
    try:
        await asyncio.to_thread(catalog.client.indices.delete, index=catalog.index)
    except NotFoundError:
        logger.info("Index %s did not exist before reindex", catalog.index)
    await ensure_index(catalog)
    return await import_products(catalog, path)
