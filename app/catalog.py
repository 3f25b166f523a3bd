"""Catalog stores: where search and report read product items from.

Both stores hand back complete listings on every call; nothing is cached
between calls, so a search and a report running at the same time may see
different snapshots of a changing catalog.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Protocol

from elasticsearch import ApiError, Elasticsearch, NotFoundError, TransportError, helpers

from .config import settings
from .errors import CatalogConfigError, CatalogUnavailableError
from .importer import load_products
from .models import ProductItem

logger = logging.getLogger(__name__)


class CatalogStore(Protocol):
    def list_all(self) -> List[ProductItem]: ...

    def count(self) -> int: ...


class InMemoryCatalog:
    def __init__(self, items: List[ProductItem] | None = None) -> None:
        self._items = list(items or [])

    @classmethod
    def from_file(cls, path: str | Path) -> "InMemoryCatalog":
        file_path = Path(path)
        if not file_path.exists():
            raise CatalogUnavailableError(f"Catalog file not found: {file_path}")
        items = [ProductItem(**product) for product in load_products(file_path)]
        logger.info("Loaded %s products from %s", len(items), file_path)
        return cls(items)

    def list_all(self) -> List[ProductItem]:
        return list(self._items)

    def count(self) -> int:
        return len(self._items)


class ElasticsearchCatalog:
    def __init__(self, client: Elasticsearch, index: str) -> None:
        self.client = client
        self.index = index

    def list_all(self) -> List[ProductItem]:
        try:
            hits = helpers.scan(self.client, index=self.index, query={"query": {"match_all": {}}})
            return [ProductItem(**hit["_source"]) for hit in hits]
        except NotFoundError:
            return []
        except (ApiError, TransportError, helpers.ScanError) as exc:
            logger.warning("Listing index %s failed: %s", self.index, exc)
            raise CatalogUnavailableError(f"Could not list products from {self.index}") from exc

    def count(self) -> int:
        try:
            stats = self.client.count(index=self.index)
        except NotFoundError:
            return 0
        except (ApiError, TransportError) as exc:
            logger.warning("Counting index %s failed: %s", self.index, exc)
            raise CatalogUnavailableError(f"Could not count products in {self.index}") from exc
        return int(stats.get("count", 0))


@lru_cache(maxsize=1)
def get_catalog() -> CatalogStore:
    if settings.catalog_backend == "elasticsearch":
        logger.info("Using Elasticsearch index %s at %s", settings.es_index, settings.es_host)
        return ElasticsearchCatalog(Elasticsearch(settings.es_host), settings.es_index)
    if settings.catalog_backend == "memory":
        return InMemoryCatalog.from_file(settings.catalog_path)
    raise CatalogConfigError(f"Unknown catalog backend: {settings.catalog_backend!r}")
