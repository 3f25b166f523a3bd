"""Linear-scan catalog search shared by the API, the report and the CLI."""
from __future__ import annotations

import logging
from time import perf_counter
from typing import Iterable, List

from .catalog import CatalogStore
from .matcher import item_matches, parse_query
from .models import ProductItem

logger = logging.getLogger(__name__)


def search(query: str | None, items: Iterable[ProductItem]) -> List[ProductItem]:
    """Return the items matching ``query`` in their original order.

    Duplicates in ``items`` are kept. A ``None`` query raises
    :class:`~app.errors.InvalidQueryError` instead of matching nothing.
    """
    parsed = parse_query(query)
    return [item for item in items if item_matches(parsed, item)]


class SearchService:
    """Runs :func:`search` against a fresh listing of the catalog store."""

    def __init__(self, catalog: CatalogStore) -> None:
        self.catalog = catalog

    def search(self, query: str | None) -> List[ProductItem]:
        parsed = parse_query(query)
        t0 = perf_counter()
        items = self.catalog.list_all()
        t1 = perf_counter()
        results = [item for item in items if item_matches(parsed, item)]
        t2 = perf_counter()
        logger.info(
            "search q=%r mode=%s scanned=%s hits=%s list=%.2fms match=%.2fms",
            query,
            parsed.mode.value,
            len(items),
            len(results),
            (t1 - t0) * 1000,
            (t2 - t1) * 1000,
        )
        return results
