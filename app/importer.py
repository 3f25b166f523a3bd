"""Seed file parsing shared by both catalog stores."""
from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def _read_records(path: Path) -> list[dict]:
    # A Git LFS pointer is text, not the catalog; treat it as no data.
    with path.open("r", encoding="utf-8") as fh:
        first_line = fh.readline()
        if first_line.startswith("version https://git-lfs.github.com/spec/v1"):
            logger.warning("Catalog file %s is a Git LFS pointer; real data not downloaded", path)
            return []
        fh.seek(0)
        data = json.load(fh)
    if isinstance(data, dict):
        data = data.get("items", [])
    return list(data)


def prepare_product(raw: dict) -> dict:
    """Normalize a raw record so ``name`` and ``description`` are always strings.

    ``id`` is ``None`` when the record carries neither ``id`` nor ``externalId``.
    """
    name = raw.get("name") or raw.get("title") or ""
    description = raw.get("description") or raw.get("desc") or ""
    product_id = raw.get("id")
    if product_id is None:
        product_id = raw.get("externalId")

    product = {key: value for key, value in raw.items() if key not in {"title", "desc", "externalId"}}
    product.update({"id": product_id, "name": str(name), "description": str(description)})
    return product


def assign_ids(products: list[dict], source: object = "catalog") -> list[dict]:
    """Give every product a unique id.

    Records without an id, and repeats of an id already used, get the smallest
    positive integer not claimed by any explicit id in the batch.
    """
    claimed = {str(product["id"]) for product in products if product["id"] is not None}
    used: set[str] = set()
    next_id = 1
    for product in products:
        key = None if product["id"] is None else str(product["id"])
        if key is not None and key in used:
            logger.warning("Duplicate product id %r in %s; assigning a new one", product["id"], source)
            key = None
        if key is None:
            while str(next_id) in claimed or str(next_id) in used:
                next_id += 1
            product["id"] = next_id
            key = str(next_id)
        used.add(key)
    return products


def load_products(path: Path) -> list[dict]:
    if not path.exists():
        logger.warning("Catalog file %s is missing", path)
        return []
    products = [prepare_product(raw) for raw in _read_records(path)]
    return assign_ids(products, source=path)
