"""Pydantic models for catalog items and API payloads."""
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class ProductItem(BaseModel):
    """A catalog entry. Only ``name`` and ``description`` are matched on."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int | str | None = None
    name: str = Field(..., description="Product name")
    description: str = Field(..., description="Product description")


class SearchReport(BaseModel):
    productCount: int = Field(..., ge=0, description="Total number of catalog items")
    searchTermHits: Dict[str, NonNegativeInt] = Field(default_factory=dict, description="Match count per important term")


class HealthResponse(BaseModel):
    backend: str
    productCount: int
