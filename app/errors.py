"""Error types raised by the search and report code paths."""
from __future__ import annotations


class CatalogSearchError(Exception):
    """Base class for errors surfaced to API and CLI callers."""


class InvalidQueryError(CatalogSearchError, ValueError):
    """The query was absent. Signals caller misuse, never retried."""


class CatalogUnavailableError(CatalogSearchError):
    """The catalog store could not list or count items."""


class ReportBuildError(CatalogSearchError):
    """A per-term search failed, so no report was produced."""

    def __init__(self, term: str) -> None:
        super().__init__(f"Search for report term {term!r} failed")
        self.term = term


class CatalogConfigError(CatalogSearchError, ValueError):
    """The configured catalog backend is unknown."""
