"""Application configuration and constants."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable

DEFAULT_IMPORTANT_TERMS = "Cool,Amazing,Perfect,Kids"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
# Third-party loggers that otherwise keep their own levels under uvicorn.
LIBRARY_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "elastic_transport")


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def parse_terms(raw: str | Iterable[str]) -> tuple[str, ...]:
    """Split a comma-separated term list, dropping blanks and repeats."""
    parts = raw.split(",") if isinstance(raw, str) else raw
    terms: list[str] = []
    for part in parts:
        term = part.strip()
        if term and term not in terms:
            terms.append(term)
    if not terms:
        raise ValueError("At least one important term must be configured")
    return tuple(terms)


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    catalog_backend: str = _get_env("CATALOG_BACKEND", "memory").lower()
    catalog_path: str = _get_env("CATALOG_PATH", "products.json")
    es_host: str = _get_env("ES_HOST", "http://localhost:9200")
    es_index: str = _get_env("ES_INDEX", "products")
    load_on_startup: bool = _get_env("LOAD_ON_STARTUP", "true").lower() in {"1", "true", "yes"}
    important_terms: tuple[str, ...] = parse_terms(_get_env("IMPORTANT_TERMS", DEFAULT_IMPORTANT_TERMS))
    report_max_workers: int = int(_get_env("REPORT_MAX_WORKERS", "4"))
    log_level: str = _get_env("LOG_LEVEL", "INFO")


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Install one root handler and align library loggers to ``level``."""
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(level=level_name, format=LOG_FORMAT, force=True)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(level_name)
    logging.getLogger(__name__).debug("Logging configured at %s", level_name)
