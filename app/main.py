"""FastAPI application wiring the catalog search and report."""
from __future__ import annotations

import asyncio
import logging
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from .catalog import CatalogStore, ElasticsearchCatalog, get_catalog
from .config import configure_logging, settings
from .errors import CatalogUnavailableError, InvalidQueryError, ReportBuildError
from .indexing import ensure_index, import_if_empty, reindex_data
from .models import HealthResponse, ProductItem, SearchReport
from .report import ReportService
from .search import SearchService

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Product Catalog Search")


def get_important_terms() -> List[str]:
    return list(settings.important_terms)


@app.exception_handler(InvalidQueryError)
async def invalid_query_handler(request: Request, exc: InvalidQueryError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(CatalogUnavailableError)
async def catalog_unavailable_handler(request: Request, exc: CatalogUnavailableError) -> JSONResponse:
    logger.error("Catalog unavailable on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(ReportBuildError)
async def report_failed_handler(request: Request, exc: ReportBuildError) -> JSONResponse:
    logger.error("Report failed on term %r", exc.term, exc_info=exc.__cause__)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.on_event("startup")
async def startup_event() -> None:
    if settings.catalog_backend != "elasticsearch":
        return
    catalog = get_catalog()
    await ensure_index(catalog)
    if settings.load_on_startup:
        imported = await import_if_empty(catalog)
        if imported:
            logger.info("Imported %s products on startup", imported)


@app.get("/health", response_model=HealthResponse)
async def health(catalog: CatalogStore = Depends(get_catalog)) -> HealthResponse:
    count = await asyncio.to_thread(catalog.count)
    return HealthResponse(backend=settings.catalog_backend, productCount=count)


@app.get("/api/products/search", response_model=List[ProductItem])
async def search(
    query: str = Query(..., description="Raw query; wrap in double quotes for an exact match"),
    catalog: CatalogStore = Depends(get_catalog),
) -> List[ProductItem]:
    service = SearchService(catalog)
    return await asyncio.to_thread(service.search, query)


@app.get("/api/products/report", response_model=SearchReport)
async def report(
    catalog: CatalogStore = Depends(get_catalog),
    terms: List[str] = Depends(get_important_terms),
) -> SearchReport:
    service = ReportService(catalog, terms, max_workers=settings.report_max_workers)
    return await asyncio.to_thread(service.run)


@app.post("/reindex")
async def reindex(catalog: CatalogStore = Depends(get_catalog)) -> dict:
    if not isinstance(catalog, ElasticsearchCatalog):
        raise HTTPException(status_code=400, detail="Reindex requires the elasticsearch catalog backend")
    count = await reindex_data(catalog)
    return {"indexed": count}
