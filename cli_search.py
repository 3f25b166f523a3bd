"""Terminal client that reuses the in-process search and report logic."""
from __future__ import annotations

import argparse
from pathlib import Path
from time import perf_counter
from typing import Iterable

from app.catalog import get_catalog
from app.config import configure_logging, settings
from app.errors import CatalogSearchError
from app.models import SearchReport
from app.report import ReportService
from app.search import SearchService

MAX_RESULTS = 100
GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"


def perform_query(query: str) -> tuple[list, float]:
    service = SearchService(get_catalog())
    t0 = perf_counter()
    results = service.search(query)
    return results, (perf_counter() - t0) * 1000


def interactive_shell() -> None:
    print("Interactive catalog search. Type 'exit' to quit.")
    while True:
        try:
            query = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if query.strip().lower() in {"exit", "quit"}:
            return
        results, elapsed = perform_query(query)
        pretty_print_results(query, results, elapsed)


def pretty_print_results(query: str, results: list, elapsed_ms: float) -> None:
    color = GREEN if elapsed_ms < 200 else RED
    print(f"Query: {query} | results: {len(results)} | took: {color}{elapsed_ms:.1f} ms{RESET}")
    for idx, item in enumerate(results[:MAX_RESULTS], start=1):
        print(f"  {idx:02d}. {item.id} | {item.name} | {item.description}")


def pretty_print_report(report: SearchReport) -> None:
    print(f"Products: {report.productCount}")
    width = max(len(term) for term in report.searchTermHits)
    for term, hits in report.searchTermHits.items():
        print(f"  {term:<{width}}  {hits}")


def batch_mode(file_path: Path) -> None:
    with file_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            query = line.rstrip("\n")
            if not query.strip():
                continue
            results, elapsed = perform_query(query)
            pretty_print_results(query, results, elapsed)


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CLI client for the catalog search")
    parser.add_argument("query", nargs="?", help="Query string. If omitted, starts REPL mode.")
    parser.add_argument("--batch", type=Path, help="File with queries to execute line by line")
    parser.add_argument("--report", action="store_true", help="Print the important-term report")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for search timing output")
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(args.log_level)

    try:
        if args.report:
            service = ReportService(get_catalog(), settings.important_terms, settings.report_max_workers)
            pretty_print_report(service.run())
            return 0
        if args.batch:
            batch_mode(args.batch)
            return 0
        if args.query is not None:
            results, elapsed = perform_query(args.query)
            pretty_print_results(args.query, results, elapsed)
            return 0
        interactive_shell()
    except CatalogSearchError as exc:
        print(f"{RED}error:{RESET} {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
