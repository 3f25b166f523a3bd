"""Tests for the important-term report."""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from app.errors import CatalogUnavailableError, ReportBuildError
from app.models import SearchReport
from app.report import ReportService, build_report
from app.search import search

TERMS = ["Cool", "Amazing", "Perfect", "Kids"]


def test_report_has_one_entry_per_term(items):
    report = build_report(TERMS, len(items), lambda term: search(term, items))

    assert report.productCount == len(items)
    assert report.searchTermHits == {"Cool": 1, "Amazing": 2, "Perfect": 1, "Kids": 2}


def test_report_keeps_terms_with_no_hits(items):
    report = build_report(["Toaster", "Kids"], len(items), lambda term: search(term, items))

    assert report.searchTermHits == {"Toaster": 0, "Kids": 2}


def test_product_count_is_taken_as_given():
    """The total comes from the caller, not from searching."""

    report = build_report(["x"], 42, lambda term: [])

    assert report.productCount == 42
    assert report.searchTermHits == {"x": 0}


def test_quoted_term_is_matched_exactly(items):
    report = build_report(['"Amazing"'], len(items), lambda term: search(term, items))

    assert report.searchTermHits == {'"Amazing"': 1}


def test_failing_term_fails_the_whole_report():
    def search_fn(term):
        if term == "Perfect":
            raise RuntimeError("index corrupted")
        return [term]

    with pytest.raises(ReportBuildError) as excinfo:
        build_report(TERMS, 4, search_fn)

    assert excinfo.value.term == "Perfect"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_catalog_outage_propagates_unchanged():
    def search_fn(term):
        raise CatalogUnavailableError("down")

    with pytest.raises(CatalogUnavailableError):
        build_report(TERMS, 4, search_fn)


def test_invalid_arguments_are_rejected():
    with pytest.raises(ValueError):
        build_report([], 0, lambda term: [])
    with pytest.raises(ValueError):
        build_report(["Cool"], -1, lambda term: [])


def test_service_counts_match_an_empty_search(catalog):
    report = ReportService(catalog, TERMS, max_workers=2).run()

    assert report.productCount == len(search("", catalog.list_all()))
    assert set(report.searchTermHits) == set(TERMS)
    assert all(hits >= 0 for hits in report.searchTermHits.values())


def test_service_uses_the_count_source_for_the_total(items):
    catalog = MagicMock()
    catalog.list_all.return_value = items
    catalog.count.return_value = 1000

    report = ReportService(catalog, ["Kids"]).run()

    assert report.productCount == 1000
    assert report.searchTermHits == {"Kids": 2}


def test_report_rejects_negative_hit_counts():
    with pytest.raises(ValidationError):
        SearchReport(productCount=1, searchTermHits={"Cool": -1})
