"""Query parsing and per-item matching.

A query wrapped in double quotes asks for an exact, case-sensitive match of the
whole ``name`` or ``description`` field:

    >>> parse_query('"Amazing"')
    ParsedQuery(mode=<MatchMode.EXACT: 'exact'>, text='Amazing')

Anything else is a case-insensitive substring match against either field. The
quote check needs at least two characters, so a lone ``"`` is a substring query
for the quote character itself, while ``""`` is an exact match on the empty
string.
"""
from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from .errors import InvalidQueryError
from .models import ProductItem

QUOTE = '"'


class MatchMode(str, Enum):
    EXACT = "exact"
    SUBSTRING = "substring"


class ParsedQuery(NamedTuple):
    mode: MatchMode
    text: str


def parse_query(raw: str | None) -> ParsedQuery:
    if raw is None:
        raise InvalidQueryError("Query must not be null")
    if len(raw) >= 2 and raw.startswith(QUOTE) and raw.endswith(QUOTE):
        # Strip one quote from each end only.
        return ParsedQuery(MatchMode.EXACT, raw[1:-1])
    return ParsedQuery(MatchMode.SUBSTRING, raw.lower())


def item_matches(parsed: ParsedQuery, item: ProductItem) -> bool:
    if parsed.mode is MatchMode.EXACT:
        return parsed.text == item.name or parsed.text == item.description
    return parsed.text in item.name.lower() or parsed.text in item.description.lower()


def matches(query: str | None, item: ProductItem) -> bool:
    """Return True when ``item`` satisfies the raw ``query``."""
    return item_matches(parse_query(query), item)
