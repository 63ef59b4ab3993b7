"""Single-search flow: original component, its alternatives, and the comparison."""

from __future__ import annotations

import logging

from component_chameleon.ai.client import OracleClient
from component_chameleon.comparison.aligner import build_comparison_table
from component_chameleon.errors import ComponentFinderError, ErrorKind
from component_chameleon.schemas.runs import SearchResult

logger = logging.getLogger(__name__)


def normalize_query(query: str) -> str:
    """Trim ``query``; a blank query is NOT_FOUND before any oracle call."""
    query = query.strip()
    if not query:
        raise ComponentFinderError(
            "Empty search query.",
            "Please enter a part number or description to search for.",
            ErrorKind.NOT_FOUND,
        )
    return query


async def search_component(client: OracleClient, query: str) -> SearchResult:
    """Resolve ``query`` and its alternatives into one comparable result.

    Alternatives are best effort: if none come back, the result still holds
    the original and a one-column comparison.
    """
    query = normalize_query(query)

    original = await client.resolve_component(query)
    alternatives = await client.resolve_alternatives(original)
    logger.info(
        "Search %r → %s with %d alternatives",
        query,
        original.part_number,
        len(alternatives),
    )
    return SearchResult(
        original=original,
        alternatives=alternatives,
        comparison=build_comparison_table(original, alternatives),
    )
