"""
Boolean query parsing: split raw search text into terms and AND/OR/NOT.

Only the literal uppercase tokens are operators; "and" is a search term.
The parser never rejects input. Quote balance is reported separately so the
caller can decide whether to flag the query as invalid.
"""

from typing import List, Optional

from ..models.search import SearchQuery

OPERATORS = ("AND", "OR", "NOT")
IMPLICIT_OPERATOR = "AND"


def parse_query(raw: Optional[str]) -> SearchQuery:
    """
    Parse a raw query string into a SearchQuery.

    Operators are consumed greedily left to right: the first operator after a
    term is kept for the following gap; consecutive, leading, and trailing
    operators are dropped. If any explicit operator survives, gaps without
    one are filled with AND so operators[i] always joins terms[i] and
    terms[i + 1]; otherwise operators is empty.
    """
    if not isinstance(raw, str):
        return SearchQuery()

    terms: List[str] = []
    gap_operators: List[Optional[str]] = []
    pending: Optional[str] = None

    for token in raw.split():
        if token in OPERATORS:
            if terms and pending is None:
                pending = token
            continue
        if terms:
            gap_operators.append(pending)
        terms.append(token)
        pending = None

    if not any(op is not None for op in gap_operators):
        return SearchQuery(terms=terms)
    operators = [op if op is not None else IMPLICIT_OPERATOR for op in gap_operators]
    return SearchQuery(terms=terms, operators=operators)


def has_balanced_quotes(raw: Optional[str]) -> bool:
    """False when the query has an odd number of double quotes."""
    if not isinstance(raw, str):
        return True
    return raw.count('"') % 2 == 0
