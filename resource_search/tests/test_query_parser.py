"""
Query Parser Tests

Boolean operator parsing for the advanced search box.

Rules:
------
- Only uppercase AND / OR / NOT are operators; lowercase "and" is a term
- The first operator after a term wins; consecutive, leading, and trailing
  operators are dropped
- With any explicit operator, unmarked gaps become AND
"""

import pytest

from resource_search.search.query_parser import has_balanced_quotes, parse_query


class TestParseQuery:
    @pytest.mark.parametrize("raw, operator", [
        ("a AND b", "AND"),
        ("a OR b", "OR"),
        ("a NOT b", "NOT"),
    ])
    def test_single_operator(self, raw, operator):
        parsed = parse_query(raw)
        assert parsed.terms == ["a", "b"]
        assert parsed.operators == [operator]

    def test_implicit_terms_have_no_operators(self):
        parsed = parse_query("a b")
        assert parsed.terms == ["a", "b"]
        assert parsed.operators == []

    def test_lowercase_operator_is_a_term(self):
        parsed = parse_query("rock and roll")
        assert parsed.terms == ["rock", "and", "roll"]
        assert parsed.operators == []

    def test_consecutive_operators_keep_first(self):
        parsed = parse_query("a AND OR b")
        assert parsed.terms == ["a", "b"]
        assert parsed.operators == ["AND"]

    def test_leading_and_trailing_operators_dropped(self):
        parsed = parse_query("NOT a OR")
        assert parsed.terms == ["a"]
        assert parsed.operators == []

    def test_missing_gap_filled_with_and(self):
        parsed = parse_query("a b OR c")
        assert parsed.terms == ["a", "b", "c"]
        assert parsed.operators == ["AND", "OR"]

    def test_operator_count_matches_gaps(self):
        parsed = parse_query("react OR vue NOT angular svelte")
        assert len(parsed.operators) == len(parsed.terms) - 1

    def test_extra_whitespace_ignored(self):
        parsed = parse_query("  a \t AND\n b  ")
        assert parsed.terms == ["a", "b"]
        assert parsed.operators == ["AND"]

    @pytest.mark.parametrize("raw", [None, "", "   ", "AND OR NOT", 12])
    def test_empty_inputs(self, raw):
        parsed = parse_query(raw)
        assert parsed.is_empty
        assert parsed.operators == []
        assert parsed.filters == {}

    def test_result_is_frozen(self):
        parsed = parse_query("a AND b")
        with pytest.raises(Exception):
            parsed.terms = ["c"]


class TestBalancedQuotes:
    def test_balanced(self):
        assert has_balanced_quotes('"static site" hosting')

    def test_unbalanced(self):
        assert not has_balanced_quotes('"static site hosting')

    def test_non_string_is_balanced(self):
        assert has_balanced_quotes(None)
