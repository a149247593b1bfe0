"""
Tests for listing query parameter parsing
"""

import pytest

from app.core.errors import ValidationError
from app.schemas.common import PaginatedQuery
from app.services.pagination import parse_paginated_query

def test_missing_parameters_use_defaults():
    query = parse_paginated_query({})

    assert query.limit == 20
    assert query.offset == 0
    assert query.sort == "desc"
    assert query.search == ""

def test_all_parameters_parsed():
    query = parse_paginated_query({"limit": "5", "offset": "10", "sort": "asc", "search": "Doe"})

    assert query == PaginatedQuery(limit=5, offset=10, sort="asc", search="Doe")

def test_supplied_defaults_are_respected():
    defaults = PaginatedQuery(limit=50, sort="asc")
    query = parse_paginated_query({"offset": "3"}, defaults)

    assert query.limit == 50
    assert query.sort == "asc"
    assert query.offset == 3

def test_empty_values_fall_back_to_defaults():
    query = parse_paginated_query({"limit": "", "offset": "", "sort": ""})

    assert query.limit == 20
    assert query.offset == 0
    assert query.sort == "desc"

def test_search_is_used_verbatim():
    query = parse_paginated_query({"search": "  100%_Doe "})

    assert query.search == "  100%_Doe "

@pytest.mark.parametrize("sort", ["upward", "ASC", "descending", "1"])
def test_unknown_sort_is_rejected(sort):
    with pytest.raises(ValidationError) as exc_info:
        parse_paginated_query({"sort": sort})

    assert "sort" in exc_info.value.message

@pytest.mark.parametrize("params", [
    {"limit": "-1"},
    {"limit": "ten"},
    {"limit": "2.5"},
    {"offset": "-3"},
    {"offset": "abc"},
])
def test_malformed_numbers_are_rejected(params):
    with pytest.raises(ValidationError):
        parse_paginated_query(params)

def test_limit_above_maximum_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_paginated_query({"limit": "101"})

    assert "limit" in exc_info.value.message

def test_limit_bounds_are_inclusive():
    assert parse_paginated_query({"limit": "0"}).limit == 0
    assert parse_paginated_query({"limit": "100"}).limit == 100

def test_each_call_returns_a_fresh_descriptor():
    first = parse_paginated_query({"search": "a"})
    second = parse_paginated_query({"search": "b"})

    assert first is not second
    assert first.search == "a"
    assert second.search == "b"
