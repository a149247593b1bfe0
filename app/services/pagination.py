"""
Parsing of listing query parameters into a validated PaginatedQuery
"""

from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError as SchemaValidationError

from app.core.errors import ValidationError
from app.schemas.common import PaginatedQuery

SORT_DIRECTIONS = ("asc", "desc")


def _parse_non_negative_int(name: str, raw: str) -> int:
    if not (raw.isascii() and raw.isdigit()):
        raise ValidationError(f"{name} must be a non-negative integer, got {raw!r}")
    return int(raw)


def validate_paginated_query(values: Dict[str, Any]) -> PaginatedQuery:
    """Struct-level pass: bounds, sort token and types."""
    try:
        return PaginatedQuery(**values)
    except SchemaValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValidationError(f"Invalid pagination parameters: {problems}") from e


def parse_paginated_query(
    params: Mapping[str, str],
    defaults: Optional[PaginatedQuery] = None,
) -> PaginatedQuery:
    """Read limit, offset, sort and search from raw query parameters.

    Absent or empty parameters fall back to ``defaults``. ``search`` is
    taken verbatim; escaping happens in the repositories through bound
    parameters. A fresh descriptor is returned on every call.
    """
    values = (defaults or PaginatedQuery()).model_dump()

    for name in ("limit", "offset"):
        raw = params.get(name)
        if raw:
            values[name] = _parse_non_negative_int(name, raw)

    sort = params.get("sort")
    if sort:
        if sort not in SORT_DIRECTIONS:
            raise ValidationError(f"sort must be 'asc' or 'desc', got {sort!r}")
        values["sort"] = sort

    search = params.get("search")
    if search is not None:
        values["search"] = search

    return validate_paginated_query(values)
