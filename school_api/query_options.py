"""Translate list/get query parameters into a repository query descriptor.

The builder knows nothing about a particular entity: callers pass the
relation names the entity can eager-load, so one function serves students,
courses and teachers alike.
"""

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1
MAX_LIMIT = 1000
# Largest value a LIMIT/OFFSET or primary key binds as (signed 64-bit).
MAX_SQL_INT = 2**63 - 1
ORDER_KEY = "created_at"
ALL_RELATIONS = "all"

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class QueryOptions:
    limit: int
    page: int
    offset: int
    sort: str
    includes: tuple[str, ...]

    @property
    def descending(self) -> bool:
        return self.sort == "desc"

    @property
    def order(self) -> tuple[str, str]:
        return ORDER_KEY, self.sort


def parse_int(value: str | None) -> int | None:
    """Parse the leading integer of ``value`` ("12abc" -> 12, "abc" -> None)."""
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    digits = match.group(1)
    # Past int64 the exact value is irrelevant; the caller clamps it anyway.
    if len(digits.lstrip("+-")) > 19:
        return -MAX_SQL_INT if digits.startswith("-") else MAX_SQL_INT
    return int(digits)


def _positive_or_default(value: str | None, default: int, maximum: int) -> int:
    parsed = parse_int(value)
    # Zero counts as "not given", negatives are floored.
    if not parsed:
        return default
    return min(max(parsed, 1), maximum)


def parse_includes(populate: str | None, relations: Iterable[str]) -> tuple[str, ...]:
    valid = tuple(relations)
    if not populate:
        return ()

    requested = {name.strip().lower() for name in populate.split(",")}
    if ALL_RELATIONS in requested:
        return valid
    return tuple(name for name in valid if name in requested)


def build_query_options(raw_query: Mapping[str, str | None], relations: Iterable[str]) -> QueryOptions:
    limit = _positive_or_default(raw_query.get("limit"), DEFAULT_LIMIT, MAX_LIMIT)
    page = _positive_or_default(raw_query.get("page"), DEFAULT_PAGE, MAX_SQL_INT // limit + 1)
    sort = "desc" if (raw_query.get("sort") or "asc").strip().lower() == "desc" else "asc"

    return QueryOptions(
        limit=limit,
        page=page,
        offset=(page - 1) * limit,
        sort=sort,
        includes=parse_includes(raw_query.get("populate"), relations),
    )


def page_payload(total: int, options: QueryOptions, items: list) -> dict:
    return {
        "total": total,
        "page": options.page,
        "limit": options.limit,
        "totalPages": math.ceil(total / options.limit),
        "data": items,
    }
