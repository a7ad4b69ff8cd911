"""Pagination window parsing and page metadata arithmetic."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int_prefix(raw: str | int | None) -> int | None:
    """Parse the leading integer of a query value, ``"2abc"`` -> 2."""
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls,
        page: str | int | None,
        limit: str | int | None,
        *,
        default_limit: int = 10,
        max_limit: int = 100,
    ) -> PageRequest:
        """Build a window from raw query values.

        Absent, non-numeric, zero or negative values fall back to page 1 and
        ``default_limit``. ``limit`` is capped at ``max_limit``.
        """
        parsed_page = parse_int_prefix(page)
        parsed_limit = parse_int_prefix(limit)

        if parsed_page is None or parsed_page < 1:
            parsed_page = 1
        if parsed_limit is None or parsed_limit < 1:
            parsed_limit = default_limit

        return cls(page=parsed_page, limit=min(parsed_limit, max_limit))


def total_pages(total_items: int, limit: int) -> int:
    return math.ceil(total_items / limit) if limit > 0 else 0
