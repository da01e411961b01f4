"""Offset pagination helpers shared by the list endpoints."""
from __future__ import annotations

import math


def _int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def page_params(query, *, default_limit: int, max_limit: int = 100) -> tuple[int, int]:
    """Read ``page``/``limit`` leniently; junk falls back to the defaults."""
    page = max(1, _int(query.get('page'), 1))
    limit = min(max_limit, max(1, _int(query.get('limit'), default_limit)))
    return page, limit


def paginate(qs, page: int, limit: int) -> tuple[list, int, int]:
    """Return ``(items, total, pages)`` for one page of ``qs``."""
    total = qs.count()
    start = (page - 1) * limit
    items = list(qs[start:start + limit])
    return items, total, math.ceil(total / limit)
