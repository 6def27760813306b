"""Stock listing: search, sort and paginate item rows."""
from __future__ import annotations
import math
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from rollingstock.domain.StockItem import StockItem
from rollingstock.logic.expiry.classifier import Instant, classify_expiration, to_today
from rollingstock.utilities.config import ITEMS_PER_PAGE
from rollingstock.utilities.constants import DEFAULT_ALERT_MONTHS

__all__ = ["matches_search", "sort_rows", "query_items"]


def matches_search(item: StockItem, query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    return any(needle in str(value).lower() for value in (item.name, item.category, item.unit) if value)


def _dated_first(rows: List[Dict[str, Any]], reverse: bool) -> List[Dict[str, Any]]:
    dated = [r for r in rows if r['_expiry'] is not None]
    undated = [r for r in rows if r['_expiry'] is None]
    dated.sort(key=lambda r: r['_expiry'], reverse=reverse)
    return dated + undated


def sort_rows(rows: List[Dict[str, Any]], sort: Optional[str]) -> List[Dict[str, Any]]:
    """Sort listing rows; items without an expiry always go last for expiry sorts."""
    if sort == 'expiryAsc':
        return _dated_first(rows, reverse=False)
    if sort == 'expiryDesc':
        return _dated_first(rows, reverse=True)
    if sort == 'nameAsc':
        return sorted(rows, key=lambda r: r['item'].name.lower())
    if sort == 'nameDesc':
        return sorted(rows, key=lambda r: r['item'].name.lower(), reverse=True)
    if sort == 'catAsc':
        return sorted(rows, key=lambda r: (r['item'].category, r['item'].name.lower()))
    return rows


def query_items(items: Sequence[StockItem], now: Instant = None,
                alert_months: int = DEFAULT_ALERT_MONTHS, search: str = '',
                sort: Optional[str] = None, page: int = 1,
                per_page: int = ITEMS_PER_PAGE) -> Dict[str, Any]:
    """Return one page of rows plus paging info.

    Each row keeps the item's index in the full list so callers can edit or
    delete it, its expiration state and its total kcal.
    """
    today: date = to_today(now)
    rows = [
        {'index': idx, 'item': item, '_expiry': item.expiry_date}
        for idx, item in enumerate(items)
        if matches_search(item, search or '')
    ]
    rows = sort_rows(rows, sort)

    total = len(rows)
    total_pages = math.ceil(total / per_page) if per_page > 0 else 1
    page = max(1, min(page, total_pages or 1))
    start = (page - 1) * per_page
    page_rows = rows[start:start + per_page]

    return {
        'page': page,
        'total_pages': total_pages,
        'total': total,
        'rows': [
            {
                'index': r['index'],
                **r['item'].to_dict(),
                'status': classify_expiration(r['item'], today, alert_months).value,
                'total_kcal': r['item'].total_kcal,
            }
            for r in page_rows
        ],
    }
