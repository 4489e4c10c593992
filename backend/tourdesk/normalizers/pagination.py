from typing import Any, Callable, Dict, List, Optional

from tourdesk.utils.pagination import CursorMeta


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    cursor: Optional[CursorMeta] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
    total: Optional[int] = None,
) -> Dict[str, Any]:
    """
    ``{"items": [...], "pagination": {...}}`` for list endpoints.

    Tours and the audit log page with a cursor, inquiry tables with
    ``page``/``per_page``; the display-order tour listing has no pagination
    block at all.
    """
    body: Dict[str, Any] = {"items": list(map(normalize_fn, items))}

    if cursor is not None:
        body["pagination"] = dict(cursor)
    elif page is not None and per_page is not None:
        meta: Dict[str, Any] = {"page": page, "per_page": per_page}
        if total is not None:
            meta["total"] = total
            meta["total_pages"] = -(-total // per_page)
        body["pagination"] = meta

    return body
