"""
Keyset pagination over ``(created_at, id)``, newest first.

Cursors are opaque url-safe tokens wrapping ``<iso timestamp>|<id>`` of the
last row of the previous page.
"""
from __future__ import annotations

import base64
import binascii
from datetime import datetime
from typing import Any, Optional, Tuple, Type, TypedDict

from sqlalchemy.orm import Query
from sqlalchemy.sql import and_, or_
from werkzeug.exceptions import BadRequest

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20


class CursorMeta(TypedDict):
    has_more: bool
    next_cursor: Optional[str]
    prev_cursor: Optional[str]


def encode_cursor(created_at: datetime, row_id: Any) -> str:
    if not isinstance(created_at, datetime) or row_id is None:
        raise ValueError("created_at and row_id are required to encode a cursor")

    raw = f"{created_at.isoformat()}|{row_id}".encode()
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        raw = base64.urlsafe_b64decode(padded.encode()).decode()
        timestamp, row_id = raw.split("|", 1)
        return datetime.fromisoformat(timestamp), row_id
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise BadRequest("Invalid cursor") from exc


def parse_limit(raw: Optional[str], default: int = DEFAULT_PAGE_SIZE) -> int:
    try:
        limit = int(raw) if raw is not None else default
    except ValueError as exc:
        raise BadRequest("Limit must be an integer") from exc

    if limit <= 0:
        raise BadRequest("Limit must be greater than zero")
    return min(limit, MAX_PAGE_SIZE)


def apply_cursor(query: Query, *, model: Type[Any], cursor: Optional[str]) -> Query:
    if not cursor:
        return query

    created_at, row_id = decode_cursor(cursor)
    older = or_(
        model.created_at < created_at,
        and_(model.created_at == created_at, model.id < row_id),
    )
    return query.filter(older)


def paginate_cursor(
    query: Query,
    *,
    model: Type[Any],
    limit: int,
    cursor: Optional[str] = None,
) -> tuple[list[Any], CursorMeta]:
    """
    One page of ``query`` plus its continuation metadata.

    Reads one extra row to know whether another page exists.
    """
    rows = (
        apply_cursor(query, model=model, cursor=cursor)
        .order_by(model.created_at.desc(), model.id.desc())
        .limit(limit + 1)
        .all()
    )

    items, has_more = rows[:limit], len(rows) > limit
    next_cursor = encode_cursor(items[-1].created_at, items[-1].id) if has_more else None

    return items, {
        "has_more": has_more,
        "next_cursor": next_cursor,
        "prev_cursor": cursor,
    }
