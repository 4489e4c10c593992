from typing import Any, Dict, Iterable, List
from tourdesk.extensions import db


def compact_order(query, order_field="order"):
    """
    Re-assigns sequential order values (1..N) for a scoped query.
    """
    entity = query.column_descriptions[0]['entity']
    items = query.order_by(getattr(entity, order_field).asc()).all()

    for index, item in enumerate(items, start=1):
        setattr(item, order_field, index)

    db.session.flush()


def renumber(items: Iterable[Dict[str, Any]], order_field: str = "order") -> List[Dict[str, Any]]:
    """
    Return copies of ``items`` with ``order_field`` set to 1..N in list order.
    """
    return [{**item, order_field: index} for index, item in enumerate(items, start=1)]
