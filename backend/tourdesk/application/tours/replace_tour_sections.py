from typing import Any, Dict, Iterable, List, Optional
from tourdesk.extensions import db
from tourdesk.models.tour_section import TourSection
from tourdesk.domain.invariants.exceptions import InvariantViolation
from tourdesk.utils.audit import log_action
from tourdesk.utils.transaction import transactional
from .update_tour import get_tour


def replace_tour_sections(
    *,
    tour_id: str,
    sections: List[Dict[str, Any]],
    actor_id: str | None,
    types: Optional[Iterable[str]] = None,
) -> List[TourSection]:
    """
    Replace the content-section rows of ``tour_id`` for the given types.

    ``types`` defaults to the types present in ``sections``; rows of any
    other type are kept.
    """
    tour = get_tour(tour_id)

    for data in sections:
        if not data.get("type"):
            raise InvariantViolation("Section type is required")

    scope = set(types) if types is not None else {s["type"] for s in sections}
    rows: List[TourSection] = []

    with transactional():
        if scope:
            TourSection.query.filter(
                TourSection.tour_id == tour.id,
                TourSection.type.in_(scope),
            ).delete(synchronize_session=False)

        for index, data in enumerate(sections, start=1):
            if data["type"] not in scope:
                raise InvariantViolation(
                    f"Section type '{data['type']}' is outside the replaced types"
                )

            section = TourSection()
            section.tour_id = tour.id
            section.type = data["type"]
            section.title = data.get("title")
            section.content = data.get("content") or {}
            section.order = data.get("order") or index
            section.is_visible = data.get("is_visible", True)
            section.created_by = actor_id

            db.session.add(section)
            rows.append(section)

        log_action(
            action="tour.sections.replace",
            entity_type="tour",
            entity_id=tour.id,
            payload={"types": sorted(scope), "count": len(rows)},
            actor_id=actor_id,
        )

    return rows
