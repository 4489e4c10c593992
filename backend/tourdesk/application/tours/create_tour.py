from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from tourdesk.extensions import db
from tourdesk.models.tour import Tour
from tourdesk.domain.invariants.exceptions import InvariantViolation, SlugConflict
from tourdesk.domain.invariants.tour import assert_tour
from tourdesk.utils.audit import log_action
from tourdesk.utils.transaction import transactional
from .fields import TOUR_WRITE_FIELDS, apply_tour_fields, assert_slug_free, coerce_tour_fields


def create_tour(
    *,
    actor_id: str | None,
    data: Dict[str, Any],
) -> Tour:
    """
    Create a tour (draft unless ``status``/``is_published`` say otherwise).

    Edge cases handled:
    - Missing required fields
    - Duplicate slug
    - Invariant violations
    """
    values = coerce_tour_fields(data, TOUR_WRITE_FIELDS)

    if not values.get("title") or not values.get("slug"):
        raise InvariantViolation("Both title and slug are required")

    assert_slug_free(values["slug"], None)

    tour = Tour()
    tour.status = "draft"
    tour.is_published = False
    tour.created_by = actor_id

    try:
        with transactional():
            apply_tour_fields(tour, values)
            assert_tour(tour)

            db.session.add(tour)
            db.session.flush()  # ensures tour.id is available

            log_action(
                action="tour.create",
                entity_type="tour",
                entity_id=tour.id,
                payload={
                    "title": tour.title,
                    "slug": tour.slug,
                    "status": tour.status,
                },
                actor_id=actor_id,
            )

        return tour

    except IntegrityError as exc:
        # Unique slug constraint lost a race with another writer
        raise SlugConflict("Slug is already in use") from exc
