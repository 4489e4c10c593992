from typing import Any, Dict, Iterable
from sqlalchemy.exc import IntegrityError
from tourdesk.extensions import db
from tourdesk.models.tour import Tour
from tourdesk.domain.invariants.exceptions import EntityNotFound, SlugConflict
from tourdesk.domain.invariants.tour import assert_tour
from tourdesk.utils.audit import log_action
from tourdesk.utils.transaction import transactional
from .fields import TOUR_WRITE_FIELDS, apply_tour_fields, assert_slug_free, coerce_tour_fields


def get_tour(tour_id: str) -> Tour:
    tour = db.session.get(Tour, tour_id)
    if tour is None:
        raise EntityNotFound("Tour not found")
    return tour


def update_tour(
    *,
    tour_id: str,
    actor_id: str | None,
    data: Dict[str, Any],
    fields: Iterable[str] = TOUR_WRITE_FIELDS,
    action: str = "tour.update",
) -> Tour:
    """
    Update whitelisted fields on a tour. Last write wins.

    Design rules:
    - Only whitelisted fields are mutable
    - Slug uniqueness and invariants always revalidated
    - Unchanged payloads succeed without an audit row
    """
    tour = get_tour(tour_id)
    values = coerce_tour_fields(data, fields)

    if "slug" in values and values["slug"] != tour.slug:
        assert_slug_free(values["slug"], tour.id)

    try:
        with transactional():
            changed_fields = apply_tour_fields(tour, values)
            assert_tour(tour)

            if changed_fields:
                log_action(
                    action=action,
                    entity_type="tour",
                    entity_id=tour.id,
                    payload={"fields": sorted(changed_fields)},
                    actor_id=actor_id,
                )
    except IntegrityError as exc:
        raise SlugConflict("Slug is already in use") from exc

    return tour
