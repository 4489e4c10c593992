from typing import Any, Dict, Iterable, List
from tourdesk.extensions import db
from tourdesk.models.tour_image import IMAGE_SECTIONS, TourImage
from tourdesk.domain.invariants.exceptions import InvariantViolation
from tourdesk.domain.invariants.gallery import assert_crop
from tourdesk.utils.audit import log_action
from tourdesk.utils.order import compact_order
from tourdesk.utils.transaction import transactional
from .update_tour import get_tour

OVERVIEW_SECTION = "overview"


def replace_tour_images(
    *,
    tour_id: str,
    sections: Iterable[str],
    images: List[Dict[str, Any]],
    actor_id: str | None,
) -> List[TourImage]:
    """
    Replace every image row of ``tour_id`` tagged with one of ``sections``.

    Delete-then-insert, not a diff. Rows of other sections (the overview
    image in particular) are left untouched. Each section's rows are
    renumbered 1..N in payload order.
    """
    tour = get_tour(tour_id)
    scope = set(sections)

    unknown = scope - set(IMAGE_SECTIONS)
    if unknown:
        raise InvariantViolation(f"Unknown image sections: {sorted(unknown)}")

    rows: List[TourImage] = []

    with transactional():
        TourImage.query.filter(
            TourImage.tour_id == tour.id,
            TourImage.section.in_(scope),
        ).delete(synchronize_session=False)

        for index, data in enumerate(images, start=1):
            section = data.get("section") or "gallery"
            if section not in scope:
                raise InvariantViolation(
                    f"Image section '{section}' is outside the replaced sections"
                )

            url = data.get("image_url") or data.get("url")
            if not url:
                raise InvariantViolation("Every image needs an image_url")

            assert_crop(data.get("crop"))

            image = TourImage()
            image.tour_id = tour.id
            image.image_url = url
            image.section = section
            image.display_order = index
            image.caption = data.get("caption")
            image.alt_text = data.get("alt_text")
            image.crop = data.get("crop")
            image.is_active = True

            db.session.add(image)
            rows.append(image)

        db.session.flush()

        for section in scope:
            compact_order(
                TourImage.query.filter_by(tour_id=tour.id, section=section),
                order_field="display_order",
            )

        log_action(
            action="tour.images.replace",
            entity_type="tour",
            entity_id=tour.id,
            payload={"sections": sorted(scope), "count": len(rows)},
            actor_id=actor_id,
        )

    return rows


def set_overview_image(
    *,
    tour_id: str,
    image_url: str | None,
    actor_id: str | None,
) -> TourImage | None:
    """
    Keep the single ``overview`` image row in line with the featured image.

    An empty url removes the row.
    """
    tour = get_tour(tour_id)

    existing = TourImage.query.filter_by(
        tour_id=tour.id,
        section=OVERVIEW_SECTION,
    ).first()

    with transactional():
        if not image_url:
            if existing is not None:
                db.session.delete(existing)
            image = None
        elif existing is not None:
            existing.image_url = image_url
            existing.is_active = True
            image = existing
        else:
            image = TourImage()
            image.tour_id = tour.id
            image.image_url = image_url
            image.section = OVERVIEW_SECTION
            image.display_order = 0
            image.is_active = True
            db.session.add(image)

        log_action(
            action="tour.images.overview",
            entity_type="tour",
            entity_id=tour.id,
            payload={"image_url": image_url or None},
            actor_id=actor_id,
        )

    return image
