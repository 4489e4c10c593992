from typing import Any, Dict

from tourdesk.extensions import db
from tourdesk.domain.invariants.exceptions import InvariantViolation, SlugConflict
from tourdesk.domain.lifecycle.tour import assert_tour_transition
from tourdesk.models.category import Category
from tourdesk.models.tour import DEFAULT_DISPLAY_ORDER, Tour

# Scalar and nested fields a full save may write
TOUR_WRITE_FIELDS = (
    "title",
    "slug",
    "category_id",
    "short_description",
    "description",
    "overview",
    "featured_image_url",
    "image_gallery_urls",
    "itinerary",
    "price",
    "duration_days",
    "display_order",
    "is_featured",
    "is_day_out_package",
    "is_published",
    "status",
    "rating",
    "location",
)

# Reduced subset persisted by the editor's periodic autosave
AUTOSAVE_FIELDS = (
    "title",
    "slug",
    "category_id",
    "short_description",
    "overview",
    "featured_image_url",
    "display_order",
    "is_featured",
    "is_day_out_package",
    "rating",
    "location",
)


def _optional_number(field: str, value: Any, cast):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise InvariantViolation(f"{field} must be a number")
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise InvariantViolation(f"{field} must be a number")


def coerce_tour_fields(data: Dict[str, Any], fields) -> Dict[str, Any]:
    """
    Keep the whitelisted keys of ``data`` and coerce form-style values
    (empty strings, numeric strings) into column types.
    """
    values = {field: data[field] for field in fields if field in data}

    if "title" in values:
        values["title"] = (values["title"] or "").strip()
    if "slug" in values:
        values["slug"] = (values["slug"] or "").strip()
    if "category_id" in values:
        values["category_id"] = values["category_id"] or None
    if "rating" in values:
        values["rating"] = _optional_number("rating", values["rating"], float)
    if "price" in values:
        values["price"] = _optional_number("price", values["price"], float)
    if "duration_days" in values:
        values["duration_days"] = _optional_number("duration_days", values["duration_days"], int)
    if "display_order" in values:
        order = _optional_number("display_order", values["display_order"], int)
        values["display_order"] = DEFAULT_DISPLAY_ORDER if order is None else order
    for flag in ("is_featured", "is_day_out_package", "is_published"):
        if flag in values:
            values[flag] = bool(values[flag])
    for collection in ("itinerary", "image_gallery_urls"):
        if collection in values and values[collection] is None:
            values[collection] = []

    return values


def apply_tour_fields(tour: Tour, values: Dict[str, Any]) -> list[str]:
    """
    Apply coerced values to ``tour``; returns the names of changed fields.

    Keeps ``status`` and ``is_published`` consistent with each other and
    enforces the status lifecycle.
    """
    if "status" in values and "is_published" not in values:
        values["is_published"] = values["status"] == "published"
    elif values.get("is_published") and "status" not in values:
        values["status"] = "published"

    if "status" in values:
        assert_tour_transition(from_status=tour.status, to_status=values["status"])

    if values.get("category_id") and db.session.get(Category, values["category_id"]) is None:
        raise InvariantViolation(f"Unknown category: {values['category_id']}")

    changed_fields: list[str] = []
    for field, value in values.items():
        if getattr(tour, field) != value:
            setattr(tour, field, value)
            changed_fields.append(field)

    return changed_fields


def assert_slug_free(slug: str, tour_id: str | None) -> None:
    query = Tour.query.filter(Tour.slug == slug)
    if tour_id:
        query = query.filter(Tour.id != tour_id)

    if query.first() is not None:
        raise SlugConflict("Slug is already in use")
