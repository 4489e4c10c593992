"""
Full save: validate, re-check the slug, upsert the tour (always published),
then replace the dependent image and content-section rows.

Only a failure before or during the upsert stops the save. Failures of the
dependent writes are logged and reported as warnings.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tourdesk.domain.invariants.tour import RATING_MAX, RATING_MIN
from tourdesk.gateway.base import GatewayError, PersistenceGateway
from .autosave import SaveGuard
from .dirty import DirtyTracker
from .form_state import FormState
from .slug_validator import SlugValidator

logger = logging.getLogger(__name__)

TOURS_ROUTE = "/admin/tours"
SAVE_IN_PROGRESS = "A save is already in progress"
FIX_ERRORS = "Please fix the highlighted fields"
SAVED = "Tour saved successfully"

GALLERY_SECTIONS = ("gallery", "itinerary")

# Scalars written by a full save, in addition to the publish flags
SAVE_FIELDS = (
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
    "rating",
    "location",
)


@dataclass
class SaveResult:
    ok: bool
    tour_id: Optional[str] = None
    message: str = ""
    field_errors: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    navigate_to: Optional[str] = None


def validate_tour_form(values: Dict[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    if not str(values.get("title") or "").strip():
        errors["title"] = "Title is required"

    if not str(values.get("slug") or "").strip():
        errors["slug"] = "Slug is required"

    rating = values.get("rating")
    if rating is not None and str(rating).strip() != "":
        try:
            if isinstance(rating, bool):
                raise ValueError(rating)
            number = float(rating)
        except (TypeError, ValueError):
            errors["rating"] = "Rating must be a number"
        else:
            if not RATING_MIN <= number <= RATING_MAX:
                errors["rating"] = f"Rating must be between {RATING_MIN} and {RATING_MAX}"

    return errors


def save_payload(values: Dict[str, Any]) -> Dict[str, Any]:
    payload = {name: values.get(name) for name in SAVE_FIELDS}
    payload["slug"] = (payload["slug"] or "").strip()
    payload["title"] = (payload["title"] or "").strip()
    payload["is_published"] = True
    payload["status"] = "published"
    return payload


def gallery_rows(values: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [
        {
            "image_url": image["url"],
            "section": "gallery",
            "caption": image.get("caption") or None,
            "crop": image.get("crop"),
        }
        for image in values.get("image_gallery_urls") or []
        if image.get("url")
    ]


def section_rows(values: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [
        {
            "type": "overview",
            "title": "Overview",
            "content": {"html": values.get("overview") or ""},
            "order": 1,
        },
        {
            "type": "itinerary",
            "title": "Itinerary",
            "content": {"days": values.get("itinerary") or []},
            "order": 2,
        },
    ]


class SaveWorkflow:
    def __init__(
        self,
        gateway: PersistenceGateway,
        form: FormState,
        tracker: DirtyTracker,
        guard: SaveGuard,
        slug_validator: SlugValidator,
    ):
        self.gateway = gateway
        self.form = form
        self.tracker = tracker
        self.guard = guard
        self.slug_validator = slug_validator

    def save(self) -> SaveResult:
        values = self.form.as_dict()
        tour_id = values.get("id")

        errors = validate_tour_form(values)
        if errors:
            return SaveResult(ok=False, tour_id=tour_id, message=FIX_ERRORS, field_errors=errors)

        if not self.guard.acquire():
            return SaveResult(ok=False, tour_id=tour_id, message=SAVE_IN_PROGRESS)

        try:
            return self._save(values, tour_id)
        finally:
            self.guard.release()

    def _save(self, values: Dict[str, Any], tour_id: Optional[str]) -> SaveResult:
        baseline = self.tracker.take_snapshot()

        slug_check = self.slug_validator.check(values["slug"], tour_id)
        if not slug_check.ok:
            return SaveResult(
                ok=False,
                tour_id=tour_id,
                message=slug_check.message,
                field_errors={"slug": slug_check.message},
            )

        payload = save_payload(values)
        try:
            if tour_id:
                tour_id = self.gateway.update_tour(tour_id, payload)
            else:
                tour_id = self.gateway.create_tour(payload)
        except GatewayError as exc:
            logger.warning("Saving tour %s failed: %s", tour_id or "(new)", exc.message)
            return SaveResult(ok=False, tour_id=tour_id, message=exc.message)

        self.form.set_field("id", tour_id)
        self.tracker.mark_saved(baseline)

        warnings = self._fan_out(tour_id, values)
        logger.info("Tour %s saved with %d warning(s)", tour_id, len(warnings))

        return SaveResult(
            ok=True,
            tour_id=tour_id,
            message=SAVED,
            warnings=warnings,
            navigate_to=TOURS_ROUTE,
        )

    def _fan_out(self, tour_id: str, values: Dict[str, Any]) -> List[str]:
        warnings: List[str] = []

        steps = (
            ("gallery images", lambda: self.gateway.replace_tour_images(
                tour_id, GALLERY_SECTIONS, gallery_rows(values))),
            ("overview image", lambda: self.gateway.set_overview_image(
                tour_id, values.get("featured_image_url") or None)),
            ("content sections", lambda: self.gateway.replace_tour_sections(
                tour_id, section_rows(values))),
        )

        for label, step in steps:
            try:
                step()
            except GatewayError as exc:
                logger.warning("Updating %s of tour %s failed: %s", label, tour_id, exc.message)
                warnings.append(f"Could not update {label}: {exc.message}")

        return warnings
