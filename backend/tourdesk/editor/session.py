"""
One edit session of the tour editor: a single owned ``FormState`` shared by
the dirty tracker, slug validator, draft materializer, autosave scheduler,
full save and image uploads.
"""
import logging
from typing import Any, Dict, List, Optional

from tourdesk.config import AUTOSAVE_INTERVAL_SECONDS
from tourdesk.domain.categories import group_categories
from tourdesk.gateway.base import GatewayError, PersistenceGateway
from tourdesk.utils.slug import generate_slug
from . import form_state as collections
from .autosave import AutosaveScheduler, SaveGuard
from .dirty import DirtyTracker
from .drafts import DraftMaterializer
from .form_state import FormState
from .save_workflow import SaveResult, SaveWorkflow
from .slug_validator import SlugCheck, SlugValidator
from .uploads import ImageUploader

logger = logging.getLogger(__name__)

NEW_TOUR_ROUTE = "/admin/tours/new"
UNSAVED_CHANGES_PROMPT = "You have unsaved changes. Are you sure you want to leave?"


def edit_route(tour_id: str) -> str:
    return f"/admin/tours/{tour_id}/edit"


class TourEditSession:
    def __init__(
        self,
        gateway: PersistenceGateway,
        tour_id: Optional[str] = None,
        *,
        autosave_interval: float = AUTOSAVE_INTERVAL_SECONDS,
    ):
        self.gateway = gateway
        self.initial_tour_id = tour_id
        self.route = edit_route(tour_id) if tour_id else NEW_TOUR_ROUTE

        self.form = FormState()
        self.tracker = DirtyTracker(self.form)
        self.guard = SaveGuard()
        self.slug_validator = SlugValidator(gateway)
        self.materializer = DraftMaterializer(gateway, self.form, on_materialized=self._on_materialized)
        self.autosave = AutosaveScheduler(
            gateway, self.form, self.tracker, self.guard, interval=autosave_interval
        )
        self.workflow = SaveWorkflow(gateway, self.form, self.tracker, self.guard, self.slug_validator)
        self.uploader = ImageUploader(gateway, self.materializer)

        self.categories: List[Dict[str, Any]] = []
        self.slug_edited = False
        self.load_error: Optional[str] = None

    # -- lifecycle -------------------------------------------------------

    def mount(self) -> None:
        self.form.loading = True
        try:
            try:
                self.categories = self.gateway.list_categories(active_only=True)
            except GatewayError as exc:
                logger.warning("Could not load categories: %s", exc.message)
                self.categories = []

            record = None
            if self.initial_tour_id:
                try:
                    record = self.gateway.get_tour(self.initial_tour_id)
                except GatewayError as exc:
                    logger.warning("Could not load tour %s: %s", self.initial_tour_id, exc.message)
                    self.load_error = exc.message

            self.form.load(record)
            # A persisted slug is never re-derived from the title
            self.slug_edited = record is not None
        finally:
            self.form.loading = False

        self.tracker.mark_saved()
        self.autosave.start()

    def unmount(self) -> None:
        self.autosave.stop()

    def _on_materialized(self, tour_id: str) -> None:
        self.route = edit_route(tour_id)

    @property
    def dirty(self) -> bool:
        return self.tracker.is_dirty()

    def before_unload(self) -> Optional[str]:
        return UNSAVED_CHANGES_PROMPT if self.dirty else None

    # -- fields ----------------------------------------------------------

    def set_field(self, name: str, value: Any) -> None:
        self.form.set_field(name, value)

    def set_title(self, title: str) -> None:
        self.form.set_field("title", title)
        if not self.slug_edited:
            self._replace_slug(generate_slug(title))

    def set_slug(self, slug: str) -> None:
        self.slug_edited = True
        self._replace_slug(slug)

    def _replace_slug(self, slug: str) -> None:
        # A check of the previous value no longer applies
        if slug != self.form.get("slug"):
            self.slug_validator.reset()
        self.form.set_field("slug", slug)

    def blur_slug(self) -> SlugCheck:
        return self.slug_validator.check(self.form.get("slug"), self.form.tour_id)

    def category_options(self) -> List[Dict[str, Any]]:
        return group_categories(self.categories)

    # -- itinerary -------------------------------------------------------

    def add_day(self, title: str = "", description: str = "") -> None:
        self.form.set_itinerary(collections.add_day(self.form.get("itinerary"), title, description))

    def insert_day(self, index: int, title: str = "", description: str = "") -> None:
        self.form.set_itinerary(
            collections.insert_day(self.form.get("itinerary"), index, title, description)
        )

    def remove_day(self, index: int) -> None:
        self.form.set_itinerary(collections.remove_day(self.form.get("itinerary"), index))

    def move_day(self, from_index: int, to_index: int) -> None:
        self.form.set_itinerary(
            collections.move_day(self.form.get("itinerary"), from_index, to_index)
        )

    def update_day(self, index: int, **changes) -> None:
        self.form.set_itinerary(collections.update_day(self.form.get("itinerary"), index, **changes))

    # -- gallery ---------------------------------------------------------

    def remove_image(self, index: int) -> None:
        self.form.set_gallery(collections.remove_image(self.form.get("image_gallery_urls"), index))

    def move_image(self, index: int, offset: int) -> None:
        self.form.set_gallery(
            collections.move_image(self.form.get("image_gallery_urls"), index, offset)
        )

    def set_image_crop(self, index: int, crop: Optional[Dict[str, float]]) -> None:
        self.form.set_gallery(
            collections.set_image_crop(self.form.get("image_gallery_urls"), index, crop)
        )

    # -- uploads ---------------------------------------------------------

    def upload_main_image(self, filename: str, data: bytes, content_type: Optional[str] = None) -> str:
        url = self.uploader.upload(filename, data, content_type, main_image=True)
        self.form.set_field("featured_image_url", url)
        return url

    def upload_gallery_image(
        self,
        filename: str,
        data: bytes,
        content_type: Optional[str] = None,
        caption: str = "",
    ) -> str:
        url = self.uploader.upload(filename, data, content_type)
        self.form.set_gallery(
            collections.add_image(self.form.get("image_gallery_urls"), url, caption)
        )
        return url

    # -- persistence -----------------------------------------------------

    def save(self) -> SaveResult:
        result = self.workflow.save()
        if result.ok and result.navigate_to:
            self.route = result.navigate_to
        return result
