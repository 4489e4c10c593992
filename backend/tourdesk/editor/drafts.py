import logging
import secrets
import threading
from typing import Callable, Optional

from tourdesk.gateway.base import GatewayError, PersistenceGateway
from tourdesk.models.tour import DEFAULT_DISPLAY_ORDER
from tourdesk.utils.slug import generate_slug
from .form_state import FormState

logger = logging.getLogger(__name__)

UNTITLED_DRAFT = "Untitled draft"


def placeholder_slug(title: str) -> str:
    base = generate_slug(title) or "draft"
    return f"{base}-{secrets.token_hex(4)}"


class DraftMaterializer:
    """
    Makes sure a tour id exists before an upload needs a tour-scoped path.

    At most one creation attempt per edit session, successful or not.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        form: FormState,
        on_materialized: Optional[Callable[[str], None]] = None,
    ):
        self.gateway = gateway
        self.form = form
        self.on_materialized = on_materialized
        self._lock = threading.Lock()
        self._attempted = False

    def ensure_tour_id(self) -> Optional[str]:
        tour_id = self.form.tour_id
        if tour_id:
            return tour_id

        with self._lock:
            if self._attempted:
                return self.form.tour_id
            self._attempted = True

            title = (self.form.get("title") or "").strip()
            fields = {
                "title": title or UNTITLED_DRAFT,
                "slug": placeholder_slug(title),
                "display_order": DEFAULT_DISPLAY_ORDER,
                "is_published": True,
                "status": "published",
            }

            try:
                tour_id = self.gateway.create_tour(fields)
            except GatewayError as exc:
                logger.warning("Could not create draft tour: %s", exc.message)
                return None

            self.form.set_field("id", tour_id)
            logger.info("Draft tour %s created for upload", tour_id)

        if self.on_materialized is not None:
            self.on_materialized(tour_id)
        return tour_id
