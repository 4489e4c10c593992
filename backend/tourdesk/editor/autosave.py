"""
Periodic autosave of the reduced field subset.

``SaveGuard`` is the one in-flight flag shared by autosave and the full save:
whoever acquires it first runs, the other is skipped.
"""
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from tourdesk.application.tours.fields import AUTOSAVE_FIELDS
from tourdesk.config import AUTOSAVE_INTERVAL_SECONDS
from tourdesk.gateway.base import GatewayError, PersistenceGateway
from .dirty import DirtyTracker
from .form_state import FormState

logger = logging.getLogger(__name__)

IDLE = "idle"
SAVING = "saving"


class SaveGuard:
    def __init__(self):
        self._lock = threading.Lock()

    def acquire(self) -> bool:
        """Check-and-set; never blocks."""
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        self._lock.release()

    @property
    def busy(self) -> bool:
        return self._lock.locked()


def autosave_payload(values: Dict[str, Any]) -> Dict[str, Any]:
    return {field: values.get(field) for field in AUTOSAVE_FIELDS}


class AutosaveScheduler:
    def __init__(
        self,
        gateway: PersistenceGateway,
        form: FormState,
        tracker: DirtyTracker,
        guard: SaveGuard,
        interval: float = AUTOSAVE_INTERVAL_SECONDS,
    ):
        self.gateway = gateway
        self.form = form
        self.tracker = tracker
        self.guard = guard
        self.interval = interval

        self.state = IDLE
        self.last_saved_at: Optional[datetime] = None

        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def tick(self) -> bool:
        """Run one autosave if one is due. Returns True when something was saved."""
        if self.form.loading or not self.tracker.is_dirty():
            return False

        tour_id = self.form.tour_id
        if not tour_id:
            return False

        values = self.form.as_dict()
        if not str(values.get("title") or "").strip() or not str(values.get("slug") or "").strip():
            logger.debug("Autosave of tour %s skipped until title and slug are filled in", tour_id)
            return False

        if not self.guard.acquire():
            logger.debug("Autosave skipped, another save is in flight")
            return False

        self.state = SAVING
        try:
            payload = autosave_payload(self.form.as_dict())

            try:
                self.gateway.autosave_tour(tour_id, payload)
            except GatewayError as exc:
                logger.warning("Autosave of tour %s failed: %s", tour_id, exc.message)
                return False

            self.tracker.mark_fields_saved(payload)
            self.last_saved_at = datetime.now(timezone.utc)
            logger.info("Autosaved tour %s", tour_id)
            return True
        finally:
            self.state = IDLE
            self.guard.release()

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.tick()

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="tour-autosave", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval + 1)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
