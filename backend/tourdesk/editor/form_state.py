"""
The tour under edit, held as one plain dict owned by the edit session.

Itinerary days are ``{"day", "title", "description"}`` and gallery images
``{"url", "order", "caption", "crop"}``; the helpers at the bottom return new
lists with ``day`` / ``order`` renumbered to 1..N.
"""
import copy
import threading
from typing import Any, Dict, List, Optional

from tourdesk.models.tour import DEFAULT_DISPLAY_ORDER
from tourdesk.utils.order import renumber

FORM_DEFAULTS: Dict[str, Any] = {
    "id": None,
    "title": "",
    "slug": "",
    "category_id": "",
    "short_description": "",
    "description": "",
    "overview": "",
    "featured_image_url": "",
    "image_gallery_urls": [],
    "itinerary": [],
    "price": "",
    "duration_days": "",
    "display_order": DEFAULT_DISPLAY_ORDER,
    "is_featured": False,
    "is_day_out_package": False,
    "is_published": False,
    "status": "draft",
    "rating": "",
    "location": "",
}


def _blank_if_none(value, default):
    return copy.deepcopy(default) if value is None else value


class FormState:
    def __init__(self):
        self._lock = threading.RLock()
        self._values: Dict[str, Any] = copy.deepcopy(FORM_DEFAULTS)
        self.loading = False

    def load(self, record: Optional[Dict[str, Any]] = None) -> None:
        """Replace the whole state with ``record`` (a blank form when None)."""
        record = record or {}
        values = {
            name: _blank_if_none(record.get(name), default)
            for name, default in FORM_DEFAULTS.items()
        }
        values["itinerary"] = renumber_days(values["itinerary"])
        values["image_gallery_urls"] = renumber_images(values["image_gallery_urls"])

        with self._lock:
            self._values = values

    def get(self, name: str) -> Any:
        with self._lock:
            return copy.deepcopy(self._values[name])

    def set_field(self, name: str, value: Any) -> None:
        if name not in FORM_DEFAULTS:
            raise KeyError(name)
        with self._lock:
            self._values[name] = value

    def set_itinerary(self, days: List[Dict[str, Any]]) -> None:
        with self._lock:
            self._values["itinerary"] = list(days)

    def set_gallery(self, images: List[Dict[str, Any]]) -> None:
        with self._lock:
            self._values["image_gallery_urls"] = list(images)

    @property
    def tour_id(self) -> Optional[str]:
        with self._lock:
            return self._values["id"]

    def as_dict(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._values)


# Itinerary

def renumber_days(days: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return renumber(days, order_field="day")


def add_day(days, title: str = "", description: str = ""):
    return renumber_days([*days, {"title": title, "description": description}])


def insert_day(days, index: int, title: str = "", description: str = ""):
    items = list(days)
    items.insert(index, {"title": title, "description": description})
    return renumber_days(items)


def remove_day(days, index: int):
    items = list(days)
    del items[index]
    return renumber_days(items)


def move_day(days, from_index: int, to_index: int):
    items = list(days)
    items.insert(to_index, items.pop(from_index))
    return renumber_days(items)


def update_day(days, index: int, **changes):
    items = list(days)
    items[index] = {**items[index], **changes}
    return renumber_days(items)


# Gallery

def renumber_images(images: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return renumber(images, order_field="order")


def add_image(images, url: str, caption: str = ""):
    return renumber_images([*images, {"url": url, "caption": caption, "crop": None}])


def remove_image(images, index: int):
    items = list(images)
    del items[index]
    return renumber_images(items)


def move_image(images, index: int, offset: int):
    """Move up (offset -1) or down (+1); out of range moves are no-ops."""
    target = index + offset
    items = list(images)
    if not 0 <= target < len(items):
        return renumber_images(items)
    items[index], items[target] = items[target], items[index]
    return renumber_images(items)


def set_image_crop(images, index: int, crop: Optional[Dict[str, float]]):
    items = list(images)
    items[index] = {**items[index], "crop": crop}
    return renumber_images(items)
