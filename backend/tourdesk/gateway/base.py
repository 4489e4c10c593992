"""
Persistence Gateway contract used by the tour editor.

The editor never talks to the database, the HTTP API or the storage folder
directly; it receives one ``PersistenceGateway`` and every failure surfaces as
``GatewayError``.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional


class GatewayError(Exception):
    """A remote read/write, storage or auth call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class AuthSubject:
    id: str
    email: str
    role: str


class PersistenceGateway(ABC):

    # -- records ---------------------------------------------------------

    @abstractmethod
    def get_tour(self, tour_id: str) -> Dict[str, Any]:
        ...

    @abstractmethod
    def list_categories(self, active_only: bool = True) -> List[Dict[str, Any]]:
        """Categories ordered by name."""

    @abstractmethod
    def create_tour(self, fields: Dict[str, Any]) -> str:
        """Insert a tour and return its id."""

    @abstractmethod
    def update_tour(self, tour_id: str, fields: Dict[str, Any]) -> str:
        ...

    @abstractmethod
    def autosave_tour(self, tour_id: str, fields: Dict[str, Any]) -> str:
        """Update restricted to the autosave field subset."""

    @abstractmethod
    def delete_tour(self, tour_id: str) -> None:
        ...

    @abstractmethod
    def replace_tour_images(
        self,
        tour_id: str,
        sections: Iterable[str],
        images: List[Dict[str, Any]],
    ) -> None:
        """Delete the tour's image rows of ``sections`` and insert ``images``."""

    @abstractmethod
    def set_overview_image(self, tour_id: str, image_url: Optional[str]) -> None:
        ...

    @abstractmethod
    def replace_tour_sections(self, tour_id: str, sections: List[Dict[str, Any]]) -> None:
        ...

    # -- remote procedure ------------------------------------------------

    @abstractmethod
    def check_slug_available(self, slug: str, exclude_tour_id: Optional[str]) -> bool:
        ...

    # -- object storage --------------------------------------------------

    @abstractmethod
    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        """Store bytes under ``bucket/path`` and return the stored path."""

    @abstractmethod
    def public_url(self, bucket: str, path: str) -> str:
        ...

    # -- auth --------------------------------------------------------------

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthSubject:
        """Only admin subjects are accepted."""

    @abstractmethod
    def sign_out(self) -> None:
        ...

    @abstractmethod
    def current_subject(self) -> Optional[AuthSubject]:
        ...
