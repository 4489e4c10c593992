"""
In-process gateway: calls the application services directly inside an
application context of the Flask app.
"""
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional

from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from tourdesk.application.auth.sign_in import AuthenticationError, authenticate_admin
from tourdesk.application.tours.autosave_tour import autosave_tour
from tourdesk.application.tours.check_slug import is_slug_available
from tourdesk.application.tours.create_tour import create_tour
from tourdesk.application.tours.delete_tour import delete_tour
from tourdesk.application.tours.replace_tour_images import replace_tour_images, set_overview_image
from tourdesk.application.tours.replace_tour_sections import replace_tour_sections
from tourdesk.application.tours.update_tour import get_tour, update_tour
from tourdesk.domain.invariants.exceptions import EntityNotFound, InvariantViolation, SlugConflict
from tourdesk.models.category import Category
from tourdesk.normalizers.category import normalize_category
from tourdesk.normalizers.tour import normalize_tour
from tourdesk.utils import media
from .base import AuthSubject, GatewayError, PersistenceGateway


def _status_for(exc: Exception) -> int:
    if isinstance(exc, SlugConflict):
        return 409
    if isinstance(exc, EntityNotFound):
        return 404
    if isinstance(exc, AuthenticationError):
        return exc.status_code
    if isinstance(exc, (InvariantViolation, media.StorageError)):
        return 400
    return 500


class SqlAlchemyGateway(PersistenceGateway):
    def __init__(self, app: Flask):
        self.app = app
        self._subject: Optional[AuthSubject] = None

    @contextmanager
    def _call(self) -> Iterator[None]:
        with self.app.app_context():
            try:
                yield
            except (
                InvariantViolation,
                EntityNotFound,
                AuthenticationError,
                media.StorageError,
                SQLAlchemyError,
            ) as exc:
                raise GatewayError(str(exc), _status_for(exc)) from exc

    @property
    def _actor_id(self) -> Optional[str]:
        return self._subject.id if self._subject else None

    # -- records ---------------------------------------------------------

    def get_tour(self, tour_id: str) -> Dict[str, Any]:
        with self._call():
            return normalize_tour(get_tour(tour_id))

    def list_categories(self, active_only: bool = True) -> List[Dict[str, Any]]:
        with self._call():
            query = Category.query
            if active_only:
                query = query.filter(Category.is_active.is_(True))
            return [normalize_category(c) for c in query.order_by(Category.name.asc()).all()]

    def create_tour(self, fields: Dict[str, Any]) -> str:
        with self._call():
            return create_tour(actor_id=self._actor_id, data=fields).id

    def update_tour(self, tour_id: str, fields: Dict[str, Any]) -> str:
        with self._call():
            return update_tour(tour_id=tour_id, actor_id=self._actor_id, data=fields).id

    def autosave_tour(self, tour_id: str, fields: Dict[str, Any]) -> str:
        with self._call():
            return autosave_tour(tour_id=tour_id, actor_id=self._actor_id, data=fields).id

    def delete_tour(self, tour_id: str) -> None:
        with self._call():
            delete_tour(tour_id=tour_id, actor_id=self._actor_id)

    def replace_tour_images(
        self,
        tour_id: str,
        sections: Iterable[str],
        images: List[Dict[str, Any]],
    ) -> None:
        with self._call():
            replace_tour_images(
                tour_id=tour_id,
                sections=list(sections),
                images=images,
                actor_id=self._actor_id,
            )

    def set_overview_image(self, tour_id: str, image_url: Optional[str]) -> None:
        with self._call():
            set_overview_image(tour_id=tour_id, image_url=image_url, actor_id=self._actor_id)

    def replace_tour_sections(self, tour_id: str, sections: List[Dict[str, Any]]) -> None:
        with self._call():
            replace_tour_sections(tour_id=tour_id, sections=sections, actor_id=self._actor_id)

    # -- remote procedure ------------------------------------------------

    def check_slug_available(self, slug: str, exclude_tour_id: Optional[str]) -> bool:
        with self._call():
            return is_slug_available(slug=slug, exclude_tour_id=exclude_tour_id)

    # -- object storage --------------------------------------------------

    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        with self._call():
            return media.save_object(bucket, path, data, content_type)

    def public_url(self, bucket: str, path: str) -> str:
        with self._call():
            return media.public_url(bucket, path)

    # -- auth --------------------------------------------------------------

    def sign_in(self, email: str, password: str) -> AuthSubject:
        with self._call():
            user = authenticate_admin(email, password)
            self._subject = AuthSubject(id=user.id, email=user.email, role=user.role)
        return self._subject

    def sign_out(self) -> None:
        self._subject = None

    def current_subject(self) -> Optional[AuthSubject]:
        return self._subject
