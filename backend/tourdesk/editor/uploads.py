import logging
import mimetypes
import os
import secrets
from typing import Optional

from tourdesk.config import DEFAULT_BUCKET, MAX_UPLOAD_BYTES
from tourdesk.gateway.base import GatewayError, PersistenceGateway
from tourdesk.utils.media import ALLOWED_CONTENT_TYPES, ALLOWED_EXTENSIONS
from .drafts import DraftMaterializer

logger = logging.getLogger(__name__)

_EXTENSION_FOR_TYPE = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class UploadRejected(ValueError):
    pass


def object_path(tour_id: Optional[str], extension: str) -> str:
    name = f"{secrets.token_hex(8)}.{extension}"
    return f"{tour_id}/{name}" if tour_id else name


class ImageUploader:
    def __init__(
        self,
        gateway: PersistenceGateway,
        materializer: DraftMaterializer,
        bucket: str = DEFAULT_BUCKET,
        max_bytes: int = MAX_UPLOAD_BYTES,
    ):
        self.gateway = gateway
        self.materializer = materializer
        self.bucket = bucket
        self.max_bytes = max_bytes

    def _extension(self, filename: str, content_type: Optional[str]) -> str:
        content_type = (content_type or mimetypes.guess_type(filename)[0] or "").lower()
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise UploadRejected("Only JPEG, PNG, and WebP images are allowed")

        extension = os.path.splitext(filename)[1].lstrip(".").lower()
        if extension not in ALLOWED_EXTENSIONS:
            extension = _EXTENSION_FOR_TYPE[content_type]
        return extension

    def upload(
        self,
        filename: str,
        data: bytes,
        content_type: Optional[str] = None,
        *,
        main_image: bool = False,
    ) -> str:
        """
        Store one image and return its public URL.

        Raises ``UploadRejected`` for files that fail the local checks and
        ``GatewayError`` when storage refuses them.
        """
        if len(data) > self.max_bytes:
            raise UploadRejected(f"File must be under {self.max_bytes // (1024 * 1024)}MB")

        extension = self._extension(filename, content_type)
        content_type = content_type or mimetypes.guess_type(filename)[0]

        tour_id = self.materializer.ensure_tour_id()
        path = self.gateway.upload(self.bucket, object_path(tour_id, extension), data, content_type)
        url = self.gateway.public_url(self.bucket, path)

        if main_image and tour_id:
            try:
                self.gateway.set_overview_image(tour_id, url)
            except GatewayError as exc:
                logger.warning("Overview image row for tour %s not updated: %s", tour_id, exc.message)

        return url
