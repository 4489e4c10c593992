"""
Gateway that talks to the back-office REST API over HTTP.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from tourdesk.config import EDITOR_API_URL, EDITOR_MEDIA_URL, HTTP_TIMEOUT_SECONDS
from .base import AuthSubject, GatewayError, PersistenceGateway

logger = logging.getLogger(__name__)


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    if isinstance(payload, dict):
        return payload.get("message") or payload.get("error") or f"HTTP {response.status_code}"
    return f"HTTP {response.status_code}"


class HttpGateway(PersistenceGateway):
    def __init__(
        self,
        base_url: str = EDITOR_API_URL,
        *,
        media_url: Optional[str] = None,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        default_media_url = self.base_url.rsplit("/api/", 1)[0] + "/media"
        self.media_url = (media_url or EDITOR_MEDIA_URL or default_media_url).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._public_urls: Dict[tuple, str] = {}
        self._subject: Optional[AuthSubject] = None

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise GatewayError(f"Request to {path} failed: {exc}") from exc

        if not response.ok:
            raise GatewayError(_error_message(response), response.status_code)

        if not response.content:
            return None
        return response.json()

    # -- records ---------------------------------------------------------

    def get_tour(self, tour_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/tours/{tour_id}")

    def list_categories(self, active_only: bool = True) -> List[Dict[str, Any]]:
        params = {"order": "name"}
        if active_only:
            params["active"] = "1"
        return self._request("GET", "/categories", params=params)

    def create_tour(self, fields: Dict[str, Any]) -> str:
        return self._request("POST", "/tours", json=fields)["id"]

    def update_tour(self, tour_id: str, fields: Dict[str, Any]) -> str:
        return self._request("PATCH", f"/tours/{tour_id}", json=fields)["id"]

    def autosave_tour(self, tour_id: str, fields: Dict[str, Any]) -> str:
        return self._request("PATCH", f"/tours/{tour_id}/autosave", json=fields)["id"]

    def delete_tour(self, tour_id: str) -> None:
        self._request("DELETE", f"/tours/{tour_id}")

    def replace_tour_images(
        self,
        tour_id: str,
        sections: Iterable[str],
        images: List[Dict[str, Any]],
    ) -> None:
        self._request(
            "PUT",
            f"/tours/{tour_id}/images",
            json={"sections": list(sections), "images": images},
        )

    def set_overview_image(self, tour_id: str, image_url: Optional[str]) -> None:
        self._request("PUT", f"/tours/{tour_id}/images/overview", json={"image_url": image_url})

    def replace_tour_sections(self, tour_id: str, sections: List[Dict[str, Any]]) -> None:
        self._request("PUT", f"/tours/{tour_id}/sections", json={"sections": sections})

    # -- remote procedure ------------------------------------------------

    def check_slug_available(self, slug: str, exclude_tour_id: Optional[str]) -> bool:
        result = self._request(
            "POST",
            "/rpc/check_tour_slug_available",
            json={"p_slug": slug, "p_tour_id": exclude_tour_id},
        )
        return bool(result["available"])

    # -- object storage --------------------------------------------------

    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        filename = path.rsplit("/", 1)[-1]
        result = self._request(
            "POST",
            f"/storage/{bucket}",
            data={"path": path},
            files={"file": (filename, data, content_type)},
        )
        # The server knows its own media base (CDN or otherwise)
        self._public_urls[(bucket, result["path"])] = result["public_url"]
        return result["path"]

    def public_url(self, bucket: str, path: str) -> str:
        known = self._public_urls.get((bucket, path))
        if known:
            return known
        return f"{self.media_url}/{bucket}/{path.lstrip('/')}"

    # -- auth --------------------------------------------------------------

    def sign_in(self, email: str, password: str) -> AuthSubject:
        result = self._request("POST", "/auth/login", json={"email": email, "password": password})

        user = result["user"]
        self.session.headers["Authorization"] = f"Bearer {result['access_token']}"
        self._subject = AuthSubject(id=user["id"], email=user["email"], role=user["role"])
        return self._subject

    def sign_out(self) -> None:
        if self._subject is None:
            return
        try:
            self._request("POST", "/auth/logout")
        finally:
            self.session.headers.pop("Authorization", None)
            self._subject = None

    def current_subject(self) -> Optional[AuthSubject]:
        return self._subject
