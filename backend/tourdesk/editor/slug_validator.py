import enum
import logging
from dataclasses import dataclass
from typing import Optional

from tourdesk.gateway.base import GatewayError, PersistenceGateway

logger = logging.getLogger(__name__)

SLUG_REQUIRED = "Slug is required"
SLUG_AVAILABLE = "Slug is available"
SLUG_IN_USE = "Slug is already in use"
SLUG_CHECK_FAILED = "Unable to validate slug right now"


class SlugStatus(str, enum.Enum):
    UNKNOWN = "unknown"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class SlugCheck:
    status: SlugStatus
    message: str

    @property
    def ok(self) -> bool:
        return self.status is SlugStatus.AVAILABLE


class SlugValidator:
    """
    Ask the gateway whether a slug is free for this tour.

    Transport failures count as unavailable; an unverified slug never passes.
    """

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway
        self.last_check = SlugCheck(SlugStatus.UNKNOWN, SLUG_REQUIRED)

    def check(self, slug: Optional[str], tour_id: Optional[str]) -> SlugCheck:
        candidate = (slug or "").strip()

        if not candidate:
            result = SlugCheck(SlugStatus.UNKNOWN, SLUG_REQUIRED)
        else:
            try:
                available = self.gateway.check_slug_available(candidate, tour_id)
            except GatewayError as exc:
                logger.warning("Slug check for %r failed: %s", candidate, exc.message)
                result = SlugCheck(SlugStatus.UNAVAILABLE, SLUG_CHECK_FAILED)
            else:
                if available:
                    result = SlugCheck(SlugStatus.AVAILABLE, SLUG_AVAILABLE)
                else:
                    result = SlugCheck(SlugStatus.UNAVAILABLE, SLUG_IN_USE)

        self.last_check = result
        return result

    def reset(self) -> None:
        self.last_check = SlugCheck(SlugStatus.UNKNOWN, SLUG_REQUIRED)
