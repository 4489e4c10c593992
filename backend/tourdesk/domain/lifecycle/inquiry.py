from typing import Tuple
from tourdesk.domain.invariants.exceptions import InvariantViolation

INQUIRY_STATUSES: dict[str, Tuple[str, ...]] = {
    "tour": ("new", "in_progress", "resolved", "closed"),
    "day-out": ("new", "contacted", "closed"),
    "contact": ("new", "responded", "archived"),
    "quick": ("new", "contacted", "closed"),
}


def assert_inquiry_status(*, kind: str, status: str) -> None:
    allowed = INQUIRY_STATUSES.get(kind)
    if allowed is None:
        raise InvariantViolation(f"Unknown inquiry kind: {kind}")

    if status not in allowed:
        raise InvariantViolation(
            f"Invalid status '{status}' for {kind} inquiry; expected one of {', '.join(allowed)}"
        )
