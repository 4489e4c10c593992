from typing import Set
from tourdesk.domain.invariants.exceptions import InvariantViolation

# Explicit allowed state transitions; staying in the same status is always allowed
ALLOWED_TOUR_TRANSITIONS: dict[str, Set[str]] = {
    "draft": {"published", "archived"},
    "published": {"archived"},  # published → draft is not allowed, archive instead
    "archived": {"draft", "published"},
}


def assert_tour_transition(*, from_status: str | None, to_status: str) -> None:
    """
    Guards tour lifecycle transitions.
    Single source of truth for status changes.
    """
    if to_status not in ALLOWED_TOUR_TRANSITIONS:
        raise InvariantViolation(f"Unknown tour status: {to_status}")

    if from_status is None or from_status == to_status:
        return

    allowed = ALLOWED_TOUR_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise InvariantViolation(
            f"Illegal tour transition: {from_status} → {to_status}"
        )
