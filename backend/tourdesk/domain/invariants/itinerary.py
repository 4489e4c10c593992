from .exceptions import InvariantViolation


def assert_itinerary(itinerary):
    if not isinstance(itinerary, list):
        raise InvariantViolation("Itinerary must be a list of days.")

    days = []
    for entry in itinerary:
        if not isinstance(entry, dict):
            raise InvariantViolation(f"Itinerary entry must be an object: {entry!r}")
        days.append(entry.get("day"))

    expected = list(range(1, len(days) + 1))
    if days != expected:
        raise InvariantViolation(
            f"Itinerary days are not consecutive starting from 1: {days}"
        )
