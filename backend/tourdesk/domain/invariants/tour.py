from .itinerary import assert_itinerary
from .gallery import assert_gallery
from .exceptions import InvariantViolation

RATING_MIN = 0.0
RATING_MAX = 5.0


def assert_rating(rating):
    if rating is None:
        return

    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        raise InvariantViolation(f"Rating must be a number, got {rating!r}")

    if not RATING_MIN <= rating <= RATING_MAX:
        raise InvariantViolation(
            f"Rating must be between {RATING_MIN} and {RATING_MAX}: {rating}"
        )


def assert_tour(tour):
    if not (tour.title or "").strip():
        raise InvariantViolation("Tour title is required.")

    if not (tour.slug or "").strip():
        raise InvariantViolation("Tour slug is required.")

    assert_rating(tour.rating)
    assert_itinerary(tour.itinerary or [])
    assert_gallery(tour.image_gallery_urls or [])
