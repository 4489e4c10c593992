from tourdesk.models.tour import Tour


def is_slug_available(*, slug: str, exclude_tour_id: str | None = None) -> bool:
    """
    True when no tour other than ``exclude_tour_id`` uses ``slug``.
    """
    candidate = (slug or "").strip()
    if not candidate:
        return False

    query = Tour.query.filter(Tour.slug == candidate)
    if exclude_tour_id:
        query = query.filter(Tour.id != exclude_tour_id)

    return query.first() is None
