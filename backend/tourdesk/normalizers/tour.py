from ._time import iso

TOUR_FIELDS = (
    "title",
    "slug",
    "category_id",
    "short_description",
    "description",
    "overview",
    "featured_image_url",
    "image_gallery_urls",
    "itinerary",
    "price",
    "duration_days",
    "display_order",
    "is_featured",
    "is_day_out_package",
    "is_published",
    "status",
    "rating",
    "review_count",
    "location",
)


def normalize_tour(tour, admin=False):
    data = {"id": tour.id}
    data.update({field: getattr(tour, field) for field in TOUR_FIELDS})
    data["image_gallery_urls"] = list(tour.image_gallery_urls or [])
    data["itinerary"] = list(tour.itinerary or [])

    if admin:
        data["created_by"] = tour.created_by
        data["created_at"] = iso(tour.created_at)
        data["updated_at"] = iso(tour.updated_at)

    return data


def normalize_tour_summary(tour):
    """Row shape for the tours / day-out packages tables."""
    return {
        "id": tour.id,
        "title": tour.title,
        "slug": tour.slug,
        "status": tour.status,
        "is_published": tour.is_published,
        "is_featured": tour.is_featured,
        "is_day_out_package": tour.is_day_out_package,
        "display_order": tour.display_order,
        "short_description": tour.short_description,
        "category": tour.category.name if tour.category else None,
        "created_at": iso(tour.created_at),
    }
