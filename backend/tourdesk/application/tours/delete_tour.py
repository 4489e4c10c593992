from flask import current_app
from tourdesk.config import DEFAULT_BUCKET
from tourdesk.extensions import db
from tourdesk.models.tour import Tour
from tourdesk.utils.audit import log_action
from tourdesk.utils.media import delete_object, object_path_for_url
from tourdesk.utils.transaction import transactional
from .update_tour import get_tour


def _owned_object_paths(tour: Tour) -> set[str]:
    """
    Stored objects uploaded under this tour's folder. Root-level uploads
    are never removed; another tour may use them.
    """
    if DEFAULT_BUCKET not in current_app.config["STORAGE_BUCKETS"]:
        return set()

    urls = {tour.featured_image_url}
    urls.update(image.get("url") for image in tour.image_gallery_urls or [])
    urls.update(row.image_url for row in tour.images)

    paths = set()
    for url in urls:
        path = object_path_for_url(DEFAULT_BUCKET, url)
        if path and path.startswith(f"{tour.id}/"):
            paths.add(path)
    return paths


def delete_tour(
    *,
    tour_id: str,
    actor_id: str | None,
) -> None:
    """
    Hard-delete a tour; image and section rows go with it, and so do the
    files stored under the tour's folder.
    """
    tour = get_tour(tour_id)
    paths = _owned_object_paths(tour)

    with transactional():
        db.session.delete(tour)

        log_action(
            action="tour.delete",
            entity_type="tour",
            entity_id=tour_id,
            payload={"slug": tour.slug, "files": sorted(paths)},
            actor_id=actor_id,
        )

    removed = [path for path in sorted(paths) if delete_object(DEFAULT_BUCKET, path)]
    current_app.logger.info("Removed %d stored file(s) of tour %s", len(removed), tour_id)
