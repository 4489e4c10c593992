from typing import Any, Dict
from tourdesk.models.tour import Tour
from .fields import AUTOSAVE_FIELDS
from .update_tour import update_tour


def autosave_tour(
    *,
    tour_id: str,
    actor_id: str | None,
    data: Dict[str, Any],
) -> Tour:
    """
    Persist the autosave subset of an in-progress edit.

    Itinerary, gallery and publication state are ignored here; they are only
    written by a full save.
    """
    return update_tour(
        tour_id=tour_id,
        actor_id=actor_id,
        data=data,
        fields=AUTOSAVE_FIELDS,
        action="tour.autosave",
    )
