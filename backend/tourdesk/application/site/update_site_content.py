from typing import Any, Dict
from tourdesk.models.site_content import SiteContent
from tourdesk.domain.invariants.exceptions import EntityNotFound, InvariantViolation
from tourdesk.extensions import db
from tourdesk.utils.audit import log_action
from tourdesk.utils.transaction import transactional


def get_site_content(element_key: str) -> SiteContent:
    content = SiteContent.query.filter_by(element_key=element_key).first()
    if content is None:
        raise EntityNotFound(f"No site content for '{element_key}'")
    return content


def update_site_content(
    *,
    element_key: str,
    changes: Dict[str, Any],
    actor_id: str | None,
) -> SiteContent:
    """
    Merge ``changes`` into the JSON value stored under ``element_key``,
    creating the row on first write.
    """
    if not isinstance(changes, dict) or not changes:
        raise InvariantViolation("Content changes must be a non-empty object")

    content = SiteContent.query.filter_by(element_key=element_key).first()

    with transactional():
        if content is None:
            content = SiteContent()
            content.element_key = element_key
            content.content_value = {}
            db.session.add(content)

        # Reassign so the JSON column registers the change
        content.content_value = {**(content.content_value or {}), **changes}

        log_action(
            action="site_content.update",
            entity_type="site_content",
            entity_id=element_key,
            payload={"fields": sorted(changes)},
            actor_id=actor_id,
        )

    return content
