from flask import g, has_request_context
from tourdesk.extensions import db
from tourdesk.models.audit_log import AuditLog
from typing import Optional


def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None,
    actor_id: Optional[str] = None,
):
    """
    Stage an audit row in the current session.

    The actor falls back to the user resolved for the current request when
    the caller does not pass one (in-process gateway calls do).
    """
    if actor_id is None and has_request_context():
        user = getattr(g, "current_user", None)
        actor_id = user.id if user is not None else None

    log = AuditLog()
    log.actor_id = actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = str(entity_id) if entity_id is not None else "*"
    log.payload = payload or {}

    db.session.add(log)
