from typing import Any, Dict

from ._time import iso


def normalize_audit_log(log) -> Dict[str, Any]:
    """
    Audit row as JSON. ``actor_id`` is null for writes made by the CLI or
    an anonymous in-process gateway.
    """
    return {
        "id": log.id,
        "actor_id": log.actor_id,
        "action": log.action,
        "entity": {"type": log.entity_type, "id": log.entity_id},
        "payload": log.payload or {},
        "created_at": iso(log.created_at),
    }
