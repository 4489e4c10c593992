from typing import Optional
from tourdesk.extensions import db
from tourdesk.models.inquiry import ContactInquiry, DayOutInquiry, Inquiry, QuickEnquiry
from tourdesk.domain.invariants.exceptions import EntityNotFound, InvariantViolation
from tourdesk.domain.lifecycle.inquiry import assert_inquiry_status
from tourdesk.utils.audit import log_action
from tourdesk.utils.transaction import transactional

INQUIRY_MODELS = {
    "tour": Inquiry,
    "day-out": DayOutInquiry,
    "contact": ContactInquiry,
    "quick": QuickEnquiry,
}


def inquiry_model(kind: str):
    model = INQUIRY_MODELS.get(kind)
    if model is None:
        raise EntityNotFound(f"Unknown inquiry kind: {kind}")
    return model


def update_inquiry_status(
    *,
    kind: str,
    inquiry_id: str,
    status: str,
    actor_id: str | None,
    admin_notes: Optional[str] = None,
):
    """
    Move an inquiry to ``status``. Tour inquiries also accept admin notes.
    """
    model = inquiry_model(kind)
    inquiry = db.session.get(model, inquiry_id)
    if inquiry is None:
        raise EntityNotFound("Inquiry not found")

    assert_inquiry_status(kind=kind, status=status)

    if admin_notes is not None and kind != "tour":
        raise InvariantViolation("Only tour inquiries carry admin notes")

    previous = inquiry.status

    with transactional():
        inquiry.status = status
        if admin_notes is not None:
            inquiry.admin_notes = admin_notes

        log_action(
            action=f"inquiry.{kind}.status",
            entity_type="inquiry",
            entity_id=inquiry.id,
            payload={"from": previous, "to": status},
            actor_id=actor_id,
        )

    return inquiry
