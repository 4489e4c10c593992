from tourdesk.extensions import db
from .base import BaseModel


class TourSection(BaseModel):
    __tablename__ = "tour_sections"

    tour_id = db.Column(db.String(36), db.ForeignKey("tours.id"), nullable=False, index=True)
    type = db.Column(db.String(50), nullable=False)  # overview, itinerary
    title = db.Column(db.String(200), nullable=True)
    content = db.Column(db.JSON, default=dict)
    order = db.Column(db.Integer, default=0)
    is_visible = db.Column(db.Boolean, default=True)
    created_by = db.Column(db.String(36), nullable=True)

    tour = db.relationship("Tour", back_populates="sections")
