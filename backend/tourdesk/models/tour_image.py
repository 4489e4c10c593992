from tourdesk.extensions import db
from .base import BaseModel

IMAGE_SECTIONS = ("overview", "gallery", "itinerary")


class TourImage(BaseModel):
    __tablename__ = "tour_images"

    tour_id = db.Column(db.String(36), db.ForeignKey("tours.id"), nullable=False, index=True)
    image_url = db.Column(db.String(512), nullable=False)
    section = db.Column(db.String(50), nullable=True, index=True)  # overview, gallery, itinerary
    display_order = db.Column(db.Integer, default=0)
    caption = db.Column(db.String(300), nullable=True)
    alt_text = db.Column(db.String(300), nullable=True)
    is_active = db.Column(db.Boolean, default=True)
    crop = db.Column(db.JSON, nullable=True)  # {x, y, width, height, aspect_ratio}

    tour = db.relationship("Tour", back_populates="images")
