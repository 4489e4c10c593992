from tourdesk.extensions import db
from .base import BaseModel

TOUR_STATUSES = ("draft", "published", "archived")
DEFAULT_DISPLAY_ORDER = 999


class Tour(BaseModel):
    __tablename__ = "tours"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)
    category_id = db.Column(db.String(36), db.ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)

    short_description = db.Column(db.String(500), nullable=True)
    description = db.Column(db.Text, nullable=True)
    overview = db.Column(db.Text, nullable=True)  # rich-text HTML

    featured_image_url = db.Column(db.String(512), nullable=True)
    image_gallery_urls = db.Column(db.JSON, default=list)  # [{url, order, section, crop}]
    itinerary = db.Column(db.JSON, default=list)  # [{day, title, description}]

    price = db.Column(db.Float, nullable=True)
    duration_days = db.Column(db.Integer, nullable=True)
    display_order = db.Column(db.Integer, default=DEFAULT_DISPLAY_ORDER)

    is_featured = db.Column(db.Boolean, default=False)
    is_day_out_package = db.Column(db.Boolean, default=False, index=True)
    is_published = db.Column(db.Boolean, default=False, index=True)
    status = db.Column(db.String(20), default="draft", index=True)

    rating = db.Column(db.Float, nullable=True)
    review_count = db.Column(db.Integer, default=0)
    location = db.Column(db.String(200), nullable=True)

    created_by = db.Column(db.String(36), nullable=True)

    category = db.relationship("Category")

    images = db.relationship(
        "TourImage",
        back_populates="tour",
        order_by="TourImage.display_order",
        cascade="all, delete-orphan"
    )
    sections = db.relationship(
        "TourSection",
        back_populates="tour",
        order_by="TourSection.order",
        cascade="all, delete-orphan"
    )
