from tourdesk.extensions import db
from .base import BaseModel, utc_now


class InquiryMixin:
    status = db.Column(db.String(20), nullable=False, default="new", index=True)
    submitted_at = db.Column(db.DateTime(timezone=True), default=utc_now, index=True)


class Inquiry(BaseModel, InquiryMixin):
    """Tour inquiry submitted from a tour page."""
    __tablename__ = "inquiries"

    tour_id = db.Column(db.String(36), db.ForeignKey("tours.id", ondelete="SET NULL"), nullable=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=False)
    contact_number = db.Column(db.String(50), nullable=True)
    message = db.Column(db.Text, nullable=False)
    admin_notes = db.Column(db.Text, nullable=True)
    nationality = db.Column(db.String(100), nullable=True)
    date_of_travel = db.Column(db.String(50), nullable=True)
    number_of_people = db.Column(db.String(20), nullable=True)
    number_of_kids = db.Column(db.String(20), nullable=True)
    number_of_rooms = db.Column(db.Integer, nullable=True)
    hotel_category = db.Column(db.String(20), nullable=True)  # 3-star, 4-star, 5-star


class DayOutInquiry(BaseModel, InquiryMixin):
    __tablename__ = "day_out_inquiries"

    package_id = db.Column(db.String(36), db.ForeignKey("tours.id", ondelete="CASCADE"), nullable=False)
    name = db.Column(db.String(200), nullable=False)
    mobile_no = db.Column(db.String(50), nullable=False)
    destination = db.Column(db.String(200), nullable=True)
    number_of_people = db.Column(db.Integer, nullable=False, default=1)
    preferred_date = db.Column(db.String(50), nullable=False)
    special_comments = db.Column(db.Text, nullable=True)


class ContactInquiry(BaseModel, InquiryMixin):
    __tablename__ = "contact_inquiries"

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=False)
    subject = db.Column(db.String(300), nullable=False)
    message = db.Column(db.Text, nullable=False)


class QuickEnquiry(BaseModel, InquiryMixin):
    """Homepage quick enquiry form."""
    __tablename__ = "quick_enquiries"

    name = db.Column(db.String(200), nullable=False)
    mobile_no = db.Column(db.String(50), nullable=False)
    destination = db.Column(db.String(200), nullable=True)
    number_of_people = db.Column(db.Integer, nullable=True)
    preferred_date = db.Column(db.String(50), nullable=True)
    special_comments = db.Column(db.Text, nullable=True)
