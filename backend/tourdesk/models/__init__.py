from .audit_log import AuditLog
from .category import Category
from .inquiry import ContactInquiry, DayOutInquiry, Inquiry, QuickEnquiry
from .site_content import SiteContent
from .tour import Tour
from .tour_image import TourImage
from .tour_section import TourSection
from .user import User

__all__ = [
    "AuditLog",
    "Category",
    "ContactInquiry",
    "DayOutInquiry",
    "Inquiry",
    "QuickEnquiry",
    "SiteContent",
    "Tour",
    "TourImage",
    "TourSection",
    "User",
]
