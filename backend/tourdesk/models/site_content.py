from tourdesk.extensions import db
from .base import BaseModel

HOMEPAGE_HERO_KEY = "homepage_hero_banner"


class SiteContent(BaseModel):
    __tablename__ = "site_content"

    element_key = db.Column(db.String(100), unique=True, nullable=False, index=True)
    content_value = db.Column(db.JSON, nullable=False, default=dict)
