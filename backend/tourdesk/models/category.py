from tourdesk.extensions import db
from .base import BaseModel


class Category(BaseModel):
    __tablename__ = "categories"

    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)

    # Plain label matched against another category's name, not a foreign key
    parent_category = db.Column(db.String(200), nullable=True)

    image_url = db.Column(db.String(512), nullable=True)
    display_order = db.Column(db.Integer, default=0)
    is_active = db.Column(db.Boolean, default=True, index=True)
