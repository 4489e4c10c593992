from typing import Any, Dict, Optional
from tourdesk.extensions import db
from tourdesk.models.category import Category
from tourdesk.domain.invariants.exceptions import EntityNotFound, InvariantViolation, SlugConflict
from tourdesk.utils.audit import log_action
from tourdesk.utils.slug import generate_slug
from tourdesk.utils.transaction import transactional

ALLOWED_CATEGORY_FIELDS = {
    "name", "slug", "description", "parent_category", "image_url", "display_order", "is_active",
}


def save_category(
    *,
    actor_id: str | None,
    data: Dict[str, Any],
    category_id: Optional[str] = None,
) -> Category:
    """
    Create a category, or update ``category_id`` when given.

    The slug is derived from the name when absent and must be unique.
    """
    if category_id is not None:
        category = db.session.get(Category, category_id)
        if category is None:
            raise EntityNotFound("Category not found")
    else:
        category = Category()

    values = {k: v for k, v in data.items() if k in ALLOWED_CATEGORY_FIELDS}

    name = (values.get("name", category.name) or "").strip()
    if not name:
        raise InvariantViolation("Category name is required")
    values["name"] = name

    if not values.get("slug") and not category.slug:
        values["slug"] = generate_slug(name)
    if "slug" in values:
        values["slug"] = generate_slug(values["slug"])
        if not values["slug"]:
            raise InvariantViolation("Category slug is required")

        clash = Category.query.filter(Category.slug == values["slug"])
        if category.id:
            clash = clash.filter(Category.id != category.id)
        if clash.first() is not None:
            raise SlugConflict("A category with this slug already exists")

    if "parent_category" in values:
        values["parent_category"] = values["parent_category"] or None
        if values["parent_category"] == name:
            raise InvariantViolation("A category cannot be its own parent")

    if "display_order" in values:
        try:
            values["display_order"] = int(values["display_order"] or 0)
        except (TypeError, ValueError):
            raise InvariantViolation("display_order must be an integer")

    with transactional():
        for field, value in values.items():
            setattr(category, field, value)

        db.session.add(category)
        db.session.flush()

        log_action(
            action="category.update" if category_id else "category.create",
            entity_type="category",
            entity_id=category.id,
            payload={"fields": sorted(values)},
            actor_id=actor_id,
        )

    return category


def delete_category(*, category_id: str, actor_id: str | None) -> None:
    category = db.session.get(Category, category_id)
    if category is None:
        raise EntityNotFound("Category not found")

    with transactional():
        db.session.delete(category)

        log_action(
            action="category.delete",
            entity_type="category",
            entity_id=category_id,
            payload={"name": category.name},
            actor_id=actor_id,
        )
