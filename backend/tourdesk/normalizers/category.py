def normalize_category(category):
    return {
        "id": category.id,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "parent_category": category.parent_category,
        "image_url": category.image_url,
        "display_order": category.display_order,
        "is_active": category.is_active,
    }
