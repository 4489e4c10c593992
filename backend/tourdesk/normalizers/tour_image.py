def normalize_tour_image(image):
    return {
        "id": image.id,
        "tour_id": image.tour_id,
        "image_url": image.image_url,
        "section": image.section,
        "display_order": image.display_order,
        "caption": image.caption,
        "alt_text": image.alt_text,
        "is_active": image.is_active,
        "crop": image.crop,
    }


def normalize_tour_section(section):
    return {
        "id": section.id,
        "tour_id": section.tour_id,
        "type": section.type,
        "title": section.title,
        "content": section.content or {},
        "order": section.order,
        "is_visible": section.is_visible,
    }
