from .exceptions import InvariantViolation


def assert_gallery_order(images):
    orders = [image.get("order") for image in images]
    if not orders:
        return

    expected = list(range(1, len(orders) + 1))
    if orders != expected:
        raise InvariantViolation(
            f"Gallery orders are not consecutive starting from 1: {orders}"
        )


def assert_crop(crop):
    if crop is None:
        return

    try:
        x, y = crop["x"], crop["y"]
        width, height = crop["width"], crop["height"]
        aspect_ratio = crop.get("aspect_ratio")
    except (KeyError, TypeError):
        raise InvariantViolation(f"Crop must define x, y, width and height: {crop!r}")

    if x < 0 or y < 0:
        raise InvariantViolation("Crop offsets must not be negative.")

    if width <= 0 or height <= 0:
        raise InvariantViolation("Crop width and height must be positive.")

    if aspect_ratio is not None and aspect_ratio <= 0:
        raise InvariantViolation("Crop aspect ratio must be positive.")


def assert_gallery(images):
    if not isinstance(images, list):
        raise InvariantViolation("Gallery must be a list of images.")

    for image in images:
        if not isinstance(image, dict) or not image.get("url"):
            raise InvariantViolation(f"Gallery image must have a url: {image!r}")
        assert_crop(image.get("crop"))

    assert_gallery_order(images)
