from flask import g, request, jsonify
from tourdesk.application.tours.autosave_tour import autosave_tour
from tourdesk.application.tours.create_tour import create_tour
from tourdesk.application.tours.delete_tour import delete_tour
from tourdesk.application.tours.replace_tour_images import replace_tour_images, set_overview_image
from tourdesk.application.tours.replace_tour_sections import replace_tour_sections
from tourdesk.application.tours.update_tour import get_tour, update_tour
from tourdesk.models.tour import Tour
from tourdesk.models.tour_image import TourImage
from tourdesk.normalizers.pagination import normalize_pagination
from tourdesk.normalizers.tour import normalize_tour, normalize_tour_summary
from tourdesk.normalizers.tour_image import normalize_tour_image, normalize_tour_section
from tourdesk.utils.decorators import admin_required
from tourdesk.utils.pagination import paginate_cursor, parse_limit
from . import v1_bp


def _flag(name):
    raw = request.args.get(name)
    if raw is None:
        return None
    return raw.lower() in ("1", "true", "yes")


# ------------------------
# Tours
# ------------------------

@v1_bp.route("/tours", methods=["GET"])
@admin_required
def list_tours():
    query = Tour.query

    day_out = _flag("is_day_out_package")
    if day_out is not None:
        query = query.filter(Tour.is_day_out_package.is_(day_out))

    if status := request.args.get("status"):
        query = query.filter(Tour.status == status)

    # Day-out packages table is ordered by display order, not recency
    if request.args.get("order") == "display_order":
        tours = query.order_by(Tour.display_order.asc(), Tour.title.asc()).all()
        return jsonify(normalize_pagination(tours, normalize_tour_summary))

    items, meta = paginate_cursor(
        query,
        model=Tour,
        limit=parse_limit(request.args.get("limit")),
        cursor=request.args.get("cursor"),
    )

    return jsonify(normalize_pagination(items, normalize_tour_summary, cursor=meta))


@v1_bp.route("/tours", methods=["POST"])
@admin_required
def create_tour_route():
    data = request.get_json(silent=True) or {}
    tour = create_tour(actor_id=g.current_user.id, data=data)

    return jsonify({
        "id": tour.id,
        "message": "Tour created successfully"
    }), 201


@v1_bp.route("/tours/<tour_id>", methods=["GET"])
@admin_required
def get_tour_route(tour_id):
    return jsonify(normalize_tour(get_tour(tour_id), admin=True))


@v1_bp.route("/tours/<tour_id>", methods=["PATCH", "PUT"])
@admin_required
def update_tour_route(tour_id):
    data = request.get_json(silent=True) or {}
    tour = update_tour(tour_id=tour_id, actor_id=g.current_user.id, data=data)

    return jsonify({"id": tour.id, "message": "Tour updated successfully"}), 200


@v1_bp.route("/tours/<tour_id>/autosave", methods=["PATCH"])
@admin_required
def autosave_tour_route(tour_id):
    data = request.get_json(silent=True) or {}
    tour = autosave_tour(tour_id=tour_id, actor_id=g.current_user.id, data=data)

    return jsonify({"id": tour.id, "message": "Draft autosaved"}), 200


@v1_bp.route("/tours/<tour_id>", methods=["DELETE"])
@admin_required
def delete_tour_route(tour_id):
    delete_tour(tour_id=tour_id, actor_id=g.current_user.id)
    return jsonify({"message": "Tour deleted"}), 200


# ------------------------
# Image rows
# ------------------------

@v1_bp.route("/tours/<tour_id>/images", methods=["GET"])
@admin_required
def list_tour_images(tour_id):
    get_tour(tour_id)
    query = TourImage.query.filter_by(tour_id=tour_id)

    if section := request.args.get("section"):
        query = query.filter_by(section=section)

    images = query.order_by(TourImage.section.asc(), TourImage.display_order.asc()).all()
    return jsonify([normalize_tour_image(image) for image in images])


@v1_bp.route("/tours/<tour_id>/images", methods=["PUT"])
@admin_required
def replace_tour_images_route(tour_id):
    data = request.get_json(silent=True) or {}

    sections = data.get("sections")
    images = data.get("images")
    if not isinstance(sections, list) or not isinstance(images, list):
        return jsonify({"error": "sections and images must be lists"}), 400

    rows = replace_tour_images(
        tour_id=tour_id,
        sections=sections,
        images=images,
        actor_id=g.current_user.id,
    )
    return jsonify([normalize_tour_image(row) for row in rows]), 200


@v1_bp.route("/tours/<tour_id>/images/overview", methods=["PUT"])
@admin_required
def set_overview_image_route(tour_id):
    data = request.get_json(silent=True) or {}
    image = set_overview_image(
        tour_id=tour_id,
        image_url=data.get("image_url"),
        actor_id=g.current_user.id,
    )
    return jsonify(normalize_tour_image(image) if image else None), 200


# ------------------------
# Content sections
# ------------------------

@v1_bp.route("/tours/<tour_id>/sections", methods=["PUT"])
@admin_required
def replace_tour_sections_route(tour_id):
    data = request.get_json(silent=True) or {}

    sections = data.get("sections")
    if not isinstance(sections, list):
        return jsonify({"error": "sections must be a list"}), 400

    rows = replace_tour_sections(
        tour_id=tour_id,
        sections=sections,
        types=data.get("types"),
        actor_id=g.current_user.id,
    )
    return jsonify([normalize_tour_section(row) for row in rows]), 200
