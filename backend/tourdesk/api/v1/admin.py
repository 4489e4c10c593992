from flask import jsonify
from tourdesk.models.category import Category
from tourdesk.models.inquiry import ContactInquiry, DayOutInquiry, Inquiry, QuickEnquiry
from tourdesk.models.tour import Tour
from tourdesk.utils.decorators import admin_required
from . import v1_bp


@v1_bp.route("/admin/dashboard", methods=["GET"])
@admin_required
def admin_dashboard():
    return jsonify({
        "tours": Tour.query.count(),
        "published_tours": Tour.query.filter_by(is_published=True).count(),
        "day_out_packages": Tour.query.filter_by(is_day_out_package=True).count(),
        "categories": Category.query.count(),
        "new_inquiries": {
            "tour": Inquiry.query.filter_by(status="new").count(),
            "day-out": DayOutInquiry.query.filter_by(status="new").count(),
            "contact": ContactInquiry.query.filter_by(status="new").count(),
            "quick": QuickEnquiry.query.filter_by(status="new").count(),
        },
    })
