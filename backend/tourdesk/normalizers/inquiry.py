from ._time import iso

# Columns exposed per inquiry kind, besides id/status/submitted_at
INQUIRY_COLUMNS = {
    "tour": (
        "tour_id", "name", "email", "contact_number", "message", "admin_notes",
        "nationality", "date_of_travel", "number_of_people", "number_of_kids",
        "number_of_rooms", "hotel_category",
    ),
    "day-out": (
        "package_id", "name", "mobile_no", "destination", "number_of_people",
        "preferred_date", "special_comments",
    ),
    "contact": ("name", "email", "subject", "message"),
    "quick": (
        "name", "mobile_no", "destination", "number_of_people",
        "preferred_date", "special_comments",
    ),
}


def normalize_inquiry(inquiry, kind):
    data = {
        "id": inquiry.id,
        "status": inquiry.status,
        "submitted_at": iso(inquiry.submitted_at),
    }
    for column in INQUIRY_COLUMNS[kind]:
        data[column] = getattr(inquiry, column)
    return data
