from flask import request, jsonify
from tourdesk.utils.decorators import admin_required
from tourdesk.utils.media import StorageError, public_url, save_object
from . import v1_bp


@v1_bp.route("/storage/<bucket>", methods=["POST"])
@admin_required
def upload_object(bucket):
    """
    multipart/form-data: ``file`` plus the target ``path`` inside the bucket.
    """
    upload = request.files.get("file")
    path = request.form.get("path")

    if upload is None or not path:
        return jsonify({"error": "file and path are required"}), 400

    try:
        stored_path = save_object(bucket, path, upload.read(), upload.mimetype)
    except StorageError as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify({
        "path": stored_path,
        "public_url": public_url(bucket, stored_path),
    }), 201
