import os
from werkzeug.utils import secure_filename
from flask import current_app

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'webp'}
ALLOWED_CONTENT_TYPES = {'image/jpeg', 'image/jpg', 'image/png', 'image/webp'}


class StorageError(ValueError):
    pass


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def normalize_object_path(path: str) -> str:
    """
    Sanitize every segment of a bucket path, e.g. ``<tour-id>/<name>.<ext>``.
    """
    segments = [secure_filename(part) for part in (path or "").split("/") if part]
    if not segments or not all(segments):
        raise StorageError("Invalid object path")
    return "/".join(segments)


def bucket_root(bucket: str) -> str:
    if bucket not in current_app.config["STORAGE_BUCKETS"]:
        raise StorageError(f"Unknown bucket: {bucket}")

    upload_folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    return os.path.abspath(os.path.join(upload_folder, bucket))


def save_object(bucket: str, path: str, data: bytes, content_type: str | None = None) -> str:
    """
    Store ``data`` under ``bucket/path``. Existing objects are never overwritten.

    Returns the normalized object path.
    """
    object_path = normalize_object_path(path)

    if not allowed_file(object_path):
        raise StorageError("File type not allowed")

    if content_type and content_type.lower() not in ALLOWED_CONTENT_TYPES:
        raise StorageError("Only JPEG, PNG, and WebP images are allowed")

    max_bytes = current_app.config["MAX_UPLOAD_BYTES"]
    if len(data) > max_bytes:
        raise StorageError(f"File must be under {max_bytes // (1024 * 1024)}MB")

    root = bucket_root(bucket)
    file_path = os.path.join(root, *object_path.split("/"))

    if os.path.exists(file_path):
        raise StorageError("The resource already exists")

    os.makedirs(os.path.dirname(file_path), exist_ok=True)
    with open(file_path, "wb") as fh:
        fh.write(data)

    current_app.logger.info("Stored %s/%s (%d bytes)", bucket, object_path, len(data))
    return object_path


def public_url(bucket: str, path: str) -> str:
    base = current_app.config["PUBLIC_MEDIA_URL"].rstrip("/")
    return f"{base}/{bucket}/{normalize_object_path(path)}"


def object_path_for_url(bucket: str, url: str | None) -> str | None:
    """
    Inverse of ``public_url``: the object path when ``url`` points into
    ``bucket``, else None.
    """
    prefix = f"{current_app.config['PUBLIC_MEDIA_URL'].rstrip('/')}/{bucket}/"
    if not url or not url.startswith(prefix):
        return None
    return url[len(prefix):] or None


def delete_object(bucket: str, path: str) -> bool:
    """
    Deletes a stored object. Returns False when it does not exist.
    """
    file_path = os.path.join(bucket_root(bucket), *normalize_object_path(path).split("/"))

    if not os.path.exists(file_path):
        return False

    try:
        os.remove(file_path)
        return True
    except OSError as e:
        current_app.logger.error(f"Failed to delete file {file_path}: {e}")
        return False
