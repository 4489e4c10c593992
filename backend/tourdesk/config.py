import os
from dotenv import load_dotenv

load_dotenv()

# Editor-side settings (read by tourdesk.editor and tourdesk.gateway)
AUTOSAVE_INTERVAL_SECONDS = float(os.getenv("AUTOSAVE_INTERVAL_SECONDS", "30"))
EDITOR_API_URL = os.getenv("EDITOR_API_URL", "http://localhost:5000/api/v1")
# Public media base for derived URLs; defaults to "<api host>/media"
EDITOR_MEDIA_URL = os.getenv("EDITOR_MEDIA_URL")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
DEFAULT_BUCKET = "tour-images"


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    PUBLIC_MEDIA_URL = os.getenv("PUBLIC_MEDIA_URL", "/media")
    MAX_UPLOAD_BYTES = MAX_UPLOAD_BYTES
    STORAGE_BUCKETS = set(
        b.strip() for b in os.getenv("STORAGE_BUCKETS", DEFAULT_BUCKET).split(",") if b.strip()
    )


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///tourdesk-dev.db")


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    PUBLIC_MEDIA_URL = "http://media.test/media"


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
