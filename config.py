import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to the app as gymroster.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "gymroster.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Used when a club row has no timezone set
    DEFAULT_CLUB_TIMEZONE = os.getenv("DEFAULT_CLUB_TIMEZONE", "Australia/Sydney")

    # Floor for a resolved rotation length
    MIN_ROTATION_MINUTES = int(os.getenv("MIN_ROTATION_MINUTES", "1"))

    # Basic app settings
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_LEVEL = "WARNING"
