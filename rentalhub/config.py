# rentalhub/config.py
import os
from datetime import timedelta


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


class Config:
    # Secret key for sessions / JWT
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-prod")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)

    # Database connection; None falls back to a sqlite file in the instance folder
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Token lifetimes
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=_int_env("ACCESS_TOKEN_MINUTES", 15))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=_int_env("REFRESH_TOKEN_DAYS", 7))
    JWT_TOKEN_LOCATION = ["headers"]

    # Where refresh tokens travel and where refreshed access tokens come back
    REFRESH_TOKEN_COOKIE = os.getenv("REFRESH_TOKEN_COOKIE", "refresh_token")
    REFRESH_TOKEN_HEADER = "X-Refresh-Token"
    ACCESS_TOKEN_HEADER = "X-Access-Token"
    REFRESH_COOKIE_SECURE = os.getenv("REFRESH_COOKIE_SECURE", "true").lower() == "true"

    PASSWORD_RESET_MINUTES = _int_env("PASSWORD_RESET_MINUTES", 10)
    ACTIVATION_CODE_MINUTES = _int_env("ACTIVATION_CODE_MINUTES", 10)

    FRONTEND_BASE_URL = os.getenv("FRONTEND_BASE_URL", "http://127.0.0.1:5173")
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Flask-Mail; without MAIL_SERVER messages are only logged
    MAIL_SERVER = os.getenv("MAIL_SERVER")
    MAIL_PORT = _int_env("MAIL_PORT", 587)
    MAIL_USE_TLS = os.getenv("MAIL_USE_TLS", "true").lower() == "true"
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "no-reply@rentalhub.local")



class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    REFRESH_COOKIE_SECURE = False
    MAIL_SUPPRESS_SEND = True
    LOG_LEVEL = "WARNING"
