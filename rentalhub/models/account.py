import hashlib
import secrets
from datetime import datetime, timedelta, timezone

from passlib.hash import pbkdf2_sha256 as hasher

from rentalhub.extensions import db


def utcnow() -> datetime:
    """Naive UTC timestamp, the form the database columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def hash_token(raw: str) -> str:
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class AccountMixin:
    """Columns and helpers shared by every principal that can sign in."""

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    # Session state: bumping token_version kills every outstanding token
    token_version = db.Column(db.Integer, nullable=False, default=0)
    refresh_token_jti = db.Column(db.String(64), nullable=True)
    last_login = db.Column(db.DateTime, nullable=True)

    password_reset_token = db.Column(db.String(64), nullable=True, index=True)
    password_reset_expires = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    @staticmethod
    def normalize_email(email) -> str:
        return str(email or "").strip().lower()

    def set_password(self, raw: str) -> None:
        self.password_hash = hasher.hash(raw)

    def check_password(self, raw: str) -> bool:
        if not raw or not self.password_hash:
            return False
        return hasher.verify(str(raw), self.password_hash)

    def revoke_tokens(self) -> None:
        self.token_version = (self.token_version or 0) + 1
        self.refresh_token_jti = None

    def create_password_reset_token(self, minutes: int = 10) -> str:
        """Stores the sha256 of a fresh token and returns the raw token."""
        raw = secrets.token_hex(32)
        self.password_reset_token = hash_token(raw)
        self.password_reset_expires = utcnow() + timedelta(minutes=minutes)
        return raw

    def clear_password_reset_token(self) -> None:
        self.password_reset_token = None
        self.password_reset_expires = None

    @classmethod
    def find_by_email(cls, email):
        return cls.query.filter_by(email=cls.normalize_email(email)).first()

    @classmethod
    def find_by_reset_token(cls, raw: str):
        return cls.query.filter(
            cls.password_reset_token == hash_token(raw or ""),
            cls.password_reset_expires > utcnow(),
        ).first()

    def _account_fields(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role,
            "is_active": self.is_active,
            "last_login": self.last_login.isoformat() if self.last_login else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
