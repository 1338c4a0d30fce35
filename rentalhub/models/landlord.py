import secrets
from datetime import timedelta

from passlib.hash import pbkdf2_sha256 as hasher

from rentalhub.extensions import db
from .account import AccountMixin, utcnow

ACCOUNT_ACTIVE = "Active"
ACCOUNT_DISABLED = "Disabled"


class Landlord(AccountMixin, db.Model):
    __tablename__ = "landlords"

    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=True)
    role = db.Column(db.String(20), nullable=False, default="landlord")

    # Landlords sign up themselves, activate by code and wait for an admin
    is_active = db.Column(db.Boolean, nullable=False, default=False)
    account_status = db.Column(db.String(20), nullable=False, default=ACCOUNT_ACTIVE)
    is_account_verified = db.Column(db.Boolean, nullable=False, default=False)
    activation_code_hash = db.Column(db.String(255), nullable=True)
    activation_code_expires = db.Column(db.DateTime, nullable=True)

    properties = db.relationship("Property", backref="landlord", lazy=True)
    tenants = db.relationship("Tenant", backref="landlord", lazy=True)

    def __repr__(self) -> str:
        return f"<Landlord id={self.id} email={self.email!r}>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def create_activation_code(self, minutes: int = 10) -> str:
        code = f"{secrets.randbelow(10**6):06d}"
        self.activation_code_hash = hasher.hash(code)
        self.activation_code_expires = utcnow() + timedelta(minutes=minutes)
        return code

    def check_activation_code(self, code) -> bool:
        if not code or not self.activation_code_hash or not self.activation_code_expires:
            return False
        if self.activation_code_expires < utcnow():
            return False
        return hasher.verify(str(code), self.activation_code_hash)

    def serialize(self):
        data = self._account_fields()
        data.update({
            "first_name": self.first_name,
            "last_name": self.last_name,
            "full_name": self.full_name,
            "phone": self.phone,
            "account_status": self.account_status,
            "is_account_verified": self.is_account_verified,
        })
        return data
