from rentalhub.extensions import db
from .account import AccountMixin


class Tenant(AccountMixin, db.Model):
    __tablename__ = "tenants"

    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=True)
    role = db.Column(db.String(20), nullable=False, default="tenant")
    landlord_id = db.Column(db.Integer, db.ForeignKey("landlords.id"), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Tenant {self.id}: {self.first_name} {self.last_name}>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def current_property(self):
        """The live property this tenant occupies, if any."""
        from .property import Property

        return Property.query.filter_by(current_occupant_id=self.id, is_deleted=False).first()

    def serialize(self):
        data = self._account_fields()
        current = self.current_property
        data.update({
            "first_name": self.first_name,
            "last_name": self.last_name,
            "full_name": self.full_name,
            "phone": self.phone,
            "landlord_id": self.landlord_id,
            "current_property_id": current.id if current else None,
        })
        return data
