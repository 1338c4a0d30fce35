from rentalhub.extensions import db
from .account import utcnow

STATUS_VACANT = "Vacant"
STATUS_OCCUPIED = "Occupied"
PROPERTY_STATUSES = (STATUS_VACANT, STATUS_OCCUPIED)


class Property(db.Model):
    __tablename__ = "properties"
    __table_args__ = (db.UniqueConstraint("landlord_id", "name", name="uq_property_landlord_name"),)

    id = db.Column(db.Integer, primary_key=True)
    landlord_id = db.Column(db.Integer, db.ForeignKey("landlords.id"), nullable=False, index=True)

    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    type = db.Column(db.String(100), nullable=False)
    number_of_units = db.Column(db.Integer, nullable=False, default=1)
    rent = db.Column(db.Numeric(12, 2), nullable=False)
    brief_description = db.Column(db.Text, nullable=False)
    google_map = db.Column(db.String(1024), nullable=False)
    images = db.Column(db.JSON, nullable=False, default=list)
    location = db.Column(db.String(512), nullable=False)

    # Occupancy
    current_status = db.Column(db.String(20), nullable=False, default=STATUS_VACANT)
    current_occupant_id = db.Column(db.Integer, db.ForeignKey("tenants.id"), nullable=True)
    current_occupant = db.relationship("Tenant", foreign_keys=[current_occupant_id])

    # Soft delete
    is_deleted = db.Column(db.Boolean, nullable=False, default=False)
    deleted_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Property {self.id}: {self.name}>"

    @property
    def is_occupied(self) -> bool:
        return self.current_occupant_id is not None or self.current_status == STATUS_OCCUPIED

    def serialize(self):
        return {
            "id": self.id,
            "landlord_id": self.landlord_id,
            "name": self.name,
            "category": self.category,
            "type": self.type,
            "number_of_units": self.number_of_units,
            "rent": float(self.rent) if self.rent is not None else None,
            "brief_description": self.brief_description,
            "google_map": self.google_map,
            "images": list(self.images or []),
            "location": self.location,
            "current_status": self.current_status,
            "current_occupant_id": self.current_occupant_id,
            "is_deleted": self.is_deleted,
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
