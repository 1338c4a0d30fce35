# rentalhub/routes/properties.py
from decimal import Decimal, InvalidOperation

from flask import Blueprint, current_app, g, jsonify, request
from sqlalchemy.exc import IntegrityError

from rentalhub.errors import APIError
from rentalhub.extensions import db
from rentalhub.models import Property, Tenant, utcnow
from rentalhub.models.property import PROPERTY_STATUSES, STATUS_OCCUPIED, STATUS_VACANT
from rentalhub.security.auth import landlord_auth_required, valid_landlord_required
from rentalhub.utils.text import start_case, to_sentence_case
from rentalhub.utils.validation import json_body, missing_fields, parse_id

bp = Blueprint("properties", __name__, url_prefix="/api/landlord/properties")

REQUIRED_FIELDS = [
    "name", "category", "type", "number_of_units", "rent", "brief_description",
    "google_map", "images", "location", "current_status",
]

# Bounds of the INTEGER and NUMERIC(12, 2) columns
MAX_UNITS = 2**31 - 1
MAX_RENT = Decimal("9999999999.99")
CENTS = Decimal("0.01")


def _as_decimal(value):
    if isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def _property_fields(data: dict) -> dict:
    """Validate a full property payload and return normalized column values."""
    if missing_fields(data, REQUIRED_FIELDS):
        raise APIError("Please provide all the required fields.", 400)

    units = _as_decimal(data["number_of_units"])
    if units is None or units != units.to_integral_value() or not 1 <= units <= MAX_UNITS:
        raise APIError("number_of_units must be a positive whole number.", 400)
    units = int(units)

    rent = _as_decimal(data["rent"])
    if rent is None or not 0 < rent <= MAX_RENT or rent.quantize(CENTS) == 0:
        raise APIError("rent must be a positive amount.", 400)
    rent = rent.quantize(CENTS)

    images = data["images"]
    if isinstance(images, str):
        images = [images]
    if not isinstance(images, list) or not all(isinstance(i, str) and i.strip() for i in images):
        raise APIError("images must be a list of image URLs.", 400)

    status = str(data["current_status"]).strip().capitalize()
    if status not in PROPERTY_STATUSES:
        raise APIError(f"current_status must be one of: {', '.join(PROPERTY_STATUSES)}.", 400)

    name = start_case(data["name"])
    if not name:
        raise APIError("Please provide all the required fields.", 400)

    return {
        "name": name,
        "category": str(data["category"]).strip(),
        "type": str(data["type"]).strip(),
        "number_of_units": units,
        "rent": rent,
        "brief_description": to_sentence_case(data["brief_description"]),
        "google_map": str(data["google_map"]).strip(),
        "images": [i.strip() for i in images],
        "location": str(data["location"]).strip(),
        "current_status": status,
    }


def _landlord_property(property_id: int) -> Property:
    prop = Property.query.filter_by(
        id=property_id, landlord_id=g.landlord.id, is_deleted=False
    ).first()
    if prop is None:
        raise APIError("Property not found.", 404)
    return prop


def _commit_or_conflict():
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise APIError("A property with a similar name already exists.", 400)


@bp.post("")
@landlord_auth_required
@valid_landlord_required
def add_property():
    """Create a property, or restore a soft-deleted one with the same name."""
    fields = _property_fields(json_body())

    existing = Property.query.filter_by(landlord_id=g.landlord.id, name=fields["name"]).first()
    if existing is not None:
        if not existing.is_deleted:
            raise APIError("A property with a similar name already exists.", 400)
        for key, value in fields.items():
            setattr(existing, key, value)
        existing.is_deleted = False
        existing.deleted_at = None
        existing.current_occupant_id = None
        _commit_or_conflict()
        current_app.logger.info("Restored property id=%s for landlord id=%s", existing.id, g.landlord.id)
        return jsonify({
            "status": "SUCCESS",
            "message": "Property created successfully.",
            "data": existing.serialize(),
        }), 201

    prop = Property(landlord_id=g.landlord.id, **fields)
    db.session.add(prop)
    _commit_or_conflict()
    current_app.logger.info("Created property id=%s for landlord id=%s", prop.id, g.landlord.id)
    return jsonify({
        "status": "SUCCESS",
        "message": "Property created successfully.",
        "data": prop.serialize(),
    }), 201


@bp.get("")
@landlord_auth_required
@valid_landlord_required
def list_properties():
    query = Property.query.filter_by(landlord_id=g.landlord.id, is_deleted=False)

    status = (request.args.get("status") or "").strip().capitalize()
    if status:
        if status not in PROPERTY_STATUSES:
            raise APIError(f"status must be one of: {', '.join(PROPERTY_STATUSES)}.", 400)
        query = query.filter(Property.current_status == status)

    properties = query.order_by(Property.id).all()
    return jsonify({
        "status": "SUCCESS",
        "total": len(properties),
        "data": [p.serialize() for p in properties],
    }), 200


@bp.get("/<int:property_id>")
@landlord_auth_required
@valid_landlord_required
def get_property(property_id):
    prop = _landlord_property(property_id)
    return jsonify({"status": "SUCCESS", "data": prop.serialize()}), 200


@bp.put("/<int:property_id>")
@landlord_auth_required
@valid_landlord_required
def update_property(property_id):
    prop = _landlord_property(property_id)
    fields = _property_fields(json_body())

    clash = Property.query.filter(
        Property.landlord_id == g.landlord.id,
        Property.name == fields["name"],
        Property.id != prop.id,
    ).first()
    if clash is not None and not clash.is_deleted:
        raise APIError("A property with a similar name already exists.", 400)
    if prop.current_occupant_id is not None and fields["current_status"] != STATUS_OCCUPIED:
        raise APIError("Vacate the property before marking it vacant.", 400)

    if clash is not None:
        # A deleted property gives its name up to a live one
        current_app.logger.info("Purging deleted property id=%s to free its name", clash.id)
        db.session.delete(clash)
        db.session.flush()

    for key, value in fields.items():
        setattr(prop, key, value)
    _commit_or_conflict()
    return jsonify({"status": "SUCCESS", "data": prop.serialize()}), 200


@bp.put("/<int:property_id>/assign")
@landlord_auth_required
@valid_landlord_required
def assign_property(property_id):
    """Give a vacant property to one of the landlord's tenants."""
    data = json_body()
    tenant_id = parse_id(data.get("tenant_id"))

    tenant = Tenant.query.filter_by(id=tenant_id, landlord_id=g.landlord.id).first()
    if tenant is None:
        raise APIError("Tenant not found.", 404)

    prop = _landlord_property(property_id)
    if prop.is_occupied:
        raise APIError("Property already assigned to a tenant.", 400)

    # Guarded update: a concurrent assignment leaves zero rows to match
    assigned = Property.query.filter(
        Property.id == prop.id,
        Property.current_occupant_id.is_(None),
        Property.current_status == STATUS_VACANT,
        Property.is_deleted.is_(False),
    ).update(
        {
            Property.current_occupant_id: tenant.id,
            Property.current_status: STATUS_OCCUPIED,
            Property.updated_at: utcnow(),
        },
        synchronize_session=False,
    )
    if not assigned:
        db.session.rollback()
        raise APIError("Property already assigned to a tenant.", 400)
    db.session.commit()

    current_app.logger.info("Assigned property id=%s to tenant id=%s", prop.id, tenant.id)
    return jsonify({
        "status": "SUCCESS",
        "message": f"{prop.name} has been assigned to {tenant.first_name}",
        "data": prop.serialize(),
    }), 200


@bp.put("/<int:property_id>/vacate")
@landlord_auth_required
@valid_landlord_required
def vacate_property(property_id):
    prop = _landlord_property(property_id)
    if not prop.is_occupied:
        raise APIError("Property is already vacant.", 400)

    prop.current_occupant_id = None
    prop.current_status = STATUS_VACANT
    db.session.commit()
    current_app.logger.info("Vacated property id=%s", prop.id)
    return jsonify({
        "status": "SUCCESS",
        "message": f"{prop.name} is now vacant.",
        "data": prop.serialize(),
    }), 200


@bp.delete("/<int:property_id>")
@landlord_auth_required
@valid_landlord_required
def delete_property(property_id):
    """Soft delete; the name stays reserved so re-adding it restores the row."""
    prop = _landlord_property(property_id)
    if prop.is_occupied:
        raise APIError("Cannot delete an occupied property. Vacate it first.", 400)

    prop.is_deleted = True
    prop.deleted_at = utcnow()
    db.session.commit()
    current_app.logger.info("Deleted property id=%s", prop.id)
    return jsonify({"status": "SUCCESS", "message": "Property deleted successfully."}), 200
