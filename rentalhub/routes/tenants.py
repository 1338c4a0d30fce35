# rentalhub/routes/tenants.py
from flask import Blueprint, current_app, g, jsonify

from rentalhub.errors import APIError
from rentalhub.extensions import db
from rentalhub.models import Tenant
from rentalhub.security.auth import landlord_auth_required, valid_landlord_required
from rentalhub.utils.validation import json_body, missing_fields, require_password, validate_email

bp = Blueprint("tenants", __name__, url_prefix="/api/landlord/tenants")


@bp.post("")
@landlord_auth_required
@valid_landlord_required
def create_tenant():
    """Landlords create their tenants' accounts with a starting password."""
    data = json_body()
    if missing_fields(data, ["first_name", "last_name", "email", "password"]):
        raise APIError("Please provide all the required fields.", 400)

    email = Tenant.normalize_email(data["email"])
    if not validate_email(email):
        raise APIError("Please provide a valid email address.", 400)
    require_password(data["password"])
    if Tenant.find_by_email(email):
        raise APIError("A tenant with this email already exists.", 400)

    tenant = Tenant(
        email=email,
        first_name=str(data["first_name"]).strip(),
        last_name=str(data["last_name"]).strip(),
        phone=str(data.get("phone") or "").strip() or None,
        landlord_id=g.landlord.id,
    )
    tenant.set_password(data["password"])
    db.session.add(tenant)
    db.session.commit()
    current_app.logger.info("Landlord id=%s created tenant id=%s", g.landlord.id, tenant.id)
    return jsonify({
        "status": "SUCCESS",
        "message": "Tenant created successfully.",
        "data": tenant.serialize(),
    }), 201


@bp.get("")
@landlord_auth_required
@valid_landlord_required
def list_tenants():
    tenants = Tenant.query.filter_by(landlord_id=g.landlord.id).order_by(Tenant.id).all()
    return jsonify({
        "status": "SUCCESS",
        "total": len(tenants),
        "data": [t.serialize() for t in tenants],
    }), 200


@bp.get("/<int:tenant_id>")
@landlord_auth_required
@valid_landlord_required
def get_tenant(tenant_id):
    tenant = Tenant.query.filter_by(id=tenant_id, landlord_id=g.landlord.id).first()
    if tenant is None:
        raise APIError("Tenant not found.", 404)
    return jsonify({"status": "SUCCESS", "data": tenant.serialize()}), 200
