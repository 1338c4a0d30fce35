# rentalhub/routes/admin.py
from flask import Blueprint, current_app, g, jsonify, request

from rentalhub.errors import APIError
from rentalhub.extensions import db
from rentalhub.models import Admin, Landlord
from rentalhub.models.admin import ADMIN_ROLES
from rentalhub.models.landlord import ACCOUNT_ACTIVE, ACCOUNT_DISABLED
from rentalhub.security.auth import admin_auth_required, admin_role_required, super_admin_required
from rentalhub.utils.validation import json_body, missing_fields, require_password, validate_email

bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _get_landlord(landlord_id: int) -> Landlord:
    landlord = db.session.get(Landlord, landlord_id)
    if landlord is None:
        raise APIError("Landlord not found.", 404)
    return landlord


@bp.get("/landlords")
@admin_auth_required
@admin_role_required
def list_landlords():
    query = Landlord.query
    verified = request.args.get("verified")
    if verified is not None:
        want = str(verified).lower() in {"1", "true", "yes", "on"}
        query = query.filter(Landlord.is_account_verified.is_(want))
    landlords = query.order_by(Landlord.id).all()
    return jsonify({
        "status": "SUCCESS",
        "total": len(landlords),
        "data": [landlord.serialize() for landlord in landlords],
    }), 200


@bp.put("/landlords/<int:landlord_id>/verify")
@admin_auth_required
@admin_role_required
def verify_landlord(landlord_id):
    landlord = _get_landlord(landlord_id)
    landlord.is_account_verified = True
    db.session.commit()
    current_app.logger.info("Admin id=%s verified landlord id=%s", g.admin.id, landlord.id)
    return jsonify({
        "status": "SUCCESS",
        "message": "Landlord account verified.",
        "data": landlord.serialize(),
    }), 200


@bp.put("/landlords/<int:landlord_id>/status")
@admin_auth_required
@admin_role_required
def set_landlord_status(landlord_id):
    data = json_body()
    status = str(data.get("account_status") or "").strip().capitalize()
    if status not in (ACCOUNT_ACTIVE, ACCOUNT_DISABLED):
        raise APIError(f"account_status must be {ACCOUNT_ACTIVE} or {ACCOUNT_DISABLED}.", 400)

    landlord = _get_landlord(landlord_id)
    landlord.account_status = status
    if status == ACCOUNT_DISABLED:
        landlord.revoke_tokens()
    db.session.commit()
    current_app.logger.info("Admin id=%s set landlord id=%s to %s", g.admin.id, landlord.id, status)
    return jsonify({
        "status": "SUCCESS",
        "message": f"Landlord account is now {status}.",
        "data": landlord.serialize(),
    }), 200


@bp.get("/admins")
@admin_auth_required
@super_admin_required
def list_admins():
    admins = Admin.query.order_by(Admin.id).all()
    return jsonify({"status": "SUCCESS", "total": len(admins), "data": [a.serialize() for a in admins]}), 200


@bp.post("/admins")
@admin_auth_required
@super_admin_required
def create_admin():
    data = json_body()
    if missing_fields(data, ["email", "password"]):
        raise APIError("Please provide all the required fields.", 400)

    email = Admin.normalize_email(data["email"])
    if not validate_email(email):
        raise APIError("Please provide a valid email address.", 400)
    require_password(data["password"])
    role = data.get("role") or "admin"
    if role not in ADMIN_ROLES:
        raise APIError(f"role must be one of: {', '.join(ADMIN_ROLES)}.", 400)
    if Admin.find_by_email(email):
        raise APIError("An admin with this email already exists.", 400)

    admin = Admin(email=email, name=str(data.get("name") or "").strip() or None, role=role)
    admin.set_password(data["password"])
    db.session.add(admin)
    db.session.commit()
    current_app.logger.info("Super admin id=%s created admin id=%s", g.admin.id, admin.id)
    return jsonify({
        "status": "SUCCESS",
        "message": "Admin created successfully.",
        "data": admin.serialize(),
    }), 201
