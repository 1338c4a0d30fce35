# rentalhub/routes/tenant_auth.py
from flask import Blueprint, g, jsonify

from rentalhub.models import Tenant
from rentalhub.security import accounts
from rentalhub.security.auth import tenant_auth_required, tenant_role_required
from rentalhub.utils.validation import json_body

bp = Blueprint("tenant_auth", __name__, url_prefix="/api/tenant/auth")

KIND = "tenant"


@bp.post("/sign_in_tenant")
def sign_in_tenant():
    return accounts.sign_in(Tenant, KIND, json_body())


@bp.post("/refresh_access_token")
def refresh_access_token():
    return accounts.refresh(KIND)


@bp.post("/password_reset_token")
def password_reset_token():
    return accounts.request_password_reset(Tenant, KIND, json_body())


@bp.post("/logout")
def logout():
    return accounts.logout(KIND)


@bp.put("/update_tenant_password")
@tenant_auth_required
@tenant_role_required
def update_password():
    return accounts.change_password(g.tenant, KIND, json_body())


@bp.put("/reset_password/<token>")
def reset_password(token):
    return accounts.reset_password(Tenant, KIND, token, json_body())


@bp.get("/me")
@tenant_auth_required
@tenant_role_required
def me():
    return accounts.me(g.tenant)


@bp.get("/my_property")
@tenant_auth_required
@tenant_role_required
def my_property():
    """The property the signed-in tenant currently occupies."""
    prop = g.tenant.current_property
    if prop is None:
        return jsonify({"status": "FAILED", "message": "You have not been assigned a property."}), 404
    return jsonify({"status": "SUCCESS", "data": prop.serialize()}), 200
