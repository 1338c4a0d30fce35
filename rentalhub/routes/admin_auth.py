# rentalhub/routes/admin_auth.py
from flask import Blueprint, g

from rentalhub.models import Admin
from rentalhub.security import accounts
from rentalhub.security.auth import admin_auth_required, admin_role_required
from rentalhub.utils.validation import json_body

bp = Blueprint("admin_auth", __name__, url_prefix="/api/admin/auth")

KIND = "admin"


@bp.post("/sign_in_admin")
def sign_in_admin():
    return accounts.sign_in(Admin, KIND, json_body())


@bp.post("/refresh_access_token")
def refresh_access_token():
    return accounts.refresh(KIND)


@bp.post("/password_reset_token")
def password_reset_token():
    return accounts.request_password_reset(Admin, KIND, json_body())


@bp.post("/logout")
def logout():
    return accounts.logout(KIND)


@bp.put("/update_admin_password")
@admin_auth_required
@admin_role_required
def update_password():
    return accounts.change_password(g.admin, KIND, json_body())


@bp.put("/reset_password/<token>")
def reset_password(token):
    return accounts.reset_password(Admin, KIND, token, json_body())


@bp.get("/me")
@admin_auth_required
@admin_role_required
def me():
    return accounts.me(g.admin)
