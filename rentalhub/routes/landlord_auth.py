# rentalhub/routes/landlord_auth.py
from flask import Blueprint, current_app, g, jsonify

from rentalhub.errors import APIError
from rentalhub.extensions import db
from rentalhub.models import Landlord
from rentalhub.security import accounts
from rentalhub.security.auth import landlord_auth_required
from rentalhub.utils.email import send_email
from rentalhub.utils.validation import json_body, missing_fields, require_password, validate_email

bp = Blueprint("landlord_auth", __name__, url_prefix="/api/landlord/auth")

KIND = "landlord"


@bp.post("/register_new_landlord")
def register_new_landlord():
    data = json_body()
    if missing_fields(data, ["first_name", "last_name", "email", "password"]):
        raise APIError("Please provide all the required fields.", 400)

    email = Landlord.normalize_email(data["email"])
    if not validate_email(email):
        raise APIError("Please provide a valid email address.", 400)
    require_password(data["password"])
    if Landlord.find_by_email(email):
        raise APIError("An account with this email already exists.", 400)

    landlord = Landlord(
        email=email,
        first_name=str(data["first_name"]).strip(),
        last_name=str(data["last_name"]).strip(),
        phone=str(data.get("phone") or "").strip() or None,
    )
    landlord.set_password(data["password"])
    code = landlord.create_activation_code(current_app.config["ACTIVATION_CODE_MINUTES"])
    db.session.add(landlord)
    db.session.commit()

    send_email(
        landlord.email,
        "Activate your account",
        f"Hello {landlord.first_name}, your activation code is {code}. "
        f"It expires in {current_app.config['ACTIVATION_CODE_MINUTES']} minutes.",
    )
    current_app.logger.info("Registered landlord id=%s", landlord.id)
    return jsonify({
        "status": "SUCCESS",
        "message": "Account created. Check your email for the activation code.",
        "data": landlord.serialize(),
    }), 201


@bp.post("/activate_landlord_account")
def activate_landlord_account():
    data = json_body()
    if missing_fields(data, ["email", "activation_code"]):
        raise APIError("Please provide your email and activation code.", 400)

    landlord = Landlord.find_by_email(data["email"])
    if not landlord:
        raise APIError("Landlord not found.", 404)
    if landlord.is_active:
        raise APIError("Account already activated.", 400)
    if not landlord.check_activation_code(data["activation_code"]):
        raise APIError("Invalid or expired activation code.", 400)

    landlord.is_active = True
    landlord.activation_code_hash = None
    landlord.activation_code_expires = None
    db.session.commit()
    current_app.logger.info("Activated landlord id=%s", landlord.id)
    return jsonify({
        "status": "SUCCESS",
        "message": "Account activated. An admin will verify your account shortly.",
    }), 200


@bp.post("/sign_in_landlord")
def sign_in_landlord():
    return accounts.sign_in(Landlord, KIND, json_body())


@bp.post("/refresh_access_token")
def refresh_access_token():
    return accounts.refresh(KIND)


@bp.post("/password_reset_token")
def password_reset_token():
    return accounts.request_password_reset(Landlord, KIND, json_body())


@bp.post("/logout")
def logout():
    return accounts.logout(KIND)


@bp.put("/update_landlord_password")
@landlord_auth_required
def update_password():
    return accounts.change_password(g.landlord, KIND, json_body())


@bp.put("/reset_password/<token>")
def reset_password(token):
    return accounts.reset_password(Landlord, KIND, token, json_body())


@bp.get("/me")
@landlord_auth_required
def me():
    return accounts.me(g.landlord)
