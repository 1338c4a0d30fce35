# rentalhub/security/accounts.py
"""Account flows shared by landlords, tenants and admins."""
from flask import current_app, g, jsonify

from rentalhub.errors import APIError
from rentalhub.extensions import db
from rentalhub.utils.email import send_email
from rentalhub.utils.validation import missing_fields, require_password
from . import tokens
from .auth import NOT_FOUND_ACCOUNT


def token_response(principal, pair, message, status_code=200):
    """JSON body with both tokens plus the refresh cookie."""
    # A fresh pair supersedes one the middleware may have rotated in
    g.pop("refreshed_tokens", None)
    resp = jsonify({
        "status": "SUCCESS",
        "message": message,
        "data": principal.serialize(),
        "access_token": pair["access_token"],
        "refresh_token": pair["refresh_token"],
    })
    resp.status_code = status_code
    return tokens.set_refresh_cookie(resp, pair["refresh_token"])


def sign_in(model, kind: str, data: dict):
    if missing_fields(data, ["email", "password"]):
        raise APIError("Please provide your email and password.", 400)

    principal = model.find_by_email(data.get("email"))
    if not principal or not principal.check_password(data.get("password")):
        current_app.logger.warning("Failed %s sign in for %s", kind, model.normalize_email(data.get("email")))
        raise APIError("Invalid credentials.", 401)
    if not principal.is_active:
        raise APIError("Please activate your account to continue.", 403)

    tokens.mark_login(principal)
    pair = tokens.issue_tokens(principal, kind)
    db.session.commit()
    current_app.logger.info("%s id=%s signed in", kind.capitalize(), principal.id)
    return token_response(principal, pair, "Signed in successfully.")


def refresh(kind: str):
    try:
        principal, pair = tokens.rotate_refresh(tokens.read_refresh_token(), kind)
    except tokens.RefreshTokenError as e:
        current_app.logger.warning("Refresh failed for %s: %s", kind, e)
        resp = jsonify({
            "status": "FAILED",
            "message": "Invalid refresh token. Please log in to continue.",
        })
        resp.status_code = 403
        return tokens.clear_refresh_cookie(resp)
    db.session.commit()
    return token_response(principal, pair, "Access token refreshed.")


def logout(kind: str):
    principal = tokens.principal_for_refresh(tokens.read_refresh_token(), kind)
    if principal is not None:
        tokens.revoke(principal)
        db.session.commit()
        current_app.logger.info("%s id=%s logged out", kind.capitalize(), principal.id)
    resp = jsonify({"status": "SUCCESS", "message": "Logged out successfully."})
    return tokens.clear_refresh_cookie(resp)


def change_password(principal, kind: str, data: dict):
    if missing_fields(data, ["current_password", "new_password"]):
        raise APIError("Please provide your current and new password.", 400)
    if not principal.check_password(data.get("current_password")):
        raise APIError("Current password is incorrect.", 401)
    require_password(data.get("new_password"))

    principal.set_password(data["new_password"])
    tokens.revoke(principal)
    pair = tokens.issue_tokens(principal, kind)
    db.session.commit()
    current_app.logger.info("%s id=%s changed password", kind.capitalize(), principal.id)
    return token_response(principal, pair, "Password updated successfully.")


def request_password_reset(model, kind: str, data: dict):
    email = model.normalize_email(data.get("email"))
    if not email:
        raise APIError("Please provide your email address.", 400)
    principal = model.find_by_email(email)
    if not principal:
        raise APIError(NOT_FOUND_ACCOUNT, 404)

    raw = principal.create_password_reset_token(current_app.config["PASSWORD_RESET_MINUTES"])
    db.session.commit()

    link = f"{current_app.config['FRONTEND_BASE_URL']}/{kind}/reset-password/{raw}"
    send_email(
        principal.email,
        "Reset your password",
        f"Use the link below to reset your password. It expires in "
        f"{current_app.config['PASSWORD_RESET_MINUTES']} minutes.\n\n{link}",
    )
    return jsonify({
        "status": "SUCCESS",
        "message": "A password reset link has been sent to your email.",
    }), 200


def reset_password(model, kind: str, token: str, data: dict):
    password = data.get("password")
    if not password:
        raise APIError("Please provide a new password.", 400)
    principal = model.find_by_reset_token(token)
    if not principal:
        raise APIError("Token expired or invalid. Please request a new one.", 400)
    require_password(password)

    principal.set_password(password)
    principal.clear_password_reset_token()
    tokens.revoke(principal)
    db.session.commit()
    current_app.logger.info("%s id=%s reset password", kind.capitalize(), principal.id)
    return jsonify({"status": "SUCCESS", "message": "Password reset successfully. Please log in."}), 200


def me(principal):
    return jsonify({"status": "SUCCESS", "data": principal.serialize()}), 200
