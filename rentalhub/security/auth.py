# rentalhub/security/auth.py
from functools import wraps

from flask import current_app, g, request

from rentalhub.errors import failed
from rentalhub.extensions import db
from rentalhub.models import Admin, Landlord, Tenant
from rentalhub.models.admin import ADMIN_ROLES
from rentalhub.models.landlord import ACCOUNT_DISABLED
from . import tokens

NOT_FOUND_ACCOUNT = (
    "We couldn't find an account associated with this email address. "
    "Please double-check your email address and try again."
)
NOT_FOUND_ADMIN = (
    "We couldn't find an admin account associated with this email address. "
    "Please double-check your email address and try again."
)


def _bearer_token():
    header = request.headers.get("Authorization") or ""
    if not header.startswith("Bearer"):
        return None
    parts = header.split(" ")
    return parts[1] if len(parts) > 1 and parts[1] else ""


def principal_required(kind: str):
    """Authenticate the request as a ``kind`` principal and store it on ``g``.

    An expired or malformed access token is not rejected outright: the
    refresh token that came with the request is rotated and the view runs
    with the new pair attached to the response.
    """
    def deco(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            token = _bearer_token()
            if token is None:
                return failed("Authorization header missing. Please log in to continue.", 401)

            try:
                principal = tokens.decode_access(token, kind)
            except tokens.InvalidPrincipalToken as e:
                current_app.logger.info("Rejected %s access token: %s", kind, e)
                return failed("Invalid access token. Please log in to continue.", 401)
            except tokens.TOKEN_ERRORS as e:
                try:
                    principal, pair = tokens.rotate_refresh(tokens.read_refresh_token(), kind)
                    db.session.commit()
                except tokens.RefreshTokenError as refresh_error:
                    current_app.logger.warning(
                        "Silent refresh failed for %s (%s; %s)", kind, e, refresh_error
                    )
                    return failed("Failed to refresh access token. Please log in to continue.", 403)
                g.refreshed_tokens = pair

            setattr(g, kind, principal)
            return fn(*args, **kwargs)
        return wrapper
    return deco


landlord_auth_required = principal_required("landlord")
tenant_auth_required = principal_required("tenant")
admin_auth_required = principal_required("admin")


def attach_refreshed_tokens(response):
    """after_request hook: hand silently refreshed tokens back to the client."""
    pair = g.pop("refreshed_tokens", None)
    if pair:
        response.headers[current_app.config["ACCESS_TOKEN_HEADER"]] = pair["access_token"]
        tokens.set_refresh_cookie(response, pair["refresh_token"])
    return response


def valid_landlord_required(fn):
    """Role, account status and admin verification for landlords."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        landlord = Landlord.find_by_email(g.landlord.email)
        if not landlord:
            return failed("Landlord not found.", 404)
        if landlord.role != "landlord":
            return failed("Not authorized.", 403)
        if landlord.account_status == ACCOUNT_DISABLED:
            return failed("Your account has been deactivated.", 403)
        if not landlord.is_account_verified:
            return failed("Your account has not been verified by admin.", 403)
        return fn(*args, **kwargs)
    return wrapper


def tenant_role_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        tenant = Tenant.find_by_email(g.tenant.email)
        if not tenant:
            return failed(NOT_FOUND_ACCOUNT, 404)
        if tenant.role != "tenant":
            return failed("Not authorized.", 403)
        return fn(*args, **kwargs)
    return wrapper


def admin_role_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        admin = Admin.find_by_email(g.admin.email)
        if not admin:
            return failed(NOT_FOUND_ADMIN, 404)
        if admin.role not in ADMIN_ROLES:
            return failed("Not authorized.", 403)
        return fn(*args, **kwargs)
    return wrapper


def super_admin_required(fn):
    """Only super admins add other admins."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        admin = Admin.find_by_email(g.admin.email)
        if not admin:
            return failed(NOT_FOUND_ADMIN, 404)
        if not admin.is_super_admin():
            return failed("Not authorised.", 403)
        return fn(*args, **kwargs)
    return wrapper
