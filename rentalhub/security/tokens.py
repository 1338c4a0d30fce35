# rentalhub/security/tokens.py
"""Access/refresh token issuance, verification and rotation.

Every principal kind (landlord, tenant, admin) signs in against its own table,
so tokens carry a ``kind`` claim next to the identity. A principal keeps the
``jti`` of its single live refresh token; rotating replaces it, and a refresh
token that is well formed but no longer live is treated as stolen.
"""
from flask import current_app, request
from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import InvalidTokenError

from rentalhub.extensions import db
from rentalhub.models import PRINCIPAL_MODELS, utcnow

# Anything decode_token raises for a bad, expired or malformed token
TOKEN_ERRORS = (InvalidTokenError, JWTExtendedException)


class InvalidPrincipalToken(Exception):
    """The token is genuine but does not name a usable principal."""


class RefreshTokenError(Exception):
    """The refresh token cannot be exchanged for a new pair."""


def _model_for(kind: str):
    try:
        return PRINCIPAL_MODELS[kind]
    except KeyError:
        raise ValueError(f"unknown principal kind: {kind!r}")


def issue_tokens(principal, kind: str) -> dict:
    """Create an access/refresh pair and record the refresh jti as the live one.

    The caller commits the session.
    """
    identity = str(principal.id)
    version = principal.token_version or 0
    access = create_access_token(
        identity=identity,
        additional_claims={
            "kind": kind,
            "role": principal.role,
            "email": principal.email,
            "tv": version,
        },
    )
    refresh = create_refresh_token(identity=identity, additional_claims={"kind": kind, "tv": version})
    principal.refresh_token_jti = decode_token(refresh)["jti"]
    return {"access_token": access, "refresh_token": refresh}


def _load_principal(claims: dict, kind: str):
    if claims.get("kind") != kind:
        raise InvalidPrincipalToken("token issued for another principal kind")
    try:
        principal_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise InvalidPrincipalToken("token identity is not a principal id")
    principal = db.session.get(_model_for(kind), principal_id)
    if principal is None:
        raise InvalidPrincipalToken("principal not found")
    if claims.get("tv") != (principal.token_version or 0):
        raise InvalidPrincipalToken("token version is stale")
    return principal


def decode_access(token: str, kind: str):
    """Return the principal an access token names.

    Expired and malformed tokens raise PyJWT's ``InvalidTokenError`` family
    (``ExpiredSignatureError`` included); those are the cases the auth
    middleware answers with a silent refresh.
    """
    claims = decode_token(token)
    if claims.get("type") != "access":
        raise InvalidTokenError("not an access token")
    return _load_principal(claims, kind)


def rotate_refresh(token: str, kind: str):
    """Exchange a live refresh token for a new pair.

    Returns ``(principal, tokens)``. The caller commits the session, which
    matters on failure too: a reused token revokes the principal's sessions.
    """
    if not token:
        raise RefreshTokenError("refresh token missing")
    try:
        claims = decode_token(token)
    except TOKEN_ERRORS as e:
        raise RefreshTokenError(str(e))
    if claims.get("type") != "refresh":
        raise RefreshTokenError("not a refresh token")
    try:
        principal = _load_principal(claims, kind)
    except InvalidPrincipalToken as e:
        raise RefreshTokenError(str(e))

    if not principal.refresh_token_jti or claims.get("jti") != principal.refresh_token_jti:
        current_app.logger.warning("Refresh token reuse detected for %s id=%s", kind, principal.id)
        principal.revoke_tokens()
        db.session.commit()
        raise RefreshTokenError("refresh token is no longer valid")

    tokens = issue_tokens(principal, kind)
    current_app.logger.info("Rotated refresh token for %s id=%s", kind, principal.id)
    return principal, tokens


def revoke(principal) -> None:
    principal.revoke_tokens()


def principal_for_refresh(token: str, kind: str):
    """The principal a refresh token names, or None. Used by logout.

    Only the live refresh token counts; one that was already rotated out
    cannot end the current session.
    """
    if not token:
        return None
    try:
        claims = decode_token(token, allow_expired=True)
        if claims.get("type") != "refresh":
            return None
        principal = _load_principal(claims, kind)
    except TOKEN_ERRORS + (InvalidPrincipalToken,):
        return None
    if not principal.refresh_token_jti or claims.get("jti") != principal.refresh_token_jti:
        return None
    return principal


def read_refresh_token():
    """An explicit header or JSON body token wins over the cookie."""
    token = request.headers.get(current_app.config["REFRESH_TOKEN_HEADER"])
    if not token:
        data = request.get_json(silent=True) or {}
        token = data.get("refresh_token") if isinstance(data, dict) else None
    if not token:
        token = request.cookies.get(current_app.config["REFRESH_TOKEN_COOKIE"])
    return token or None


def set_refresh_cookie(response, refresh_token: str):
    max_age = int(current_app.config["JWT_REFRESH_TOKEN_EXPIRES"].total_seconds())
    response.set_cookie(
        current_app.config["REFRESH_TOKEN_COOKIE"],
        refresh_token,
        max_age=max_age,
        httponly=True,
        secure=current_app.config.get("REFRESH_COOKIE_SECURE", True),
        samesite="Strict",
    )
    return response


def clear_refresh_cookie(response):
    response.delete_cookie(current_app.config["REFRESH_TOKEN_COOKIE"])
    return response


def mark_login(principal) -> None:
    principal.last_login = utcnow()
