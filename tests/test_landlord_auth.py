from rentalhub.extensions import db
from rentalhub.models import Landlord
from tests.conftest import PASSWORD, bearer, sign_in

BASE = "/api/landlord/auth"

REGISTRATION = {
    "first_name": "Jane",
    "last_name": "Doe",
    "email": "  Jane@Example.com ",
    "password": PASSWORD,
    "phone": "0700000000",
}


def _activate(client, email):
    landlord = Landlord.find_by_email(email)
    code = landlord.create_activation_code()
    db.session.commit()
    return client.post(f"{BASE}/activate_landlord_account", json={"email": email, "activation_code": code})


def test_register_creates_inactive_landlord(client):
    resp = client.post(f"{BASE}/register_new_landlord", json=REGISTRATION)
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["email"] == "jane@example.com"
    assert data["is_active"] is False
    assert data["is_account_verified"] is False
    assert "password_hash" not in data


def test_register_rejects_duplicates_and_weak_passwords(client):
    client.post(f"{BASE}/register_new_landlord", json=REGISTRATION)
    dup = client.post(f"{BASE}/register_new_landlord", json=REGISTRATION)
    assert dup.status_code == 400
    assert dup.get_json()["message"] == "An account with this email already exists."

    weak = client.post(f"{BASE}/register_new_landlord", json={**REGISTRATION, "email": "x@example.com", "password": "weak"})
    assert weak.status_code == 400

    missing = client.post(f"{BASE}/register_new_landlord", json={"email": "y@example.com"})
    assert missing.status_code == 400


def test_sign_in_requires_activation(client):
    client.post(f"{BASE}/register_new_landlord", json=REGISTRATION)
    resp = client.post(f"{BASE}/sign_in_landlord", json={"email": "jane@example.com", "password": PASSWORD})
    assert resp.status_code == 403

    activated = _activate(client, "jane@example.com")
    assert activated.status_code == 200

    body = sign_in(client, "landlord", "jane@example.com")
    assert body["status"] == "SUCCESS"
    assert body["access_token"] and body["refresh_token"]


def test_activation_rejects_wrong_code(client):
    client.post(f"{BASE}/register_new_landlord", json=REGISTRATION)
    resp = client.post(
        f"{BASE}/activate_landlord_account",
        json={"email": "jane@example.com", "activation_code": "not-it"},
    )
    assert resp.status_code == 400
    assert _activate(client, "jane@example.com").status_code == 200
    again = _activate(client, "jane@example.com")
    assert again.status_code == 400
    assert again.get_json()["message"] == "Account already activated."


def test_sign_in_with_bad_credentials(client, make_landlord):
    make_landlord()
    resp = client.post(f"{BASE}/sign_in_landlord", json={"email": "landlord@example.com", "password": "Wrong!Pass1"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid credentials."
    unknown = client.post(f"{BASE}/sign_in_landlord", json={"email": "nobody@example.com", "password": PASSWORD})
    assert unknown.status_code == 401


def test_refresh_endpoint_rotates_and_detects_reuse(client, make_landlord):
    landlord = make_landlord()
    body = sign_in(client, "landlord", landlord.email)
    old_refresh = body["refresh_token"]

    rotated = client.post(f"{BASE}/refresh_access_token", json={"refresh_token": old_refresh})
    assert rotated.status_code == 200
    new_body = rotated.get_json()
    assert new_body["refresh_token"] != old_refresh

    reused = client.post(f"{BASE}/refresh_access_token", json={"refresh_token": old_refresh})
    assert reused.status_code == 403

    # reuse revoked the session that rotation produced as well
    me = client.get(f"{BASE}/me", headers=bearer(new_body["access_token"]))
    assert me.status_code == 401


def test_logout_revokes_tokens(client, make_landlord):
    landlord = make_landlord()
    body = sign_in(client, "landlord", landlord.email)

    resp = client.post(f"{BASE}/logout")
    assert resp.status_code == 200

    assert client.get(f"{BASE}/me", headers=bearer(body["access_token"])).status_code == 401
    again = client.post(f"{BASE}/refresh_access_token", json={"refresh_token": body["refresh_token"]})
    assert again.status_code == 403


def test_update_password(client, landlord_session):
    landlord, headers = landlord_session
    wrong = client.put(
        f"{BASE}/update_landlord_password",
        json={"current_password": "Nope!Nope1", "new_password": "N3w!Password"},
        headers=headers,
    )
    assert wrong.status_code == 401

    resp = client.put(
        f"{BASE}/update_landlord_password",
        json={"current_password": PASSWORD, "new_password": "N3w!Password"},
        headers=headers,
    )
    assert resp.status_code == 200
    # the old access token is gone, the one returned works
    assert client.get(f"{BASE}/me", headers=headers).status_code == 401
    assert client.get(f"{BASE}/me", headers=bearer(resp.get_json()["access_token"])).status_code == 200
    sign_in(client, "landlord", landlord.email, "N3w!Password")


def test_password_reset_flow(client, make_landlord):
    landlord = make_landlord()
    resp = client.post(f"{BASE}/password_reset_token", json={"email": landlord.email})
    assert resp.status_code == 200
    assert db.session.get(Landlord, landlord.id).password_reset_token is not None

    unknown = client.post(f"{BASE}/password_reset_token", json={"email": "ghost@example.com"})
    assert unknown.status_code == 404

    raw = db.session.get(Landlord, landlord.id).create_password_reset_token()
    db.session.commit()

    bad = client.put(f"{BASE}/reset_password/not-the-token", json={"password": "R3set!Pass"})
    assert bad.status_code == 400

    ok = client.put(f"{BASE}/reset_password/{raw}", json={"password": "R3set!Pass"})
    assert ok.status_code == 200
    sign_in(client, "landlord", landlord.email, "R3set!Pass")

    # tokens are single use
    reused = client.put(f"{BASE}/reset_password/{raw}", json={"password": "Another!Pass1"})
    assert reused.status_code == 400


def test_non_object_body_is_treated_as_empty(client):
    resp = client.post(f"{BASE}/sign_in_landlord", json=["jane@example.com", PASSWORD])
    assert resp.status_code == 400
    assert resp.get_json()["status"] == "FAILED"
