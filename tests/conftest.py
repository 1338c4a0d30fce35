from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token

from rentalhub import create_app
from rentalhub.extensions import db
from rentalhub.models import Admin, Landlord, Tenant

PASSWORD = "Str0ng!Pass"

PROPERTY_PAYLOAD = {
    "name": "sunset VILLAS",
    "category": "Residential",
    "type": "Apartment",
    "number_of_units": 4,
    "rent": 1200,
    "brief_description": "BRIGHT two bedroom flat. close to the park!",
    "google_map": "https://maps.example.com/?q=sunset",
    "images": ["https://img.example.com/1.jpg"],
    "location": "12 Lake Road",
    "current_status": "Vacant",
}


@pytest.fixture
def app():
    app = create_app("rentalhub.config.TestingConfig")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_landlord(app):
    def _make(email="landlord@example.com", verified=True, active=True, status="Active"):
        landlord = Landlord(
            email=email,
            first_name="Jane",
            last_name="Doe",
            is_active=active,
            is_account_verified=verified,
            account_status=status,
        )
        landlord.set_password(PASSWORD)
        db.session.add(landlord)
        db.session.commit()
        return landlord
    return _make


@pytest.fixture
def make_tenant(app):
    def _make(landlord, email="tenant@example.com", first_name="Tom"):
        tenant = Tenant(email=email, first_name=first_name, last_name="Lee", landlord_id=landlord.id)
        tenant.set_password(PASSWORD)
        db.session.add(tenant)
        db.session.commit()
        return tenant
    return _make


@pytest.fixture
def make_admin(app):
    def _make(email="admin@example.com", role="admin"):
        admin = Admin(email=email, name="Ada", role=role)
        admin.set_password(PASSWORD)
        db.session.add(admin)
        db.session.commit()
        return admin
    return _make


def sign_in(client, kind, email, password=PASSWORD):
    resp = client.post(f"/api/{kind}/auth/sign_in_{kind}", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def expired_access_token(principal, kind):
    return create_access_token(
        identity=str(principal.id),
        additional_claims={
            "kind": kind,
            "role": principal.role,
            "email": principal.email,
            "tv": principal.token_version or 0,
        },
        expires_delta=timedelta(seconds=-30),
    )


@pytest.fixture
def landlord_session(client, make_landlord):
    """A verified landlord and the bearer headers of a fresh sign in."""
    landlord = make_landlord()
    body = sign_in(client, "landlord", landlord.email)
    return landlord, bearer(body["access_token"])
