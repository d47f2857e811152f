"""
Shared fixtures for the catalogdash test suite.

Every test gets a fresh app bound to an in-memory mongomock client, so no
MongoDB server is needed. Cloudinary calls are patched in the tests that
reach the media host.
"""

import mongomock
import pytest

from catalogdash import create_app
from catalogdash.modules.auth.database import UserDatabase
from catalogdash.modules.auth.utils import issue_token

TEST_DB = "catalogdash_test"


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def db(mongo_client):
    return mongo_client[TEST_DB]


@pytest.fixture
def app(mongo_client):
    """Fully initialised app with every module registered."""
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "JWT_SECRET": "test-jwt-secret",
        "ENVIRONMENT": "testing",
        "MONGODB_DB": TEST_DB,
        # Cheap hashes keep the suite fast
        "BCRYPT_ROUNDS": 4,
        "CLOUDINARY_CLOUD_NAME": "test-cloud",
        "CLOUDINARY_API_KEY": "test-key",
        "CLOUDINARY_API_SECRET": "test-api-secret",
    }, mongo_client=mongo_client)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Factory inserting a user straight into the store."""
    def _make(email="admin@demo.com", role="superadmin", name="Super Admin", password="admin123"):
        with app.app_context():
            return UserDatabase.create_user(name, email, password, role)
    return _make


@pytest.fixture
def superadmin(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email="demo@demo.com", role="admin", name="Demo Admin")


@pytest.fixture
def login_as(app, client):
    """Put a valid session cookie for `user` on the test client."""
    def _login(user):
        with app.app_context():
            token = issue_token({
                "userId": str(user["_id"]),
                "email": user["email"],
                "role": user["role"],
            })
        client.set_cookie("auth-token", token)
        return client
    return _login


@pytest.fixture
def product_payload():
    """Factory for a valid product body."""
    def _payload(**overrides):
        payload = {
            "name": "Wireless Mouse",
            "description": "Ergonomic wireless mouse with a USB receiver",
            "category": "Electronics",
            "price": 19.99,
            "stock": 25,
            "sku": "wm-001",
            "status": "active",
        }
        payload.update(overrides)
        return payload
    return _payload
