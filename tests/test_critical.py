"""
Critical Integration Tests for catalogdash
==========================================

Focused tests covering the integration points most likely to break:
extension wiring, the request gatekeeper and the JSON error surface.
Run with: pytest tests/test_critical.py -v

NOTE: pytest and mongomock are listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import mongomock
from flask import Flask

from catalogdash import CatalogDash
from catalogdash.core.gatekeeper import is_public_path, is_static_path


# ---------------------------------------------------------------------------
# 1. Framework initialisation -- CatalogDash(app) does not raise
# ---------------------------------------------------------------------------

def test_framework_initialisation():
    """CatalogDash(app) boots without errors and stores itself on the app."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["MONGODB_DB"] = "catalogdash_test"

    catalogdash = CatalogDash(app, {"mongo_client": mongomock.MongoClient()})

    assert "catalogdash" in app.extensions
    assert app.extensions["catalogdash"] is catalogdash
    assert app.config["MAX_CONTENT_LENGTH"] == 10 * 1024 * 1024


# ---------------------------------------------------------------------------
# 2. Blueprint registration -- all feature modules are registered
# ---------------------------------------------------------------------------

EXPECTED_MODULES = ["auth", "products", "upload", "dashboard"]


def test_all_blueprints_registered(app):
    """Every feature module should be registered as a blueprint."""
    registered = app.extensions["catalogdash"].get_registered_modules()

    for mod in EXPECTED_MODULES:
        assert mod in registered, (
            f"Module '{mod}' was not registered. Registered: {registered}"
        )
        assert mod in app.blueprints

    assert len(registered) == len(EXPECTED_MODULES)


def test_disabled_feature_is_not_registered():
    """features={'upload': False} leaves /api/upload out of the URL map."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["MONGODB_DB"] = "catalogdash_test"
    CatalogDash(app, {
        "features": {"upload": False},
        "mongo_client": mongomock.MongoClient(),
    })

    rules = [rule.rule for rule in app.url_map.iter_rules()]
    assert "/api/upload" not in rules
    assert "upload" not in app.extensions["catalogdash"].get_registered_modules()
    assert "/api/products" in rules


# ---------------------------------------------------------------------------
# 3. CLI -- management commands are attached to the Flask CLI
# ---------------------------------------------------------------------------

def test_cli_commands_registered(app):
    for name in ("init-db", "seed", "create-admin", "cleanup-logs"):
        assert name in app.cli.commands, f"CLI command '{name}' missing"


# ---------------------------------------------------------------------------
# 4. Gatekeeper -- path classification
# ---------------------------------------------------------------------------

def test_path_classification():
    assert is_public_path("/login")
    assert is_public_path("/api/auth/login")
    assert not is_public_path("/api/products")
    assert not is_public_path("/dashboard")

    assert is_static_path("/static/app.css")
    assert is_static_path("/favicon.ico")
    assert is_static_path("/logo.png")
    assert not is_static_path("/api/dashboard")


# ---------------------------------------------------------------------------
# 5. Gatekeeper -- anonymous API requests get a JSON 401
# ---------------------------------------------------------------------------

def test_api_without_token_is_unauthorized(client):
    response = client.get("/api/products")
    assert response.status_code == 401
    assert response.get_json() == {"message": "Unauthorized"}


def test_api_with_bad_token_is_invalid(client):
    client.set_cookie("auth-token", "not-a-jwt")
    response = client.get("/api/dashboard")
    assert response.status_code == 401
    assert response.get_json() == {"message": "Invalid token"}


def test_anonymous_mutation_does_not_persist(client, db, product_payload):
    """Unauthenticated POST is refused before the store is touched."""
    response = client.post("/api/products", json=product_payload())
    assert response.status_code == 401
    assert db.products.count_documents({}) == 0


# ---------------------------------------------------------------------------
# 6. Gatekeeper -- browsers are redirected instead
# ---------------------------------------------------------------------------

def test_page_without_token_redirects_to_login(client):
    response = client.get("/dashboard", follow_redirects=False)
    assert response.status_code == 302, (
        f"Expected 302 redirect, got {response.status_code}"
    )
    assert response.headers["Location"].endswith("/login")


def test_page_with_bad_token_redirects_to_login(client):
    client.set_cookie("auth-token", "garbage")
    response = client.get("/dashboard", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/login")


def test_login_page_is_public(client):
    response = client.get("/login")
    assert response.status_code == 200
    assert b"Admin sign in" in response.data


def test_login_page_with_bad_token_still_renders(client):
    client.set_cookie("auth-token", "garbage")
    response = client.get("/login")
    assert response.status_code == 200


def test_signed_in_browser_is_bounced_from_login(superadmin, login_as):
    client = login_as(superadmin)
    response = client.get("/login", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard")


def test_only_exact_login_path_bounces_signed_in_browser(superadmin, login_as):
    client = login_as(superadmin)
    response = client.get("/login-help", follow_redirects=False)
    assert response.status_code == 404


def test_dashboard_page_renders_for_signed_in_user(superadmin, login_as):
    client = login_as(superadmin)
    response = client.get("/dashboard")
    assert response.status_code == 200
    assert b"admin@demo.com" in response.data


def test_root_redirects_to_dashboard(superadmin, login_as):
    client = login_as(superadmin)
    response = client.get("/", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard")


def test_static_paths_bypass_gatekeeper(client):
    """No token and no matching route: a plain 404, not a 401 or redirect."""
    response = client.get("/favicon.ico")
    assert response.status_code == 404


# ---------------------------------------------------------------------------
# 7. Error surface -- API errors are JSON
# ---------------------------------------------------------------------------

def test_unknown_api_route_returns_json_404(superadmin, login_as):
    client = login_as(superadmin)
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.get_json() == {"message": "Not found"}


def test_wrong_method_returns_json_405(superadmin, login_as):
    client = login_as(superadmin)
    response = client.patch("/api/products")
    assert response.status_code == 405
    assert response.get_json() == {"message": "Method not allowed"}


# ---------------------------------------------------------------------------
# 8. CORS -- configured origins may call the API with credentials
# ---------------------------------------------------------------------------

def test_cors_headers_for_configured_origin():
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["MONGODB_DB"] = "catalogdash_test"
    app.config["CORS_ORIGINS"] = ["http://localhost:3000"]
    CatalogDash(app, {"mongo_client": mongomock.MongoClient()})

    response = app.test_client().get("/api/products", headers={"Origin": "http://localhost:3000"})

    assert response.status_code == 401
    assert response.headers.get("Access-Control-Allow-Origin") == "http://localhost:3000"
    assert response.headers.get("Access-Control-Allow-Credentials") == "true"
