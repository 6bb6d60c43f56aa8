"""
Critical Integration Tests for PointNow Admin
=============================================

Focused tests covering the integration points most likely to break.
Run with: pytest tests/test_critical.py -v

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

from flask import Flask

from pointnow_admin import PointNowAdmin, create_app
from pointnow_admin.core.upstream import UpstreamClient, UPSTREAM_EXTENSION_KEY

from conftest import TEST_API_URL


# ---------------------------------------------------------------------------
# 1. Framework initialisation -- PointNowAdmin(app) does not raise
# ---------------------------------------------------------------------------

def test_framework_initialisation():
    """PointNowAdmin(app) boots without errors and stores itself on the app."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["API_URL"] = TEST_API_URL

    admin = PointNowAdmin(app)

    assert "pointnow_admin" in app.extensions
    assert app.extensions["pointnow_admin"] is admin
    client = app.extensions[UPSTREAM_EXTENSION_KEY]
    assert isinstance(client, UpstreamClient)
    assert client.base_url == TEST_API_URL


def test_create_app_applies_config():
    app = create_app({"API_URL": "https://example.test/api/v1/", "LIST_PAGE_SIZE": 25})
    assert app.config["LIST_PAGE_SIZE"] == 25
    assert app.extensions[UPSTREAM_EXTENSION_KEY].base_url == "https://example.test/api/v1"
    assert app.config["SECRET_KEY"]


# ---------------------------------------------------------------------------
# 2. Blueprint registration -- every module is registered
# ---------------------------------------------------------------------------

EXPECTED_MODULES = [
    "proxy",
    "auth",
    "dashboard",
    "businesses",
    "customers",
    "revenue",
    "settings",
    "ops",
]


def test_all_blueprints_registered(app):
    """All feature modules should be registered as blueprints."""
    registered = app.extensions["pointnow_admin"].get_registered_modules()

    for mod in EXPECTED_MODULES:
        assert mod in registered, (
            f"Module '{mod}' was not registered. Registered: {registered}"
        )

    assert len(registered) == len(EXPECTED_MODULES)


def test_feature_flags_skip_modules():
    app = Flask(__name__)
    app.config["TESTING"] = True
    admin = PointNowAdmin(app, {"features": {"settings": False, "revenue": False}})

    registered = admin.get_registered_modules()
    assert "settings" not in registered
    assert "revenue" not in registered
    assert "settings.settings_page" not in app.view_functions

    with app.test_request_context("/"):
        ctx = {}
        for func in app.template_context_processors[None]:
            ctx.update(func())
    labels = [label for _, label in ctx["nav_items"]]
    assert "Settings" not in labels
    assert "Revenue" not in labels


# ---------------------------------------------------------------------------
# 3. Template context -- brand_name, session and nav are injected
# ---------------------------------------------------------------------------

def test_template_context_injection(app):
    """Context processors inject brand_name, admin_session and nav_items."""
    with app.test_request_context("/"):
        ctx = {}
        for func in app.template_context_processors[None]:
            ctx.update(func())

        assert ctx["brand_name"] == "PointNow Admin"
        assert ctx["admin_session"].is_authenticated is False
        assert ctx["search_debounce_ms"] == 500
        assert [endpoint for endpoint, _ in ctx["nav_items"]][0] == "dashboard.overview"


# ---------------------------------------------------------------------------
# 4. Template filters -- all custom Jinja filters are registered
# ---------------------------------------------------------------------------

EXPECTED_TEMPLATE_FILTERS = [
    "format_date",
    "format_datetime",
    "format_timestamp",
    "format_amount",
    "format_number",
    "subscription_status",
    "status_badge",
]


def test_template_filters_registered(app):
    """A missing filter causes TemplateAssertionError at render time."""
    registered_filters = app.jinja_env.filters

    for name in EXPECTED_TEMPLATE_FILTERS:
        assert name in registered_filters, (
            f"Template filter '{name}' is not registered."
        )
        assert callable(registered_filters[name])


# ---------------------------------------------------------------------------
# 5. Health endpoint -- GET /health returns 200 with status and checks
# ---------------------------------------------------------------------------

def test_health_endpoint(client):
    """GET /health needs no session and reports the upstream location."""
    response = client.get("/health")
    assert response.status_code == 200

    data = response.get_json()
    assert data["status"] == "ok"
    assert data["checks"]["upstream"] == {"configured": True, "url": TEST_API_URL}
    assert "uptime" in data["checks"]
    assert data["checks"]["uptime"]["seconds"] >= 0


# ---------------------------------------------------------------------------
# 6. Auth guard -- unauthenticated dashboard requests redirect to sign-in
# ---------------------------------------------------------------------------

def test_dashboard_auth_redirect(client):
    response = client.get("/dashboard/settings/", follow_redirects=False)
    assert response.status_code == 302
    location = response.headers.get("Location", "")
    assert "/auth" in location
    assert "next=" in location


def test_root_redirects_to_signin(client):
    response = client.get("/")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/auth")


def test_root_redirects_signed_in_admin_to_dashboard(signed_in):
    response = signed_in.get("/")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard")


# ---------------------------------------------------------------------------
# 7. CORS -- credentialed CORS on the /api surface only
# ---------------------------------------------------------------------------

def test_cors_headers_on_api_routes(client):
    response = client.get(
        "/api/analytics/revenue/metrics",
        headers={"Origin": "http://localhost:3000"},
    )
    assert response.headers.get("Access-Control-Allow-Origin") == "http://localhost:3000"
    assert response.headers.get("Access-Control-Allow-Credentials") == "true"


def test_cors_not_applied_to_unknown_origin(client):
    response = client.get(
        "/api/analytics/revenue/metrics",
        headers={"Origin": "https://evil.example"},
    )
    assert "Access-Control-Allow-Origin" not in response.headers
