"""
Proxy Module
============

Backend-for-frontend routes that forward analytics requests to the
upstream PointNow API with the admin's bearer token.

Every route:
- reads the access_token cookie (401 when missing)
- forwards only the query parameters it knows about
- relays the upstream JSON and status, or a JSON error envelope

Usage:
    from pointnow_admin.modules.proxy import proxy_bp

    app.register_blueprint(proxy_bp)  # Registers at /api/analytics
"""

from flask import Blueprint

proxy_bp = Blueprint(
    'proxy',
    __name__,
    url_prefix='/api/analytics'
)

from . import routes
from .routes import ANALYTICS_ROUTES, fetch_analytics, forward

__all__ = ['proxy_bp', 'ANALYTICS_ROUTES', 'fetch_analytics', 'forward']
