"""
PointNow Admin - Loyalty Platform Admin Dashboard
=================================================

A Flask admin dashboard for the PointNow loyalty platform with:
- Proxy routes that forward analytics requests to the PointNow API
- Super-admin sign-in backed by HTTP-only session cookies
- Business, customer, revenue and settings pages
- Public health check

Usage:
    from flask import Flask
    from pointnow_admin import PointNowAdmin

    app = Flask(__name__)
    PointNowAdmin(app)

Or let the package build the app:

    from pointnow_admin import create_app
    app = create_app()
"""

__version__ = '0.1.0'
__author__ = 'PointNow'

from flask import Flask

from .core.config import Config
from .core.formatting import (
    format_amount, format_date, format_datetime, format_number, format_timestamp,
    status_badge, subscription_status,
)
from .core.logging_service import configure_logging, LoggingService
from .core.upstream import UpstreamClient, UPSTREAM_EXTENSION_KEY

# Config keys copied into app.config unless the app already sets them
CONFIG_DEFAULTS = (
    'API_URL', 'UPSTREAM_TIMEOUT', 'REFRESH_TOKEN_DAYS',
    'CORS_ALLOWED_ORIGINS', 'LIST_PAGE_SIZE', 'LOOKUP_PAGE_SIZE', 'SEARCH_DEBOUNCE_MS',
    'LOG_LEVEL', 'BRAND_NAME', 'SUBSCRIPTION_PLANS',
)

DEFAULT_FEATURES = {
    'proxy': True,
    'auth': True,
    'dashboard': True,
    'businesses': True,
    'customers': True,
    'revenue': True,
    'settings': True,
    'ops': True,
}

TEMPLATE_FILTERS = {
    'format_date': format_date,
    'format_datetime': format_datetime,
    'format_timestamp': format_timestamp,
    'format_amount': format_amount,
    'format_number': format_number,
    'subscription_status': subscription_status,
    'status_badge': status_badge,
}


class PointNowAdmin:
    """
    Flask extension that wires the admin modules into an app

    Args:
        app: Flask app (or None to call init_app later)
        config: optional dict; 'features' maps module names to booleans
    """

    def __init__(self, app=None, config=None):
        self.config = config or {}
        self.features = dict(DEFAULT_FEATURES, **self.config.get('features', {}))
        self.registered_modules = []
        self.runtime_settings = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        from .modules.settings.routes import RuntimeSettings

        for key in CONFIG_DEFAULTS:
            app.config.setdefault(key, getattr(Config, key))
        if not app.config.get('SECRET_KEY'):
            app.config['SECRET_KEY'] = Config.SECRET_KEY or 'dev-secret-key-change-in-production'
        # Flask ships SESSION_COOKIE_SECURE=False, so setdefault would never see production
        if Config.SESSION_COOKIE_SECURE:
            app.config['SESSION_COOKIE_SECURE'] = True

        configure_logging(app.config['LOG_LEVEL'])

        app.extensions['pointnow_admin'] = self
        app.extensions.setdefault(UPSTREAM_EXTENSION_KEY, UpstreamClient(
            app.config['API_URL'],
            timeout=app.config['UPSTREAM_TIMEOUT'],
        ))
        self.runtime_settings = RuntimeSettings()

        self._init_cors(app)
        self._register_modules(app)

        for name, func in TEMPLATE_FILTERS.items():
            app.add_template_filter(func, name)

        @app.context_processor
        def inject_brand():
            return {'brand_name': app.config['BRAND_NAME']}

        LoggingService.info('pointnow_admin', f"Registered modules: {', '.join(self.registered_modules)}")

    def _init_cors(self, app):
        origins = app.config.get('CORS_ALLOWED_ORIGINS') or []
        if not origins:
            return
        from flask_cors import CORS
        CORS(app, resources={r'/api/*': {'origins': origins}}, supports_credentials=True)

    def _register_modules(self, app):
        if self.features.get('proxy'):
            from .modules.proxy import proxy_bp
            app.register_blueprint(proxy_bp)
            self.registered_modules.append('proxy')

        if self.features.get('auth'):
            from .modules.auth import auth_bp
            app.register_blueprint(auth_bp)
            self.registered_modules.append('auth')

        if self.features.get('dashboard'):
            from .modules.dashboard import dashboard_bp
            app.register_blueprint(dashboard_bp)
            self.registered_modules.append('dashboard')

        if self.features.get('businesses'):
            from .modules.businesses import businesses_bp
            app.register_blueprint(businesses_bp)
            self.registered_modules.append('businesses')

        if self.features.get('customers'):
            from .modules.customers import customers_bp
            app.register_blueprint(customers_bp)
            self.registered_modules.append('customers')

        if self.features.get('revenue'):
            from .modules.revenue import revenue_bp
            app.register_blueprint(revenue_bp)
            self.registered_modules.append('revenue')

        if self.features.get('settings'):
            from .modules.settings import settings_bp
            app.register_blueprint(settings_bp)
            self.registered_modules.append('settings')

        if self.features.get('ops'):
            from .modules.ops import ops_health_bp
            app.register_blueprint(ops_health_bp)
            self.registered_modules.append('ops')

    def get_registered_modules(self):
        return list(self.registered_modules)


def create_app(config=None, admin_config=None):
    """Build a Flask app with every admin module registered"""
    app = Flask(__name__)
    if config:
        app.config.update(config)
    PointNowAdmin(app, admin_config)
    return app


__all__ = ['PointNowAdmin', 'create_app', '__version__']
