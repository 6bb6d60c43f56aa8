import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _env_flag(*names):
    """True when any of the given environment variables says production."""
    for name in names:
        if os.getenv(name, '').strip().lower() in ('production', '1', 'true'):
            return True
    return False


class Config:
    """
    Base configuration for PointNow Admin.
    Deployments provide the upstream API location and secrets via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    ENVIRONMENT = os.getenv('ENVIRONMENT') or os.getenv('FLASK_ENV') or 'development'
    IS_PRODUCTION = _env_flag('ENVIRONMENT', 'FLASK_ENV', 'PRODUCTION')

    # Upstream REST API (NEXT_PUBLIC_API_URL kept for older deployments)
    API_URL = (os.getenv('API_URL') or os.getenv('NEXT_PUBLIC_API_URL')
               or 'https://api.pointnow.io/api/v1')
    # Seconds; unset means requests wait for the upstream indefinitely
    UPSTREAM_TIMEOUT = float(os.getenv('UPSTREAM_TIMEOUT')) if os.getenv('UPSTREAM_TIMEOUT') else None

    # Session cookies
    SESSION_COOKIE_SECURE = IS_PRODUCTION
    REFRESH_TOKEN_DAYS = int(os.getenv('REFRESH_TOKEN_DAYS', '7'))

    # CORS for the /api proxy surface (comma separated, empty disables CORS)
    CORS_ALLOWED_ORIGINS = [o.strip() for o in os.getenv('CORS_ALLOWED_ORIGINS', '').split(',') if o.strip()]

    # List views
    LIST_PAGE_SIZE = int(os.getenv('LIST_PAGE_SIZE', '10'))
    LOOKUP_PAGE_SIZE = int(os.getenv('LOOKUP_PAGE_SIZE', '100'))
    SEARCH_DEBOUNCE_MS = int(os.getenv('SEARCH_DEBOUNCE_MS', '500'))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    BRAND_NAME = os.getenv('BRAND_NAME', 'PointNow Admin')

    # Plan catalogue shown on the settings page
    SUBSCRIPTION_PLANS = [
        {
            'id': 'prod_001',
            'name': 'Starter',
            'price_monthly': 99,
            'price_yearly': 990,
            'has_trial': True,
            'trial_days': 14,
            'features': ['Up to 500 customers', 'Basic analytics', 'Email support'],
        },
        {
            'id': 'prod_002',
            'name': 'Premium',
            'price_monthly': 299,
            'price_yearly': 2990,
            'has_trial': True,
            'trial_days': 14,
            'features': ['Unlimited customers', 'Advanced analytics', 'Priority support', 'Custom branding'],
        },
        {
            'id': 'prod_003',
            'name': 'Enterprise',
            'price_monthly': 599,
            'price_yearly': 5990,
            'has_trial': False,
            'trial_days': 0,
            'features': ['Everything in Premium', 'Dedicated account manager', 'API access', 'Custom integrations'],
        },
    ]


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
