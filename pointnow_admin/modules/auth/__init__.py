"""
PointNow Admin Auth Module

Provides super-admin authentication against the upstream API:
- Login proxy that turns the provider token payload into HTTP-only cookies
- Logout that clears the session cookies
- Sign-in page
"""

from flask import Blueprint

auth_bp = Blueprint(
    'auth',
    __name__,
    static_folder='static',
    static_url_path='/auth/static',
    template_folder='templates'
)

from . import routes
from .utils import login_required

__all__ = ['auth_bp', 'login_required']
