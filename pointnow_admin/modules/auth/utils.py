from functools import wraps
from urllib.parse import urlparse

from flask import redirect, request, url_for

from pointnow_admin.core import get_admin_session


def login_required(f):
    """Decorator to require an admin session (access_token cookie)"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not get_admin_session().is_authenticated:
            return redirect(url_for('auth.signin', next=request.full_path.rstrip('?')))
        return f(*args, **kwargs)
    return decorated_function


def safe_next_url(target, default):
    """Only follow same-site relative redirects"""
    if not target or not target.startswith('/'):
        return default
    # browsers read "/\host" as "//host"
    if '\\' in target:
        return default
    parsed = urlparse(target)
    if parsed.scheme or parsed.netloc:
        return default
    return target
