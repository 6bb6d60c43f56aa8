"""
Admin session context
=====================

The HTTP-only cookies set at login are the only record of who is signed in.
One AdminSession is decoded from them per request and kept in the WSGI environ.
"""

import json
from datetime import datetime, timedelta, timezone

from flask import has_request_context, request

ACCESS_TOKEN_COOKIE = 'access_token'
REFRESH_TOKEN_COOKIE = 'refresh_token'
USER_DATA_COOKIE = 'user_data'

SESSION_COOKIES = (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE, USER_DATA_COOKIE)

# Fields of the login payload that never leave the server
PRIVATE_USER_FIELDS = ('password', 'backendTokens')

ENVIRON_KEY = 'pointnow_admin.session'


class AdminSession:
    """Signed-in admin as seen through the session cookies"""

    def __init__(self, access_token=None, refresh_token=None, user_data=None):
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.user_data = user_data or {}

    @property
    def is_authenticated(self):
        return bool(self.access_token)

    @property
    def email(self):
        return self.user_data.get('email', '')

    @property
    def display_name(self):
        return self.user_data.get('name') or self.email or 'Admin'

    @property
    def role_names(self):
        roles = []
        for user_role in self.user_data.get('user_roles') or []:
            name = (user_role.get('role') or {}).get('name')
            if name:
                roles.append(name)
        return roles

    def __repr__(self):
        state = 'authenticated' if self.is_authenticated else 'anonymous'
        return f"<AdminSession {state} {self.email!r}>"


def _decode_user_data(raw):
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def load_admin_session(cookies):
    """Build an AdminSession from a cookie mapping"""
    return AdminSession(
        access_token=cookies.get(ACCESS_TOKEN_COOKIE) or None,
        refresh_token=cookies.get(REFRESH_TOKEN_COOKIE) or None,
        user_data=_decode_user_data(cookies.get(USER_DATA_COOKIE)),
    )


def get_admin_session():
    """Request-scoped AdminSession, decoded once per request"""
    if not has_request_context():
        return AdminSession()
    if ENVIRON_KEY not in request.environ:
        request.environ[ENVIRON_KEY] = load_admin_session(request.cookies)
    return request.environ[ENVIRON_KEY]


def expires_from_epoch_ms(value):
    """Convert the provider's expires_in (epoch milliseconds) to an aware datetime"""
    return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)


def public_user_data(data):
    """Login payload minus credentials and tokens"""
    return {k: v for k, v in (data or {}).items() if k not in PRIVATE_USER_FIELDS}


def set_session_cookies(response, tokens, user_data, secure=False, refresh_days=7, now=None):
    """
    Translate the provider token payload into the three session cookies

    Args:
        response: Flask response to attach cookies to
        tokens: backendTokens dict with access_token, refresh_token, expires_in (epoch ms)
        user_data: login payload; credentials and tokens are stripped before storing
        secure: set the Secure flag (production)
        refresh_days: lifetime of the refresh token cookie
        now: reference time for the refresh token expiry
    """
    now = now or datetime.now(timezone.utc)
    expires = expires_from_epoch_ms(tokens['expires_in'])
    cookie_options = {
        'httponly': True,
        'secure': secure,
        'samesite': 'Lax',
        'path': '/',
    }

    response.set_cookie(ACCESS_TOKEN_COOKIE, tokens['access_token'], expires=expires, **cookie_options)
    response.set_cookie(REFRESH_TOKEN_COOKIE, tokens['refresh_token'],
                        expires=now + timedelta(days=refresh_days), **cookie_options)
    response.set_cookie(USER_DATA_COOKIE, json.dumps(public_user_data(user_data)),
                        expires=expires, **cookie_options)
    return response


def clear_session_cookies(response):
    """Delete all session cookies, present or not"""
    for name in SESSION_COOKIES:
        response.delete_cookie(name, path='/')
    return response
