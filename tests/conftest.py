"""
Shared fixtures: a fully initialised app whose upstream client is a mock.

pytest-flask picks up the ``app`` fixture and provides ``client`` from it.
"""

import json
from unittest.mock import MagicMock

import pytest
from flask import Flask

from pointnow_admin import PointNowAdmin
from pointnow_admin.core.upstream import UpstreamClient, UpstreamResponse, UPSTREAM_EXTENSION_KEY

TEST_API_URL = 'https://api.test.local/api/v1'

ADMIN_USER = {
    'id': 'admin-1',
    'name': 'Ada Admin',
    'email': 'ada@pointnow.io',
    'user_roles': [{'role': {'name': 'super_admin'}}],
}


def ok(data=None, status_code=200):
    """Upstream reply in the platform's {data: ...} envelope"""
    return UpstreamResponse(status_code, {'data': data if data is not None else {}})


def failed(status_code, message=None):
    body = {'message': message} if message else {}
    return UpstreamResponse(status_code, body)


def page_of(collection_key, records, page=1, has_next=False, has_previous=False, total=None, limit=10):
    return ok({
        collection_key: records,
        'metadata': {
            'page': page,
            'limit': limit,
            'total': total if total is not None else len(records),
            'total_pages': page + (1 if has_next else 0),
            'has_next': has_next,
            'has_previous': has_previous,
        },
    })


@pytest.fixture
def upstream():
    """Mock UpstreamClient; set .get/.post return values or side effects per test"""
    mock = MagicMock(spec=UpstreamClient)
    mock.get.return_value = ok()
    mock.post.return_value = ok()
    return mock


@pytest.fixture
def app(upstream):
    """Fully initialised Flask app with all PointNow Admin modules registered."""
    app = Flask(__name__)
    app.config['TESTING'] = True
    app.config['SECRET_KEY'] = 'test-secret'
    app.config['API_URL'] = TEST_API_URL
    app.config['CORS_ALLOWED_ORIGINS'] = ['http://localhost:3000']
    app.extensions[UPSTREAM_EXTENSION_KEY] = upstream
    PointNowAdmin(app)
    return app


@pytest.fixture
def signed_in(client):
    """Test client carrying the session cookies set at login"""
    client.set_cookie('access_token', 'access-123')
    client.set_cookie('refresh_token', 'refresh-456')
    client.set_cookie('user_data', json.dumps(ADMIN_USER))
    return client


def upstream_calls(upstream, path=None):
    """(path, params) of every upstream GET, optionally only for one path"""
    calls = []
    for call in upstream.get.call_args_list:
        call_path = call.args[0]
        if path is None or call_path == path:
            calls.append((call_path, call.kwargs.get('params')))
    return calls
