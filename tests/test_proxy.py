"""
Proxy route tests
=================

Every analytics route forwards the access_token cookie as a bearer token,
narrows the query string to its allow-list and relays upstream errors.
"""

import pytest

from pointnow_admin.core.upstream import UpstreamError, UpstreamUnavailable
from pointnow_admin.modules.proxy import ANALYTICS_ROUTES, fetch_analytics

from conftest import failed, ok, upstream_calls

ROUTE_URLS = ['/api/analytics' + route.path for route in ANALYTICS_ROUTES]

REQUIRED_ARGS = {
    'business_leaderboard_customers': {'business_id': 'biz-1'},
    'customer_points_historical_data': {'customer_id': 'cus-1'},
}


def _url(route):
    return '/api/analytics' + route.path


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('url', ROUTE_URLS)
def test_missing_cookie_is_unauthorized(client, upstream, url):
    response = client.get(url)

    assert response.status_code == 401
    assert response.get_json() == {'message': 'Unauthorized', 'status_code': 401}
    upstream.get.assert_not_called()


def test_bearer_token_comes_from_cookie(signed_in, upstream):
    upstream.get.return_value = ok({'metrics': {'total_revenue': 100}})

    response = signed_in.get('/api/analytics/revenue/metrics?start_date=2024-01-01&end_date=2024-12-31')

    assert response.status_code == 200
    assert response.get_json() == {'data': {'metrics': {'total_revenue': 100}}}
    upstream.get.assert_called_once_with(
        '/analytics/revenue/metrics',
        params={'start_date': '2024-01-01', 'end_date': '2024-12-31'},
        token='access-123',
    )


# ---------------------------------------------------------------------------
# Query narrowing
# ---------------------------------------------------------------------------

def test_unknown_params_are_dropped_and_defaults_applied(signed_in, upstream):
    signed_in.get('/api/analytics/business/summary?query=cafe&debug=1&sort=name')

    [(path, params)] = upstream_calls(upstream)
    assert path == '/analytics/business/summary'
    assert params == {'page': '1', 'limit': '10', 'query': 'cafe'}


def test_empty_values_are_not_forwarded(signed_in, upstream):
    signed_in.get('/api/analytics/business/summary?page=3&limit=20&query=&country_code=')

    [(_, params)] = upstream_calls(upstream)
    assert params == {'page': '3', 'limit': '20'}


def test_customers_summary_forwards_date_filters(signed_in, upstream):
    signed_in.get(
        '/api/analytics/customers/summary?start_date_joined=2024-01-01&end_date_joined=2024-02-01'
        '&last_visit_start_date=2024-03-01&query=bob'
    )

    [(_, params)] = upstream_calls(upstream)
    assert params == {
        'page': '1',
        'limit': '10',
        'start_date_joined': '2024-01-01',
        'end_date_joined': '2024-02-01',
        'last_visit_start_date': '2024-03-01',
    }


@pytest.mark.parametrize('endpoint,message', [
    ('business_leaderboard_customers', 'Business ID is required'),
    ('customer_points_historical_data', 'Customer ID is required'),
])
def test_missing_required_param_is_bad_request(signed_in, upstream, endpoint, message):
    route = next(r for r in ANALYTICS_ROUTES if r.endpoint == endpoint)

    response = signed_in.get(_url(route))

    assert response.status_code == 400
    assert response.get_json() == {'message': message, 'status_code': 400}
    upstream.get.assert_not_called()


# ---------------------------------------------------------------------------
# Error relay
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('route', ANALYTICS_ROUTES, ids=lambda r: r.endpoint)
def test_upstream_error_message_is_relayed(signed_in, upstream, route):
    upstream.get.return_value = failed(403, 'Forbidden for this role')

    response = signed_in.get(_url(route), query_string=REQUIRED_ARGS.get(route.endpoint, {}))

    assert response.status_code == 403
    assert response.get_json() == {'message': 'Forbidden for this role', 'status_code': 403}


@pytest.mark.parametrize('route', ANALYTICS_ROUTES, ids=lambda r: r.endpoint)
def test_upstream_error_without_message_uses_fallback(signed_in, upstream, route):
    upstream.get.return_value = failed(502)

    response = signed_in.get(_url(route), query_string=REQUIRED_ARGS.get(route.endpoint, {}))

    assert response.status_code == 502
    assert response.get_json() == {'message': route.fallback_message, 'status_code': 502}
    assert route.fallback_message.startswith('Failed to fetch')


def test_unreachable_upstream_is_internal_error(signed_in, upstream):
    upstream.get.side_effect = UpstreamUnavailable('connection refused')

    response = signed_in.get('/api/analytics/revenue/charges')

    assert response.status_code == 500
    assert response.get_json() == {'message': 'Internal server error', 'status_code': 500}


def test_unexpected_exception_still_returns_envelope(signed_in, upstream):
    upstream.get.side_effect = RuntimeError('boom')

    response = signed_in.get('/api/analytics/revenue/charges')

    assert response.status_code == 500
    assert response.get_json() == {'message': 'Internal server error', 'status_code': 500}


# ---------------------------------------------------------------------------
# In-process calls used by the pages
# ---------------------------------------------------------------------------

def test_fetch_analytics_returns_body(upstream):
    upstream.get.return_value = ok({'total_customers': 7})

    body = fetch_analytics('customers_summary_metrics', {'start_date': '2024-01-01'}, 'tok', upstream)

    assert body == {'data': {'total_customers': 7}}


def test_fetch_analytics_raises_with_envelope_message(upstream):
    upstream.get.return_value = failed(404)

    with pytest.raises(UpstreamError) as excinfo:
        fetch_analytics('revenue_charges', {}, 'tok', upstream)

    assert excinfo.value.status_code == 404
    assert excinfo.value.message == 'Failed to fetch charges'


def test_fetch_analytics_without_token_is_unauthorized(upstream):
    with pytest.raises(UpstreamError) as excinfo:
        fetch_analytics('revenue_metrics', {}, None, upstream)

    assert excinfo.value.status_code == 401
    upstream.get.assert_not_called()
