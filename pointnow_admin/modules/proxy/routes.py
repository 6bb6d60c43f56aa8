"""
Proxy Routes
============

One route per upstream analytics endpoint. The table below is the whole
contract: upstream path, the query parameters a route forwards (with
defaults), the parameters it requires, and the message used when the
upstream fails without one of its own.

API Endpoints (require the access_token cookie):
- GET /api/analytics/business/summary
- GET /api/analytics/business/summary/metrics
- GET /api/analytics/business/leaderboard/customers
- GET /api/analytics/customers/summary
- GET /api/analytics/customers/summary/metrics
- GET /api/analytics/leaderboard/customer/points/historical-data
- GET /api/analytics/revenue/metrics
- GET /api/analytics/revenue/historical-data
- GET /api/analytics/revenue/charges
"""

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from pointnow_admin.core import LoggingService, get_admin_session, get_upstream_client
from pointnow_admin.core.upstream import UpstreamError, UpstreamUnavailable
from . import proxy_bp

UNAUTHORIZED = {'message': 'Unauthorized', 'status_code': 401}
INTERNAL_ERROR = {'message': 'Internal server error', 'status_code': 500}


class MissingParameter(Exception):
    """Raised when a route-required query parameter is absent"""


class ProxyRoute:
    """
    One forwarded analytics endpoint

    Args:
        endpoint: Flask endpoint name, also used by views to call the route in-process
        path: path below /analytics, shared by the local rule and the upstream URL
        params: allow-list of forwarded query parameters, in upstream order;
            a (name, default) tuple gives the parameter a default
        required: parameters that must be present (400 otherwise)
        fallback_message: error message when the upstream does not supply one
    """

    def __init__(self, endpoint, path, params, required=(), fallback_message='Request failed'):
        self.endpoint = endpoint
        self.path = path
        self.params = [p if isinstance(p, tuple) else (p, None) for p in params]
        self.required = tuple(required)
        self.fallback_message = fallback_message

    @property
    def upstream_path(self):
        return f"/analytics{self.path}"

    @property
    def allowed(self):
        return [name for name, _ in self.params]

    def build_query(self, args):
        """Narrow inbound args to the allow-list, applying defaults; unknown names are dropped"""
        for name in self.required:
            if not args.get(name):
                raise MissingParameter(f"{_humanize(name)} is required")

        query = {}
        for name, default in self.params:
            value = args.get(name) or default
            if value:
                query[name] = value
        return query

    def __repr__(self):
        return f"<ProxyRoute {self.endpoint} {self.upstream_path}>"


def _humanize(name):
    """business_id -> Business ID"""
    words = name.split('_')
    if words[-1] == 'id':
        words[-1] = 'ID'
    return ' '.join([words[0].capitalize()] + words[1:])


ANALYTICS_ROUTES = [
    ProxyRoute(
        'business_summary', '/business/summary',
        [('page', '1'), ('limit', '10'), 'query', 'country_code'],
        fallback_message='Failed to fetch businesses',
    ),
    ProxyRoute(
        'business_summary_metrics', '/business/summary/metrics',
        ['start_date', 'end_date'],
        fallback_message='Failed to fetch business metrics',
    ),
    ProxyRoute(
        'business_leaderboard_customers', '/business/leaderboard/customers',
        ['business_id', ('page', '1'), ('limit', '10'), 'start_date', 'end_date'],
        required=['business_id'],
        fallback_message='Failed to fetch customer leaderboard',
    ),
    ProxyRoute(
        'customers_summary', '/customers/summary',
        [('page', '1'), ('limit', '10'), 'start_date_joined', 'end_date_joined',
         'last_visit_start_date', 'last_visit_end_date'],
        fallback_message='Failed to fetch customers',
    ),
    ProxyRoute(
        'customers_summary_metrics', '/customers/summary/metrics',
        ['start_date', 'end_date'],
        fallback_message='Failed to fetch customer metrics',
    ),
    ProxyRoute(
        'customer_points_historical_data', '/leaderboard/customer/points/historical-data',
        ['customer_id'],
        required=['customer_id'],
        fallback_message='Failed to fetch historical data',
    ),
    ProxyRoute(
        'revenue_metrics', '/revenue/metrics',
        ['start_date', 'end_date'],
        fallback_message='Failed to fetch revenue metrics',
    ),
    ProxyRoute(
        'revenue_historical_data', '/revenue/historical-data',
        ['start_date', 'end_date'],
        fallback_message='Failed to fetch revenue historical data',
    ),
    ProxyRoute(
        'revenue_charges', '/revenue/charges',
        ['start_date', 'end_date', ('page', '1'), ('limit', '10')],
        fallback_message='Failed to fetch charges',
    ),
]

ROUTES_BY_ENDPOINT = {route.endpoint: route for route in ANALYTICS_ROUTES}


def forward(route, args, access_token, client):
    """
    Forward one request upstream and shape the reply

    Returns:
        (body, status_code) - never raises
    """
    if not access_token:
        LoggingService.log_security_event(f"Unauthenticated request to {route.upstream_path}")
        return UNAUTHORIZED, 401

    try:
        query = route.build_query(args)
    except MissingParameter as e:
        return {'message': str(e), 'status_code': 400}, 400

    try:
        upstream = client.get(route.upstream_path, params=query, token=access_token)
    except UpstreamUnavailable as e:
        LoggingService.log_error_with_traceback('proxy', e, {'route': route.endpoint})
        return INTERNAL_ERROR, 500

    if not upstream.ok:
        LoggingService.warning('proxy', f"{route.upstream_path} answered {upstream.status_code}")
        return {
            'message': upstream.message(route.fallback_message),
            'status_code': upstream.status_code,
        }, upstream.status_code

    return upstream.data, 200


def fetch_analytics(endpoint, params, access_token, client):
    """
    In-process call of a proxy route for the server-rendered views

    Raises:
        UpstreamError: for every non-200 outcome, carrying the envelope message
    """
    route = ROUTES_BY_ENDPOINT[endpoint]
    body, status = forward(route, params, access_token, client)
    if status != 200:
        raise UpstreamError(status, body.get('message') or route.fallback_message)
    return body


def _make_view(route):
    def view():
        body, status = forward(route, request.args, get_admin_session().access_token, get_upstream_client())
        return jsonify(body), status
    view.__name__ = route.endpoint
    view.__doc__ = f"Proxy for GET {route.upstream_path}"
    return view


for _route in ANALYTICS_ROUTES:
    proxy_bp.add_url_rule(_route.path, endpoint=_route.endpoint, view_func=_make_view(_route), methods=['GET'])


@proxy_bp.errorhandler(Exception)
def handle_unexpected_error(error):
    """Anything that escapes a proxy view still answers with the JSON envelope"""
    if isinstance(error, HTTPException):
        return error
    LoggingService.log_error_with_traceback('proxy', error, {'path': request.path})
    return jsonify(INTERNAL_ERROR), 500
