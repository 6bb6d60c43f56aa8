"""
Admin Dashboard Routes
======================

Overview page and the template context every admin page relies on.
"""

from datetime import datetime
from urllib.parse import urlencode

from flask import current_app, redirect, render_template, request, url_for

from pointnow_admin.core import get_admin_session, get_config_value
from pointnow_admin.core.formatting import default_date_range, parse_date_range
from pointnow_admin.core.gather import gather_settled
from pointnow_admin.modules.auth import login_required
from . import dashboard_bp
from .helpers import analytics, data_of, report_error

NAV_ITEMS = [
    ('dashboard.overview', 'Overview'),
    ('businesses.business_list', 'Businesses'),
    ('customers.customer_list', 'Customers'),
    ('revenue.revenue_overview', 'Revenue'),
    ('settings.settings_page', 'Settings'),
]

METRIC_SOURCES = {
    'revenue': 'revenue_metrics',
    'businesses': 'business_summary_metrics',
    'customers': 'customers_summary_metrics',
}


@dashboard_bp.route('/')
def index():
    """Send signed-in admins to the dashboard, everyone else to sign-in"""
    if get_admin_session().is_authenticated:
        return redirect(url_for('dashboard.overview'))
    return redirect(url_for('auth.signin'))


@dashboard_bp.route('/dashboard')
@login_required
def overview():
    """Admin dashboard - revenue, business and customer metrics for a date range"""
    date_range = parse_date_range(request.args, 'from', 'to', default=default_date_range())
    query = date_range.to_query()

    # One slow or failing endpoint must not hold back the other cards
    results = gather_settled({
        name: (lambda fn=analytics(endpoint): fn(query))
        for name, endpoint in METRIC_SOURCES.items()
    })

    cards = {}
    for name, result in results.items():
        if result.ok:
            cards[name] = {'data': data_of(result.value), 'error': None}
        else:
            cards[name] = {'data': {}, 'error': result.message}
            report_error(f"Failed to load {name} metrics", result.message)

    return render_template(
        'dashboard/overview.html',
        cards=cards,
        date_range=date_range,
    )


@dashboard_bp.app_context_processor
def utility_processor():
    """
    Add the admin session, navigation and helpers to every template
    """
    def endpoint_exists(endpoint):
        """Check if a Flask endpoint exists"""
        return endpoint in current_app.view_functions

    def current_year():
        """Return current year for footer"""
        return datetime.now().year

    def url_with(**changes):
        """Current URL with some query parameters replaced (None removes one)"""
        args = request.args.to_dict()
        for key, value in changes.items():
            if value is None:
                args.pop(key, None)
            else:
                args[key] = value
        # query keys never reach url_for, so they cannot collide with view args
        base = url_for(request.endpoint, **(request.view_args or {}))
        return f"{base}?{urlencode(args)}" if args else base

    nav_items = [(endpoint, label) for endpoint, label in NAV_ITEMS if endpoint_exists(endpoint)]

    return dict(
        admin_session=get_admin_session(),
        nav_items=nav_items,
        search_debounce_ms=get_config_value('SEARCH_DEBOUNCE_MS', 500),
        endpoint_exists=endpoint_exists,
        current_year=current_year,
        url_with=url_with,
    )
