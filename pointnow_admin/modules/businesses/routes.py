"""
Business Routes
===============

- GET /dashboard/businesses        list, metrics cards, search and filters
- GET /dashboard/businesses/<id>   business profile and customer leaderboard
"""

from flask import render_template, request

from pointnow_admin.core.filters import BusinessFilter
from pointnow_admin.core.formatting import decode_subscription, default_date_range, parse_date_range
from pointnow_admin.modules.auth import login_required
from pointnow_admin.modules.dashboard.helpers import list_view, load_metrics, lookup_record, report_error
from . import businesses_bp

COUNTRY_CODES = [
    ('', 'All countries'),
    ('MY', 'Malaysia'),
    ('SG', 'Singapore'),
    ('ID', 'Indonesia'),
    ('TH', 'Thailand'),
]

SUBSCRIPTION_STATUS_CHOICES = [
    ('all', 'All subscriptions'),
    ('active', 'Active'),
    ('trial', 'Trial'),
    ('expired', 'Expired'),
    ('none', 'No subscription'),
]

ACTIVE_CHOICES = [
    ('all', 'All businesses'),
    ('active', 'Active'),
    ('inactive', 'Inactive'),
]


@businesses_bp.route('/')
@businesses_bp.route('')
@login_required
def business_list():
    """Businesses page - metrics for the date range plus the paginated list"""
    date_range = parse_date_range(request.args, 'from', 'to', default=default_date_range())
    metrics, metrics_error = load_metrics('business_summary_metrics', date_range, 'business metrics')

    search = request.args.get('search', '').strip()
    country_code = request.args.get('country_code', '')
    view = list_view('business_summary', 'businesses', request.args,
                     search=search, filters={'country_code': country_code})
    view.load()
    if view.error:
        report_error('Failed to load businesses', view.error)

    client_filter = BusinessFilter.from_args(request.args)
    businesses = view.visible_items(client_filter)

    return render_template(
        'businesses/list.html',
        metrics=metrics,
        metrics_error=metrics_error,
        date_range=date_range,
        view=view,
        businesses=businesses,
        client_filter=client_filter,
        search=search,
        country_code=country_code,
        country_codes=COUNTRY_CODES,
        status_choices=SUBSCRIPTION_STATUS_CHOICES,
        active_choices=ACTIVE_CHOICES,
        filters_applied=client_filter.is_active or bool(search or country_code),
    )


@businesses_bp.route('/<business_id>')
@login_required
def business_detail(business_id):
    """Business profile - found by scanning the business list - and its customer leaderboard"""
    business, error, status_code = lookup_record('business_summary', business_id, 'businesses', 'Business')
    if business is None:
        return render_template('businesses/detail.html', business=None, error=error), status_code

    date_range = parse_date_range(request.args, 'from', 'to', default=default_date_range())
    leaderboard = list_view('business_leaderboard_customers', 'customers', request.args,
                            search_param=None,
                            filters=dict(business_id=business_id, **date_range.to_query()))
    leaderboard.load()
    if leaderboard.error:
        report_error('Failed to load customer leaderboard', leaderboard.error)

    return render_template(
        'businesses/detail.html',
        business=business,
        subscription=decode_subscription(business.get('latest_subscription')),
        leaderboard=leaderboard,
        date_range=date_range,
        error=None,
    )
