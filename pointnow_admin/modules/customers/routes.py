"""
Customer Routes
===============

- GET /dashboard/customers        list, metrics cards and filters
- GET /dashboard/customers/<id>   customer profile and points history
"""

from flask import render_template, request

from pointnow_admin.core.filters import CustomerFilter
from pointnow_admin.core.formatting import DateRange, default_date_range, parse_date_range
from pointnow_admin.core.upstream import UpstreamError
from pointnow_admin.modules.auth import login_required
from pointnow_admin.modules.dashboard.helpers import (
    analytics, data_of, list_view, load_metrics, lookup_record, report_error
)
from . import customers_bp

VERIFIED_CHOICES = [
    ('all', 'All customers'),
    ('verified', 'Verified'),
    ('unverified', 'Unverified'),
]


def _server_filters(args):
    """Joined-date and last-visit intervals are filtered upstream"""
    joined = DateRange(args.get('joined_from'), args.get('joined_to'))
    last_visit = DateRange(args.get('visit_from'), args.get('visit_to'))
    filters = {}
    filters.update(joined.to_query('start_date_joined', 'end_date_joined'))
    filters.update(last_visit.to_query('last_visit_start_date', 'last_visit_end_date'))
    return filters, joined, last_visit


def chart_points(historical_data):
    """Bar heights (percent of the busiest day) for the points history chart"""
    peak = max((item.get('total_points') or 0 for item in historical_data), default=0)
    bars = []
    for item in historical_data:
        points = item.get('total_points') or 0
        bars.append({
            'date': item.get('date'),
            'count': item.get('count') or 0,
            'total_points': points,
            'height': round(points / peak * 100) if peak else 0,
        })
    return bars


@customers_bp.route('/')
@customers_bp.route('')
@login_required
def customer_list():
    """Customers page - metrics for the date range plus the paginated list"""
    date_range = parse_date_range(request.args, 'from', 'to', default=default_date_range())
    metrics, metrics_error = load_metrics('customers_summary_metrics', date_range, 'customer metrics')

    filters, joined, last_visit = _server_filters(request.args)
    view = list_view('customers_summary', 'customers', request.args, search_param=None, filters=filters)
    view.load()
    if view.error:
        report_error('Failed to load customers', view.error)

    search = request.args.get('search', '').strip()
    client_filter = CustomerFilter(verified=request.args.get('verified', 'all'), search=search)
    customers = view.visible_items(client_filter)

    return render_template(
        'customers/list.html',
        metrics=metrics,
        metrics_error=metrics_error,
        date_range=date_range,
        view=view,
        customers=customers,
        client_filter=client_filter,
        search=search,
        joined=joined,
        last_visit=last_visit,
        verified_choices=VERIFIED_CHOICES,
        filters_applied=client_filter.is_active or bool(filters),
    )


@customers_bp.route('/<customer_id>')
@login_required
def customer_detail(customer_id):
    """Customer profile - found by scanning the customer list - and points history"""
    customer, error, status_code = lookup_record('customers_summary', customer_id, 'customers', 'Customer')
    if customer is None:
        return render_template('customers/detail.html', customer=None, error=error), status_code

    history_error = None
    historical_data = []
    try:
        body = analytics('customer_points_historical_data')({'customer_id': customer_id})
        historical_data = data_of(body).get('historical_data') or []
    except UpstreamError as e:
        history_error = e.message
        report_error('Failed to load historical data', e.message)

    return render_template(
        'customers/detail.html',
        customer=customer,
        historical_data=historical_data,
        chart=chart_points(historical_data),
        history_error=history_error,
        error=None,
    )
