from flask import render_template, request

from pointnow_admin.core.filters import ChargeFilter
from pointnow_admin.core.formatting import default_date_range, parse_date_range
from pointnow_admin.core.gather import gather_settled
from pointnow_admin.modules.auth import login_required
from pointnow_admin.modules.dashboard.helpers import analytics, data_of, list_view, report_error
from . import revenue_bp

CHARGE_STATUS_CHOICES = [
    ('all', 'All statuses'),
    ('succeeded', 'Succeeded'),
    ('pending', 'Pending'),
    ('failed', 'Failed'),
]


def history_series(points):
    """Revenue history as bars scaled to the best day"""
    peak = max((point.get('value') or 0 for point in points), default=0)
    return [
        {
            'date': point.get('date'),
            'value': point.get('value') or 0,
            'height': round((point.get('value') or 0) / peak * 100) if peak else 0,
        }
        for point in points
    ]


@revenue_bp.route('/')
@revenue_bp.route('')
@login_required
def revenue_overview():
    """Revenue page - metrics, history and charges for one date range"""
    date_range = parse_date_range(request.args, 'from', 'to', default=default_date_range())
    query = date_range.to_query()

    results = gather_settled({
        'metrics': lambda fn=analytics('revenue_metrics'): fn(query),
        'history': lambda fn=analytics('revenue_historical_data'): fn(query),
    })

    metrics, metrics_error = {}, None
    if results['metrics'].ok:
        metrics = data_of(results['metrics'].value).get('metrics') or {}
    else:
        metrics_error = results['metrics'].message
        report_error('Failed to load revenue metrics', metrics_error)

    history, history_error = [], None
    if results['history'].ok:
        history = data_of(results['history'].value).get('historical_data') or []
    else:
        history_error = results['history'].message
        report_error('Failed to load revenue history', history_error)

    charges = list_view('revenue_charges', 'charges', request.args, search_param=None, filters=query)
    charges.load()
    if charges.error:
        report_error('Failed to load charges', charges.error)

    client_filter = ChargeFilter.from_args(request.args)

    return render_template(
        'revenue/overview.html',
        date_range=date_range,
        metrics=metrics,
        metrics_error=metrics_error,
        history=history_series(history),
        history_error=history_error,
        charges=charges,
        visible_charges=charges.visible_items(client_filter),
        client_filter=client_filter,
        status_choices=CHARGE_STATUS_CHOICES,
    )
