"""
Helpers shared by the dashboard pages.
"""

import logging

from flask import flash

from pointnow_admin.core import get_admin_session, get_config_value, get_upstream_client
from pointnow_admin.core.listing import ListView
from pointnow_admin.core.lookup import LOOKUP_PAGE_SIZE, RecordNotFound, find_by_id
from pointnow_admin.core.upstream import UpstreamError
from pointnow_admin.modules.proxy import fetch_analytics

logger = logging.getLogger(__name__)


def analytics(endpoint):
    """
    Callable(params) -> upstream body for one proxy route, bound to the
    current admin's token. Safe to hand to worker threads.
    """
    token = get_admin_session().access_token
    client = get_upstream_client()

    def call(params=None):
        return fetch_analytics(endpoint, params or {}, token, client)
    call.__name__ = endpoint
    return call


def page_number(args, key='page'):
    try:
        return max(1, int(args.get(key, 1)))
    except (TypeError, ValueError):
        return 1


def list_view(endpoint, collection_key, args, page_key='page', **kwargs):
    """ListView for a proxy route, positioned on the page named in the query string"""
    kwargs.setdefault('limit', int(get_config_value('LIST_PAGE_SIZE', 10)))
    kwargs.setdefault('debounce_ms', int(get_config_value('SEARCH_DEBOUNCE_MS', 500)))
    return ListView(analytics(endpoint), collection_key, page=page_number(args, page_key), **kwargs)


def report_error(title, message):
    """Flash a failed fetch; the page also shows its own banner"""
    flash(f"{title}: {message}", 'error')


def data_of(body):
    return (body or {}).get('data') or {}


def load_metrics(endpoint, date_range, label):
    """(data, error) for a metrics route; failures are flashed, not raised"""
    try:
        return data_of(analytics(endpoint)(date_range.to_query())), None
    except UpstreamError as e:
        report_error(f"Failed to load {label}", e.message)
        return {}, e.message


def lookup_record(endpoint, record_id, collection_key, label):
    """
    Find one record by id through a list route

    Returns:
        (record, error, status_code) - record is None when the lookup failed
    """
    limit = int(get_config_value('LOOKUP_PAGE_SIZE', LOOKUP_PAGE_SIZE))
    try:
        return find_by_id(analytics(endpoint), record_id, collection_key, limit=limit, label=label), None, 200
    except RecordNotFound as e:
        logger.info("%s %s not found after %s page(s)", label, record_id, e.pages_scanned)
        report_error(f"Failed to load {label.lower()}", e.message)
        return None, e.message, 404
    except UpstreamError as e:
        report_error(f"Failed to load {label.lower()}", e.message)
        return None, e.message, 502
