"""
Ops Routes
==========

Public health endpoint. The admin app holds no state of its own, so health
means "the process is up and knows where the upstream API lives".
"""

import time
from datetime import datetime

from flask import jsonify

from pointnow_admin.core import get_config_value
from . import ops_health_bp

STARTED_AT = time.monotonic()


def _get_uptime(now=None):
    """Process uptime since this module was imported"""
    uptime_seconds = (now if now is not None else time.monotonic()) - STARTED_AT

    days = int(uptime_seconds // 86400)
    hours = int((uptime_seconds % 86400) // 3600)
    minutes = int((uptime_seconds % 3600) // 60)

    return {
        'seconds': round(uptime_seconds),
        'formatted': f'{days}d {hours}h {minutes}m',
        'days': days,
    }


def _build_health_response():
    api_url = get_config_value('API_URL') or ''
    return {
        'status': 'ok',
        'timestamp': datetime.now().isoformat(),
        'checks': {
            'upstream': {
                'configured': bool(api_url),
                'url': api_url,
            },
            'uptime': _get_uptime(),
        },
    }


@ops_health_bp.route('/')
@ops_health_bp.route('')
def health_check():
    """Public health endpoint for uptime monitors."""
    return jsonify(_build_health_response()), 200
