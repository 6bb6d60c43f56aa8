"""
PointNow Admin Core
===================

Shared utilities for the PointNow Admin modules.
"""

from .config import Config, get_config_value
from .logging_service import LoggingService, logger, configure_logging
from .upstream import (
    UpstreamClient, UpstreamResponse, UpstreamError, UpstreamUnavailable, get_upstream_client
)
from .session import AdminSession, get_admin_session

__all__ = [
    'Config', 'get_config_value',
    'LoggingService', 'logger', 'configure_logging',
    'UpstreamClient', 'UpstreamResponse', 'UpstreamError', 'UpstreamUnavailable', 'get_upstream_client',
    'AdminSession', 'get_admin_session',
]
