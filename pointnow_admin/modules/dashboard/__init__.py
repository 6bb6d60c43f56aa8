"""
Dashboard Module
================

Admin dashboard shell for PointNow Admin.

Provides:
- The shared page layout (sidebar, flash messages, error banner)
- Overview page with revenue, business and customer metrics
- Helpers the feature pages use to call the proxy routes in-process

This is the foundation module that the businesses, customers, revenue
and settings pages plug into.
"""

from flask import Blueprint

dashboard_bp = Blueprint(
    'dashboard',
    __name__,
    template_folder='templates',
    static_folder='static',
    static_url_path='/dashboard/static'
)

from . import routes

__all__ = ['dashboard_bp']
