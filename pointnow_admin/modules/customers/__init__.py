"""
Customers Module
================

Customer list with metrics cards and filters, and the customer detail page
with per-business point summaries and the points history chart.

Usage:
    from pointnow_admin.modules.customers import customers_bp

    app.register_blueprint(customers_bp)  # Registers at /dashboard/customers
"""

from flask import Blueprint

customers_bp = Blueprint(
    'customers',
    __name__,
    url_prefix='/dashboard/customers',
    template_folder='templates'
)

from . import routes

__all__ = ['customers_bp']
