"""
Revenue Module
==============

Revenue metrics, revenue history and the payment-provider charge list.

Usage:
    from pointnow_admin.modules.revenue import revenue_bp

    app.register_blueprint(revenue_bp)  # Registers at /dashboard/revenue
"""

from flask import Blueprint

revenue_bp = Blueprint(
    'revenue',
    __name__,
    url_prefix='/dashboard/revenue',
    template_folder='templates'
)

from . import routes

__all__ = ['revenue_bp']
