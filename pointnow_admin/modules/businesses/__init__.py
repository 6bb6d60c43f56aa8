"""
Businesses Module
=================

Business list with metrics cards, search and filters, and the business
detail page with its customer leaderboard.

Usage:
    from pointnow_admin.modules.businesses import businesses_bp

    app.register_blueprint(businesses_bp)  # Registers at /dashboard/businesses
"""

from flask import Blueprint

businesses_bp = Blueprint(
    'businesses',
    __name__,
    url_prefix='/dashboard/businesses',
    template_folder='templates'
)

from . import routes

__all__ = ['businesses_bp']
