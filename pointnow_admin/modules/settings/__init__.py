"""
Settings Module
===============

Subscription plan catalogue and the maintenance-mode switch.
The switch lives in process memory; nothing is written upstream.
"""

from flask import Blueprint

settings_bp = Blueprint('settings', __name__,
                        url_prefix='/dashboard/settings',
                        template_folder='templates')

from . import routes
