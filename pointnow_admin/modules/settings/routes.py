"""
Settings Admin Routes
=====================

Admin interface for the plan catalogue and maintenance mode.
"""

from flask import current_app, flash, redirect, render_template, request, url_for

from pointnow_admin.core import LoggingService, get_admin_session, get_config_value
from pointnow_admin.modules.auth import login_required
from . import settings_bp


class RuntimeSettings:
    """Process-local admin settings, reset on restart"""

    def __init__(self, maintenance_mode=False):
        self.maintenance_mode = maintenance_mode

    def update(self, maintenance_mode):
        changed = self.maintenance_mode != maintenance_mode
        self.maintenance_mode = maintenance_mode
        return changed


def get_runtime_settings():
    """The RuntimeSettings held by the running PointNowAdmin extension"""
    extension = current_app.extensions['pointnow_admin']
    return extension.runtime_settings


@settings_bp.route('/', methods=['GET', 'POST'])
@settings_bp.route('', methods=['GET', 'POST'])
@login_required
def settings_page():
    """Main settings page; POST saves the maintenance switch"""
    settings = get_runtime_settings()

    if request.method == 'POST':
        maintenance_mode = request.form.get('maintenance_mode') in ('on', 'true', '1')
        if settings.update(maintenance_mode):
            LoggingService.log_user_action(
                'settings', f"maintenance mode {'enabled' if maintenance_mode else 'disabled'}",
                user_id=get_admin_session().user_data.get('id'),
            )
        flash('Settings saved', 'success')
        return redirect(url_for('settings.settings_page'))

    return render_template('settings/settings.html',
                           plans=get_config_value('SUBSCRIPTION_PLANS', []),
                           maintenance_mode=settings.maintenance_mode)
