from flask import jsonify, redirect, render_template, request, url_for
from werkzeug.exceptions import HTTPException, InternalServerError

from pointnow_admin.core import LoggingService, get_admin_session, get_config_value, get_upstream_client
from pointnow_admin.core.session import clear_session_cookies, set_session_cookies
from pointnow_admin.core.upstream import UpstreamUnavailable
from . import auth_bp
from .utils import safe_next_url

LOGIN_PATH = '/auth/login/super_admin'
INTERNAL_ERROR = {'message': 'Internal server error', 'status': 500}


@auth_bp.route('/auth')
def signin():
    """Sign-in page route"""
    next_url = safe_next_url(request.args.get('next'), url_for('dashboard.overview'))
    if get_admin_session().is_authenticated:
        return redirect(next_url)
    return render_template('auth/login.html', next_url=next_url)


@auth_bp.route('/api/auth/login', methods=['POST'])
def login():
    """Proxy super-admin login and store the provider tokens as HTTP-only cookies"""
    body = request.get_json(silent=True) or {}
    email = (body.get('email') or '').strip()
    password = body.get('password') or ''

    if not email or not password:
        return jsonify({'message': 'Email and password are required', 'status': 400}), 400

    try:
        upstream = get_upstream_client().post(LOGIN_PATH, json={'email': email, 'password': password})
    except UpstreamUnavailable as e:
        LoggingService.log_error_with_traceback('auth', e, {'email': email})
        return jsonify(INTERNAL_ERROR), 500

    if not upstream.ok:
        LoggingService.log_security_event(f"Failed admin login for {email}", {'status': upstream.status_code})
        return jsonify({'message': upstream.message('Login failed'), 'status': upstream.status_code}), upstream.status_code

    if not isinstance(upstream.data, dict):
        LoggingService.error('auth', f"Unexpected login response body: {type(upstream.data).__name__}")
        return jsonify(INTERNAL_ERROR), 500

    response = jsonify(upstream.data)
    data = upstream.data.get('data')
    if not isinstance(data, dict):
        data = {}
    tokens = data.get('backendTokens')
    if tokens:
        try:
            set_session_cookies(
                response,
                tokens,
                data,
                secure=bool(get_config_value('SESSION_COOKIE_SECURE', False)),
                refresh_days=int(get_config_value('REFRESH_TOKEN_DAYS', 7)),
            )
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            LoggingService.log_error_with_traceback('auth', e, {'email': email})
            return jsonify(INTERNAL_ERROR), 500

    LoggingService.log_user_action('auth', 'login', user_id=data.get('id'))
    return response, 200


@auth_bp.route('/api/auth/logout', methods=['POST'])
def logout():
    """Clear all session cookies"""
    admin_session = get_admin_session()
    if admin_session.is_authenticated:
        LoggingService.log_user_action('auth', 'logout', user_id=admin_session.user_data.get('id'))

    response = jsonify({'message': 'Logged out successfully', 'status': 200})
    clear_session_cookies(response)
    return response, 200


@auth_bp.route('/api/auth/session')
def session_info():
    """Non-sensitive details of the signed-in admin"""
    admin_session = get_admin_session()
    if not admin_session.is_authenticated:
        return jsonify({'logged_in': False}), 401
    return jsonify({
        'logged_in': True,
        'name': admin_session.display_name,
        'email': admin_session.email,
        'roles': admin_session.role_names,
    })


@auth_bp.errorhandler(Exception)
def handle_unexpected_error(error):
    """Auth API endpoints answer unexpected failures with the JSON envelope"""
    if isinstance(error, HTTPException):
        return error
    LoggingService.log_error_with_traceback('auth', error, {'path': request.path})
    if request.path.startswith('/api/'):
        return jsonify(INTERNAL_ERROR), 500
    return InternalServerError(original_exception=error)
