"""
Gatekeeper
==========

App-wide request filter: every request except the login surfaces and static
assets needs a valid session cookie. API callers get a JSON 401, browsers are
sent to the login page. A browser already signed in is bounced from /login to
the dashboard.
"""

from flask import g, jsonify, redirect, request

PUBLIC_PATHS = ('/login', '/api/auth/login', '/api/auth/logout')
STATIC_PREFIXES = ('/static', '/favicon')


def is_static_path(path):
    return path.startswith(STATIC_PREFIXES) or '.' in path


def is_public_path(path):
    return path.startswith(PUBLIC_PATHS)


def is_api_path(path):
    return path.startswith('/api/')


def _reject(message):
    if is_api_path(request.path):
        return jsonify({'message': message}), 401
    return redirect('/login')


def gatekeeper():
    """before_request hook; returns a response to short-circuit the request"""
    # Lazy import: the auth module imports core
    from ..modules.auth.utils import get_token_from_cookies, verify_token

    path = request.path
    if is_static_path(path):
        return None

    token = get_token_from_cookies()

    if is_public_path(path):
        if path == '/login' and token and verify_token(token):
            return redirect('/dashboard')
        return None

    if not token:
        return _reject('Unauthorized')

    principal = verify_token(token)
    if not principal:
        return _reject('Invalid token')

    g.current_user = principal
    return None


def init_gatekeeper(app):
    app.before_request(gatekeeper)
