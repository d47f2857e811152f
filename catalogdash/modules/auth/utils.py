from datetime import datetime, timedelta, timezone
from functools import wraps

import bcrypt
import jwt
from flask import current_app, g, jsonify, request

from ...core.config import get_config_value, is_production

ROLES = ('admin', 'superadmin')

_MISSING = object()


def _get_secret():
    secret = get_config_value('JWT_SECRET') or current_app.config.get('SECRET_KEY')
    if not secret:
        raise RuntimeError("JWT_SECRET is not configured")
    return secret


def hash_password(password):
    """Hash a password with bcrypt"""
    salt = bcrypt.gensalt(int(get_config_value('BCRYPT_ROUNDS', 12)))
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password, password_hash):
    """Check a password against a bcrypt hash; malformed hashes never match"""
    if not password_hash:
        return False
    if isinstance(password_hash, str):
        password_hash = password_hash.encode('utf-8')
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash)
    except ValueError:
        return False


def issue_token(principal):
    """
    Sign a session token for a principal.

    Args:
        principal (dict): userId, email and role of the authenticated user

    Returns:
        str: HS256 JWT expiring after TOKEN_EXPIRY_DAYS
    """
    now = datetime.now(timezone.utc)
    payload = {
        'userId': str(principal['userId']),
        'email': principal['email'],
        'role': principal['role'],
        'iat': now,
        'exp': now + timedelta(days=int(get_config_value('TOKEN_EXPIRY_DAYS', 7))),
    }
    return jwt.encode(payload, _get_secret(), algorithm=get_config_value('JWT_ALGORITHM', 'HS256'))


def verify_token(token):
    """Return the principal carried by a token, or None if it is invalid or expired"""
    if not token:
        return None
    try:
        payload = jwt.decode(token, _get_secret(), algorithms=[get_config_value('JWT_ALGORITHM', 'HS256')])
    except jwt.PyJWTError:
        return None

    if not payload.get('userId') or payload.get('role') not in ROLES:
        return None
    return {
        'userId': payload['userId'],
        'email': payload.get('email'),
        'role': payload['role'],
    }


def get_token_from_cookies():
    return request.cookies.get(get_config_value('AUTH_COOKIE_NAME', 'auth-token'))


def get_current_user():
    """Principal of the current request (verified once per request), or None"""
    principal = g.get('current_user', _MISSING)
    if principal is _MISSING:
        principal = verify_token(get_token_from_cookies())
        g.current_user = principal
    return principal


def set_auth_cookie(response, token):
    response.set_cookie(
        get_config_value('AUTH_COOKIE_NAME', 'auth-token'),
        token,
        max_age=int(get_config_value('TOKEN_EXPIRY_DAYS', 7)) * 24 * 60 * 60,
        httponly=True,
        secure=is_production(),
        samesite='Lax',
        path='/',
    )
    return response


def clear_auth_cookie(response):
    response.delete_cookie(get_config_value('AUTH_COOKIE_NAME', 'auth-token'), path='/')
    return response


def login_required(f):
    """Decorator to require an authenticated principal (JSON 401 otherwise)"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not get_current_user():
            return jsonify({'message': 'Unauthorized'}), 401
        return f(*args, **kwargs)
    return decorated_function


def superadmin_required(message='Unauthorized'):
    """Decorator to require a superadmin principal (401 if anonymous, 403 otherwise)"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = get_current_user()
            if not user:
                return jsonify({'message': 'Unauthorized'}), 401
            if user['role'] != 'superadmin':
                return jsonify({'message': message}), 403
            return f(*args, **kwargs)
        return decorated_function
    return decorator
