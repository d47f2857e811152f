"""
Auth Routes
===========

POST   /api/auth/login        - Email/password login, sets the session cookie
POST   /api/auth/logout       - Clear the session cookie
GET    /api/auth/me           - Current principal
POST   /api/auth/register     - Create an admin (superadmin only)
GET    /api/auth/register     - List admins (superadmin only)
DELETE /api/auth/admin/<id>   - Delete an admin (superadmin only)
GET    /login                 - Login page
"""

from flask import jsonify, render_template, request
from pymongo.errors import DuplicateKeyError

from ...core.database import serialize, to_object_id
from ...core.errors import internal_error
from ...core.logging_service import LoggingService
from ...core.validations import LoginSchema, RegisterAdminSchema, validate
from . import auth_bp
from .database import UserDatabase
from .utils import (
    clear_auth_cookie,
    get_current_user,
    issue_token,
    login_required,
    set_auth_cookie,
    superadmin_required,
)


@auth_bp.route('/login')
def login_page():
    """Login page route"""
    return render_template('auth/login.html')


@auth_bp.route('/api/auth/login', methods=['POST'])
def login():
    """Handle email/password sign-in"""
    try:
        validation = validate(LoginSchema, request.get_json(silent=True))
        if not validation.ok:
            return jsonify({'message': 'Invalid input', 'errors': validation.errors}), 400

        email = validation.data['email']
        user = UserDatabase.verify_user_credentials(email, validation.data['password'])

        if not user:
            # Same answer for unknown email and wrong password
            LoggingService.log_security_event('Failed admin login', {'email': email})
            return jsonify({'message': 'Invalid email or password'}), 401

        token = issue_token({
            'userId': str(user['_id']),
            'email': user['email'],
            'role': user['role'],
        })

        response = jsonify({
            'message': 'Login successful',
            'user': UserDatabase.public_user(user),
        })
        set_auth_cookie(response, token)

        LoggingService.log_user_action('auth', 'login', user_id=str(user['_id']))
        return response

    except Exception as e:
        return internal_error('auth', e)


@auth_bp.route('/api/auth/logout', methods=['POST'])
def logout():
    """Clear the session cookie"""
    response = jsonify({'message': 'Logged out successfully'})
    return clear_auth_cookie(response)


@auth_bp.route('/api/auth/me')
@login_required
def me():
    """Current principal as a safe user projection"""
    try:
        principal = get_current_user()
        user = UserDatabase.get_user_by_id(principal['userId'])
        if not user:
            return jsonify({'message': 'Unauthorized'}), 401
        return jsonify({'user': UserDatabase.public_user(user)})
    except Exception as e:
        return internal_error('auth', e)


@auth_bp.route('/api/auth/register', methods=['POST'])
@superadmin_required('Unauthorized. Only superadmins can register new admins.')
def register_admin():
    """Create a new admin account"""
    try:
        validation = validate(RegisterAdminSchema, request.get_json(silent=True))
        if not validation.ok:
            return jsonify({'message': 'Invalid input', 'errors': validation.errors}), 400

        data = validation.data
        if UserDatabase.get_user_by_email(data['email']):
            return jsonify({'message': 'User with this email already exists'}), 409

        try:
            user = UserDatabase.create_user(data['name'], data['email'], data['password'], data['role'])
        except DuplicateKeyError:
            return jsonify({'message': 'User with this email already exists'}), 409

        LoggingService.log_user_action(
            'auth', 'admin created',
            user_id=get_current_user()['userId'],
            details={'email': user['email'], 'role': user['role']},
        )

        return jsonify({
            'message': 'Admin created successfully',
            'user': UserDatabase.public_user(user),
        }), 201

    except Exception as e:
        return internal_error('auth', e)


@auth_bp.route('/api/auth/register', methods=['GET'])
@superadmin_required()
def list_admins():
    """List all admins, newest first"""
    try:
        admins = UserDatabase.list_users()
        return jsonify({'admins': serialize(admins)})
    except Exception as e:
        return internal_error('auth', e)


@auth_bp.route('/api/auth/admin/<admin_id>', methods=['DELETE'])
@superadmin_required('Unauthorized. Only superadmins can delete admins.')
def delete_admin(admin_id):
    """Delete an admin account (never your own)"""
    try:
        principal = get_current_user()

        target_id = to_object_id(admin_id)
        # Compare parsed ids; hex case differs between spellings of one id
        if target_id is not None and target_id == to_object_id(principal['userId']):
            return jsonify({'message': 'You cannot delete your own account.'}), 400

        if not UserDatabase.get_user_by_id(admin_id):
            return jsonify({'message': 'Admin not found'}), 404

        UserDatabase.delete_user(admin_id)

        LoggingService.log_user_action(
            'auth', 'admin deleted', user_id=principal['userId'], details={'deleted_id': admin_id}
        )
        return jsonify({'message': 'Admin deleted successfully'})

    except Exception as e:
        return internal_error('auth', e)
