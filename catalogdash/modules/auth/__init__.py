"""
Catalogdash Auth Module

Provides administrator authentication and account management:
- Email/password login issuing a signed session cookie
- Logout and current-session lookup
- Superadmin-only admin registration, listing and deletion
"""

from flask import Blueprint

auth_bp = Blueprint(
    'auth',
    __name__,
    template_folder='templates'
)

from . import routes  # noqa: E402,F401
from .database import UserDatabase  # noqa: E402
from .utils import get_current_user, issue_token, login_required, superadmin_required, verify_token  # noqa: E402

__all__ = [
    'auth_bp', 'UserDatabase', 'get_current_user', 'issue_token', 'verify_token',
    'login_required', 'superadmin_required',
]
