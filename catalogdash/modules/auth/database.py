from pymongo import DESCENDING

from ...core.database import Database, to_object_id, utcnow
from .utils import hash_password, verify_password


class UserDatabase:
    @staticmethod
    def _normalize_email(email):
        return (email or '').strip().lower()

    @staticmethod
    def public_user(user):
        """Safe projection of a user document (never includes the password)"""
        return {
            'id': str(user['_id']),
            'email': user['email'],
            'name': user.get('name'),
            'role': user.get('role'),
        }

    @staticmethod
    def get_user_by_email(email):
        """Get user by email address"""
        return Database.users().find_one({'email': UserDatabase._normalize_email(email)})

    @staticmethod
    def get_user_by_id(user_id):
        """Get user by ID; None for unknown or malformed ids"""
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return Database.users().find_one({'_id': oid})

    @staticmethod
    def create_user(name, email, password, role='admin'):
        """Create a new user and return the stored document"""
        now = utcnow()
        user = {
            'name': name,
            'email': UserDatabase._normalize_email(email),
            'password': hash_password(password),
            'role': role,
            'createdAt': now,
            'updatedAt': now,
        }
        result = Database.users().insert_one(user)
        user['_id'] = result.inserted_id
        return user

    @staticmethod
    def verify_user_credentials(email, password):
        """Return the user when the email/password pair matches, else None"""
        user = UserDatabase.get_user_by_email(email)
        if user and verify_password(password, user.get('password')):
            return user
        return None

    @staticmethod
    def list_users():
        """All users without their password hash, newest first"""
        return list(Database.users().find({}, {'password': 0}).sort('createdAt', DESCENDING))

    @staticmethod
    def delete_user(user_id):
        """Delete a user by ID. Returns True when a document was removed."""
        oid = to_object_id(user_id)
        if oid is None:
            return False
        return Database.users().delete_one({'_id': oid}).deleted_count > 0
