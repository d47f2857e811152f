"""
Centralized logging service for the catalog admin.
Every entry goes to the standard logging module and, when a database is
bound to the current app, to the app_logs collection with request context.
"""

import json
import logging
import traceback
from datetime import timedelta

from flask import current_app, has_app_context, has_request_context, request

from .database import utcnow

_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}


def _std_logger(source):
    return logging.getLogger(f"catalogdash.{source}")


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_logs_collection():
        """app_logs collection of the current app, or None outside an app"""
        if not has_app_context():
            return None
        from .database import EXTENSION_KEY, Database
        if EXTENSION_KEY not in current_app.extensions:
            return None
        return Database.logs()

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        try:
            ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            if ip_address and ',' in ip_address:
                ip_address = ip_address.split(',')[0].strip()

            user_agent = request.headers.get('User-Agent', '')
            request_path = request.path

            return ip_address, user_agent, request_path
        except Exception:
            return None, None, None

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (auth, products, upload, dashboard, ...)
            message (str): Main log message
            details (str/dict): Additional details
            user_id (str): Optional user identifier
        """
        level = level.upper()
        std_logger = _std_logger(source)
        std_logger.log(_LEVELS.get(level, logging.INFO), message)
        if details and level in ('ERROR', 'CRITICAL'):
            std_logger.log(_LEVELS[level], "Details: %s", json.dumps(details, indent=2, default=str)
                           if isinstance(details, dict) else details)

        try:
            collection = LoggingService._get_logs_collection()
            if collection is None:
                return

            ip_address, user_agent, request_path = LoggingService._get_request_context()

            collection.insert_one({
                'timestamp': utcnow(),
                'level': level,
                'source': source,
                'message': message,
                'details': details,
                'ipAddress': ip_address,
                'userAgent': user_agent,
                'requestPath': request_path,
                'userId': user_id,
            })
        except Exception as e:
            # Persisting is best effort; the stdlib logger already has the entry
            std_logger.warning(f"Logging service error: {e}")

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        """Log debug message"""
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        """Log critical message"""
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log user actions (login, admin creation, product deletion, etc.)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None, ip_address=None):
        """Log security-related events"""
        if ip_address and has_request_context():
            # Override request IP if provided
            details = details or {}
            details['provided_ip'] = ip_address

        LoggingService.warning('security', message, details)

    @staticmethod
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries"""
        try:
            collection = LoggingService._get_logs_collection()
            if collection is None:
                return 0

            cutoff_date = utcnow() - timedelta(days=days_to_keep)
            deleted_count = collection.delete_many({'timestamp': {'$lt': cutoff_date}}).deleted_count

            LoggingService.info('system', f"Cleaned up {deleted_count} old log entries")
            return deleted_count

        except Exception as e:
            LoggingService.error('system', f"Failed to cleanup old logs: {e}")
            return 0


# Convenience instance for easy importing
logger = LoggingService()
