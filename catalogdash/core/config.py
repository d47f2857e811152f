import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _split_csv(value):
    return [item.strip() for item in (value or '').split(',') if item.strip()]


class Config:
    """
    Base configuration for the catalogdash admin.
    Deployments provide the database, token secret and media host credentials
    via environment variables (or a .env file).
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY') or os.getenv('SECRET_KEY')
    ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')

    # MongoDB
    MONGODB_URI = os.getenv('MONGODB_URI', 'mongodb://localhost:27017/catalogdash')
    MONGODB_DB = os.getenv('MONGODB_DB')
    MONGODB_TIMEOUT_MS = int(os.getenv('MONGODB_TIMEOUT_MS', '5000'))

    # Collection names
    USERS_COLLECTION = "users"
    PRODUCTS_COLLECTION = "products"
    LOGS_COLLECTION = "app_logs"

    # Session token
    JWT_SECRET = os.getenv('JWT_SECRET')
    JWT_ALGORITHM = "HS256"
    TOKEN_EXPIRY_DAYS = int(os.getenv('TOKEN_EXPIRY_DAYS', '7'))
    AUTH_COOKIE_NAME = os.getenv('AUTH_COOKIE_NAME', 'auth-token')
    BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', '12'))

    # Cloudinary media host
    CLOUDINARY_CLOUD_NAME = os.getenv('CLOUDINARY_CLOUD_NAME')
    CLOUDINARY_API_KEY = os.getenv('CLOUDINARY_API_KEY')
    CLOUDINARY_API_SECRET = os.getenv('CLOUDINARY_API_SECRET')
    CLOUDINARY_ROOT_FOLDER = os.getenv('CLOUDINARY_ROOT_FOLDER', 'ecommerce-dashboard')
    MAX_UPLOAD_MB = int(os.getenv('MAX_UPLOAD_MB', '10'))

    # Dashboard
    LOW_STOCK_THRESHOLD = int(os.getenv('LOW_STOCK_THRESHOLD', '10'))

    # Comma separated list of origins allowed to call /api/* with credentials
    CORS_ORIGINS = _split_csv(os.getenv('CORS_ORIGINS'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)


def is_production():
    """Check if running in production"""
    return str(get_config_value('ENVIRONMENT', 'development')).lower() == 'production'
