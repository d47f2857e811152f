"""
Catalogdash - E-commerce Catalog Admin
======================================

A Flask admin backend for a product catalog with:
- Cookie-based JWT sessions for admin and superadmin accounts
- Product CRUD on MongoDB with image uploads to Cloudinary
- Aggregate dashboard statistics

Usage:
    from flask import Flask
    from catalogdash import CatalogDash

    app = Flask(__name__)
    CatalogDash(app)

or simply `catalogdash.create_app()`.
"""

from flask import Flask
from flask_cors import CORS

from .core.cli import init_cli
from .core.config import Config
from .core.database import Database
from .core.errors import register_error_handlers
from .core.gatekeeper import init_gatekeeper
from .core.logging_service import LoggingService

__version__ = '0.1.0'

DEFAULT_FEATURES = {
    'auth': True,
    'products': True,
    'upload': True,
    'dashboard': True,
}


class CatalogDash:
    """
    Flask extension wiring the catalog admin into an app.

    Args:
        app: Flask application (or None for init_app later)
        config (dict): Optional settings:
            features: {module name: bool} to switch blueprints off
            mongo_client: pre-built MongoClient (tests pass a mongomock client)
    """

    def __init__(self, app=None, config=None):
        self._config = dict(config or {})
        self._registered = []
        self.app = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.app = app
        self._apply_defaults(app)

        Database.init_app(app, client=self._config.get('mongo_client'))

        origins = app.config.get('CORS_ORIGINS') or Config.CORS_ORIGINS
        if origins:
            CORS(app, resources={r"/api/*": {"origins": origins}}, supports_credentials=True)

        init_gatekeeper(app)
        register_error_handlers(app)
        init_cli(app)
        self._register_modules(app)

        app.extensions['catalogdash'] = self
        LoggingService.info('catalogdash', f"Registered modules: {', '.join(self._registered)}")

    def _apply_defaults(self, app):
        if not app.config.get('SECRET_KEY') and Config.SECRET_KEY:
            app.config['SECRET_KEY'] = Config.SECRET_KEY
        if not app.config.get('MAX_CONTENT_LENGTH'):
            app.config['MAX_CONTENT_LENGTH'] = int(app.config.get('MAX_UPLOAD_MB') or Config.MAX_UPLOAD_MB) * 1024 * 1024

    def _feature_enabled(self, name):
        features = self._config.get('features') or {}
        return features.get(name, DEFAULT_FEATURES.get(name, False))

    def _register_modules(self, app):
        from .modules.auth import auth_bp
        from .modules.dashboard import dashboard_bp
        from .modules.products import products_bp
        from .modules.upload import upload_bp

        blueprints = [
            ('auth', auth_bp),
            ('products', products_bp),
            ('upload', upload_bp),
            ('dashboard', dashboard_bp),
        ]
        for name, blueprint in blueprints:
            if self._feature_enabled(name):
                app.register_blueprint(blueprint)
                self._registered.append(name)

    def get_registered_modules(self):
        """Names of the feature modules registered on the app"""
        return list(self._registered)


def create_app(config_overrides=None, mongo_client=None):
    """Application factory"""
    app = Flask(__name__)
    app.config['ENVIRONMENT'] = Config.ENVIRONMENT
    if config_overrides:
        app.config.update(config_overrides)

    CatalogDash(app, {'mongo_client': mongo_client})
    return app


__all__ = ['CatalogDash', 'create_app', 'Config', 'Database', 'LoggingService']
