from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from flask import current_app
from pymongo import ASCENDING, DESCENDING, TEXT, MongoClient

from .config import Config, get_config_value

EXTENSION_KEY = 'catalogdash.mongo'


class Database:
    """MongoDB access for the users and products collections"""

    @staticmethod
    def init_app(app, client=None):
        """
        Bind a MongoClient to the app.

        Args:
            app: Flask application
            client: Optional pre-built client (anything exposing the pymongo
                MongoClient API). Built from MONGODB_URI when omitted.
        """
        uri = app.config.get('MONGODB_URI') or Config.MONGODB_URI
        if client is None:
            timeout = app.config.get('MONGODB_TIMEOUT_MS') or Config.MONGODB_TIMEOUT_MS
            client = MongoClient(uri, serverSelectionTimeoutMS=timeout, tz_aware=False)

        db_name = app.config.get('MONGODB_DB') or Config.MONGODB_DB
        if db_name:
            db = client[db_name]
        else:
            # Database named in the URI, falling back to "catalogdash"
            db = client.get_default_database('catalogdash')

        app.extensions[EXTENSION_KEY] = {'client': client, 'db': db}
        return db

    @staticmethod
    def get_db():
        """Database handle of the current app"""
        try:
            return current_app.extensions[EXTENSION_KEY]['db']
        except KeyError:
            raise RuntimeError("Database is not initialised; call Database.init_app(app) first")

    @staticmethod
    def users():
        return Database.get_db()[get_config_value('USERS_COLLECTION', 'users')]

    @staticmethod
    def products():
        return Database.get_db()[get_config_value('PRODUCTS_COLLECTION', 'products')]

    @staticmethod
    def logs():
        return Database.get_db()[get_config_value('LOGS_COLLECTION', 'app_logs')]

    @staticmethod
    def ensure_indexes():
        """Create the indexes the handlers rely on. Failures are logged, not raised."""
        from .logging_service import LoggingService

        wanted = [
            (Database.users, [('email', ASCENDING)], {'unique': True, 'name': 'email_unique'}),
            (Database.products, [('sku', ASCENDING)], {'unique': True, 'name': 'sku_unique'}),
            (Database.products, [('name', TEXT), ('description', TEXT)], {'name': 'product_text'}),
            (Database.products, [('category', ASCENDING)], {}),
            (Database.products, [('status', ASCENDING)], {}),
            (Database.products, [('price', ASCENDING)], {}),
            (Database.products, [('createdAt', DESCENDING)], {}),
        ]

        created = 0
        for collection, keys, options in wanted:
            try:
                collection().create_index(keys, **options)
                created += 1
            except Exception as e:
                LoggingService.warning('database', f"Unable to ensure index {keys}: {e}")

        LoggingService.info('database', f"Ensured {created}/{len(wanted)} indexes")
        return created


def utcnow():
    """Naive UTC now, the form the client reads back with tz_aware=False"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_object_id(value):
    """Parse a path id into an ObjectId, or None when it is not a valid id"""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def serialize(doc):
    """Make a Mongo document JSON friendly (ObjectId -> str, datetime -> ISO)"""
    if doc is None:
        return None
    if isinstance(doc, ObjectId):
        return str(doc)
    if isinstance(doc, datetime):
        return doc.isoformat()
    if isinstance(doc, dict):
        return {key: serialize(value) for key, value in doc.items()}
    if isinstance(doc, (list, tuple)):
        return [serialize(item) for item in doc]
    return doc
