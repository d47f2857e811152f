import math

from pymongo import ASCENDING, DESCENDING

from ...core.database import Database, to_object_id, utcnow

SORTABLE_FIELDS = (
    'name', 'price', 'stock', 'sales', 'sku', 'category', 'status', 'createdAt', 'updatedAt',
)
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def _to_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_list_args(args):
    """
    Normalise the listing query string.

    Returns:
        dict: page, limit, search, category, status, sort_by, sort_order
    """
    page = max(_to_int(args.get('page'), DEFAULT_PAGE), 1)
    limit = min(max(_to_int(args.get('limit'), DEFAULT_LIMIT), 1), MAX_LIMIT)

    sort_by = args.get('sortBy') or 'createdAt'
    if sort_by not in SORTABLE_FIELDS:
        sort_by = 'createdAt'

    return {
        'page': page,
        'limit': limit,
        'search': (args.get('search') or '').strip(),
        'category': args.get('category') or None,
        'status': args.get('status') or None,
        'sort_by': sort_by,
        'sort_order': ASCENDING if args.get('sortOrder') == 'asc' else DESCENDING,
    }


def build_product_query(search=None, category=None, status=None):
    """Mongo filter for the listing: text search plus category/status equality"""
    query = {}
    if search:
        query['$text'] = {'$search': search}
    if category:
        query['category'] = category
    if status:
        query['status'] = status
    return query


def total_pages(total, limit):
    return math.ceil(total / limit) if limit else 0


class ProductDatabase:
    @staticmethod
    def normalize_sku(sku):
        return (sku or '').strip().upper()

    @staticmethod
    def get_product_by_id(product_id):
        """Get product by ID; None for unknown or malformed ids"""
        oid = to_object_id(product_id)
        if oid is None:
            return None
        return Database.products().find_one({'_id': oid})

    @staticmethod
    def get_product_by_sku(sku, exclude_id=None):
        """Find a product holding this SKU, optionally ignoring one record"""
        query = {'sku': ProductDatabase.normalize_sku(sku)}
        if exclude_id is not None:
            query['_id'] = {'$ne': exclude_id}
        return Database.products().find_one(query)

    @staticmethod
    def create_product(data):
        """Insert a validated product payload and return the stored document"""
        now = utcnow()
        product = dict(data)
        product['sku'] = ProductDatabase.normalize_sku(product['sku'])
        product.setdefault('images', [])
        if product['images'] is None:
            product['images'] = []
        product['sales'] = 0
        product['createdAt'] = now
        product['updatedAt'] = now

        result = Database.products().insert_one(product)
        product['_id'] = result.inserted_id
        return product

    @staticmethod
    def update_product(product_id, changes):
        """Apply a partial update and return the updated document (None if gone)"""
        oid = to_object_id(product_id)
        if oid is None:
            return None
        changes = dict(changes)
        if 'sku' in changes:
            changes['sku'] = ProductDatabase.normalize_sku(changes['sku'])
        changes['updatedAt'] = utcnow()

        products = Database.products()
        result = products.update_one({'_id': oid}, {'$set': changes})
        if result.matched_count == 0:
            return None
        return products.find_one({'_id': oid})

    @staticmethod
    def delete_product(product_id):
        """Delete a product by ID. Returns True when a document was removed."""
        oid = to_object_id(product_id)
        if oid is None:
            return False
        return Database.products().delete_one({'_id': oid}).deleted_count > 0
