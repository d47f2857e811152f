"""
Product Routes
==============

GET    /api/products        - Paginated listing with search, filters and sorting
POST   /api/products        - Create a product
GET    /api/products/<id>   - Single product
PUT    /api/products/<id>   - Partial update
DELETE /api/products/<id>   - Delete a product and its hosted images
"""

from concurrent.futures import ThreadPoolExecutor

from flask import jsonify, request
from pymongo.errors import DuplicateKeyError

from ...core.database import Database, serialize
from ...core.errors import internal_error
from ...core.logging_service import LoggingService
from ...core.storage import delete_image
from ...core.validations import ProductSchema, ProductUpdateSchema, validate
from ..auth.utils import get_current_user, login_required
from . import products_bp
from .database import ProductDatabase, build_product_query, parse_list_args, total_pages

DUPLICATE_SKU = 'Product with this SKU already exists'


def _user_id():
    user = get_current_user()
    return user['userId'] if user else None


@products_bp.route('/api/products', methods=['GET'])
@login_required
def list_products():
    """List products page by page"""
    try:
        args = parse_list_args(request.args)
        query = build_product_query(args['search'], args['category'], args['status'])
        skip = (args['page'] - 1) * args['limit']

        collection = Database.products()
        cursor = (
            collection.find(query)
            .sort(args['sort_by'], args['sort_order'])
            .skip(skip)
            .limit(args['limit'])
        )

        # Page and count are independent reads
        with ThreadPoolExecutor(max_workers=2) as pool:
            page_future = pool.submit(list, cursor)
            count_future = pool.submit(collection.count_documents, query)
            products = page_future.result()
            total = count_future.result()

        return jsonify({
            'products': serialize(products),
            'pagination': {
                'page': args['page'],
                'limit': args['limit'],
                'total': total,
                'totalPages': total_pages(total, args['limit']),
            },
        })
    except Exception as e:
        return internal_error('products', e)


@products_bp.route('/api/products', methods=['POST'])
@login_required
def create_product():
    """Create a product with a unique SKU"""
    try:
        validation = validate(ProductSchema, request.get_json(silent=True))
        if not validation.ok:
            return jsonify({'message': 'Invalid input', 'errors': validation.errors}), 400

        data = validation.data
        if ProductDatabase.get_product_by_sku(data['sku']):
            return jsonify({'message': DUPLICATE_SKU}), 409

        try:
            product = ProductDatabase.create_product(data)
        except DuplicateKeyError:
            return jsonify({'message': DUPLICATE_SKU}), 409

        LoggingService.log_user_action(
            'products', 'product created', user_id=_user_id(), details={'sku': product['sku']}
        )
        return jsonify({'product': serialize(product)}), 201

    except Exception as e:
        return internal_error('products', e)


@products_bp.route('/api/products/<product_id>', methods=['GET'])
@login_required
def get_product(product_id):
    try:
        product = ProductDatabase.get_product_by_id(product_id)
        if not product:
            return jsonify({'message': 'Product not found'}), 404
        return jsonify({'product': serialize(product)})
    except Exception as e:
        return internal_error('products', e)


@products_bp.route('/api/products/<product_id>', methods=['PUT'])
@login_required
def update_product(product_id):
    """Merge the supplied fields into an existing product"""
    try:
        validation = validate(ProductUpdateSchema, request.get_json(silent=True))
        if not validation.ok:
            return jsonify({'message': 'Invalid input', 'errors': validation.errors}), 400

        existing = ProductDatabase.get_product_by_id(product_id)
        if not existing:
            return jsonify({'message': 'Product not found'}), 404

        changes = validation.data
        if 'sku' in changes:
            new_sku = ProductDatabase.normalize_sku(changes['sku'])
            # Only a changed SKU can collide with another record
            if new_sku != existing.get('sku'):
                if ProductDatabase.get_product_by_sku(new_sku, exclude_id=existing['_id']):
                    return jsonify({'message': DUPLICATE_SKU}), 409

        try:
            product = ProductDatabase.update_product(existing['_id'], changes)
        except DuplicateKeyError:
            return jsonify({'message': DUPLICATE_SKU}), 409

        if not product:
            return jsonify({'message': 'Product not found'}), 404

        LoggingService.log_user_action(
            'products', 'product updated', user_id=_user_id(),
            details={'id': str(existing['_id']), 'fields': sorted(changes)},
        )
        return jsonify({'product': serialize(product)})

    except Exception as e:
        return internal_error('products', e)


@products_bp.route('/api/products/<product_id>', methods=['DELETE'])
@login_required
def delete_product(product_id):
    """Delete a product after removing its images from the media host"""
    try:
        product = ProductDatabase.get_product_by_id(product_id)
        if not product:
            return jsonify({'message': 'Product not found'}), 404

        for image in product.get('images') or []:
            public_id = image.get('publicId')
            try:
                delete_image(public_id)
            except Exception as e:
                LoggingService.warning(
                    'products', f"Failed to delete image {public_id}: {e}",
                    details={'product_id': str(product['_id'])},
                )

        ProductDatabase.delete_product(product['_id'])

        LoggingService.log_user_action(
            'products', 'product deleted', user_id=_user_id(), details={'sku': product.get('sku')}
        )
        return jsonify({'message': 'Product deleted successfully'})

    except Exception as e:
        return internal_error('products', e)
