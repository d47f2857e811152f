"""
Catalogdash Products Module

Product catalog CRUD for authenticated administrators:
- Paginated, searchable, filterable listing
- Create / read / update / delete with case-insensitive unique SKUs
- Image cleanup on the media host when a product is removed
"""

from flask import Blueprint

products_bp = Blueprint('products', __name__)

from . import routes  # noqa: E402,F401
from .database import ProductDatabase  # noqa: E402

__all__ = ['products_bp', 'ProductDatabase']
