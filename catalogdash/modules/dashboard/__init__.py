"""
Dashboard Module
================

Catalog overview for administrators:
- Inventory and sales totals
- Per-category stock and revenue breakdowns
- Monthly sales series, recent products and top sellers
"""

from flask import Blueprint

dashboard_bp = Blueprint(
    'dashboard',
    __name__,
    template_folder='templates'
)

from . import routes  # noqa: E402,F401
from .stats import collect_dashboard_stats  # noqa: E402

__all__ = ['dashboard_bp', 'collect_dashboard_stats']
