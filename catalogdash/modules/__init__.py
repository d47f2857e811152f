"""
Catalogdash Modules
===================

Flask blueprint modules for the catalog admin.
"""

__all__ = ['auth', 'dashboard', 'products', 'upload']
