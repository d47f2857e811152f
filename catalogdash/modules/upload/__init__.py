"""
Catalogdash Upload Module

Accepts product images from the dashboard and stores them on the media host.
"""

from flask import Blueprint

upload_bp = Blueprint('upload', __name__)

from . import routes  # noqa: E402,F401

__all__ = ['upload_bp']
