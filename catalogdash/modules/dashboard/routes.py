"""
Dashboard Routes
================

GET /             - Redirect to the dashboard
GET /dashboard    - Dashboard page
GET /api/dashboard - Aggregate catalog statistics
"""

from flask import jsonify, redirect, render_template, url_for

from ...core.config import get_config_value
from ...core.database import Database, serialize
from ...core.errors import internal_error
from ..auth.utils import get_current_user, login_required
from . import dashboard_bp
from .stats import collect_dashboard_stats


@dashboard_bp.route('/')
def index():
    return redirect(url_for('dashboard.dashboard_page'))


@dashboard_bp.route('/dashboard')
def dashboard_page():
    """Dashboard page route"""
    return render_template('dashboard/dashboard.html', user=get_current_user())


@dashboard_bp.route('/api/dashboard')
@login_required
def dashboard_stats():
    try:
        stats = collect_dashboard_stats(
            Database.products(),
            low_stock_threshold=int(get_config_value('LOW_STOCK_THRESHOLD', 10)),
        )
        return jsonify(serialize(stats))
    except Exception as e:
        return internal_error('dashboard', e)
