"""
Dashboard Routes
"""

from flask import render_template, url_for
from aqviz.dashboard import dashboard_bp


@dashboard_bp.route('/')
def index():
    """Dashboard page; charts load their data client-side"""
    endpoints = {
        'timeTrends': url_for('api.time_trends'),
        'siteComparison': url_for('api.site_comparison'),
        'airQualityData': url_for('api.air_quality_data'),
        'mapData': url_for('api.map_data'),
    }
    return render_template('dashboard/index.html', endpoints=endpoints)
