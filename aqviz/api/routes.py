"""
API Routes

Each handler runs a single aggregate query. Failures are logged and
answered with a generic 500 body; bad query parameters get a 400.
"""

import logging
from datetime import date

from flask import current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from aqviz.api import api_bp
from aqviz.api.services import (
    get_template_rows,
    get_latest_readings,
    get_site_comparison,
    get_time_trends,
    get_map_data,
)
from aqviz.extensions import db

logger = logging.getLogger(__name__)


def _limit_arg():
    """Read ?limit=, falling back to the default and clamping to the maximum."""
    raw = request.args.get('limit')
    if raw is None or raw == '':
        return current_app.config['API_DEFAULT_LIMIT']

    try:
        limit = int(raw)
    except ValueError:
        raise BadRequest('limit must be a positive integer')
    if limit < 1:
        raise BadRequest('limit must be a positive integer')

    return min(limit, current_app.config['API_MAX_LIMIT'])


def _date_arg(name):
    raw = request.args.get(name)
    if raw is None or raw == '':
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise BadRequest(f'{name} must be an ISO date (YYYY-MM-DD)')


def _server_error(what):
    db.session.rollback()
    logger.exception('Error fetching %s', what)
    return jsonify({'error': 'Internal server error'}), 500


@api_bp.errorhandler(BadRequest)
def bad_request(e):
    return jsonify({'error': e.description}), 400


@api_bp.route('/get-template')
def get_template():
    """Template route: first rows of the table, unshaped"""
    limit = _limit_arg()
    try:
        data = get_template_rows(limit)
    except Exception:
        return _server_error('template rows')
    return jsonify(data)


@api_bp.route('/air-quality-data')
def air_quality_data():
    """Latest daily readings for the bar chart"""
    limit = _limit_arg()
    try:
        data = get_latest_readings(limit)
    except Exception:
        return _server_error('air quality data')
    return jsonify(data)


@api_bp.route('/site-comparison')
def site_comparison():
    """Per-site averages for the comparison chart"""
    try:
        data = get_site_comparison()
    except Exception:
        return _server_error('site comparison')
    return jsonify(data)


@api_bp.route('/time-trends')
def time_trends():
    """
    Daily averages across all sites for the trend line.

    Query Parameters:
        start: first date to include (YYYY-MM-DD)
        end: last date to include (YYYY-MM-DD)
    """
    start = _date_arg('start')
    end = _date_arg('end')
    if start and end and start > end:
        raise BadRequest('start must not be after end')

    try:
        data = get_time_trends(start, end)
    except Exception:
        return _server_error('time trends')
    return jsonify(data)


@api_bp.route('/map-data')
def map_data():
    """Site markers with average AQI and EPA category"""
    try:
        data = get_map_data()
    except Exception:
        return _server_error('map data')
    return jsonify(data)
