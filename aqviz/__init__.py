"""
Air Quality Visualisation API - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from aqviz.extensions import db
from aqviz.config import Config

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    # Initialize extensions
    db.init_app(app)

    # Register blueprints
    from aqviz.api import api_bp
    from aqviz.dashboard import dashboard_bp

    app.register_blueprint(api_bp, url_prefix='/api/v1')
    app.register_blueprint(dashboard_bp)

    from aqviz.cli import register_commands
    register_commands(app)

    _register_error_handlers(app)
    _register_health(app)

    # Create database tables
    with app.app_context():
        try:
            db.create_all()
        except SQLAlchemyError as e:
            # Keep serving so /health can report the outage
            logger.error('Could not create database tables: %s', e)

    return app


def _register_error_handlers(app):
    """Answer HTTP errors with JSON bodies instead of HTML pages."""

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error('Unhandled error: %s', getattr(e, 'original_exception', e))
        return jsonify({'error': 'Internal server error'}), 500


def _register_health(app):

    @app.route('/health')
    def health():
        """Database connectivity check"""
        from aqviz.database import check_connection
        try:
            check_connection()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception('Health check failed')
            return jsonify({'ok': False, 'database': 'unavailable'}), 500
        return jsonify({'ok': True, 'database': 'connected'})
