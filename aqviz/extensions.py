"""
Flask Extensions
"""

from flask_sqlalchemy import SQLAlchemy

# Database instance; its engine owns the connection pool
db = SQLAlchemy()
