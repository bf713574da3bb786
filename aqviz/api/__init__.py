"""
API Blueprint

Versioned JSON endpoints, one per chart.
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

from aqviz.api import routes  # noqa: E402, F401
