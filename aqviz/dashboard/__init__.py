"""
Dashboard Blueprint

Server-rendered page whose scripts draw the API data with Chart.js.
"""

from flask import Blueprint

dashboard_bp = Blueprint('dashboard', __name__)

from aqviz.dashboard import routes  # noqa: E402, F401
