"""
Database Access

Connection URI discovery and a thin pass-through over the pooled engine.
"""

from sqlalchemy import text
from sqlalchemy.engine import URL

from aqviz.extensions import db

DRIVER = 'postgresql+psycopg'


def build_database_uri(environ):
    """Build the SQLAlchemy URI from the environment.

    DATABASE_URL wins when present. Otherwise the libpq variables are used:
    PGUSER, PGPASSWORD, PGHOST (default localhost), PGPORT (default 5432)
    and PGDATABASE.
    """
    url = (environ.get('DATABASE_URL') or '').strip()
    if url:
        # Heroku-style URLs; SQLAlchemy expects postgresql://
        if url.startswith('postgres://'):
            url = 'postgresql://' + url[len('postgres://'):]
        if url.startswith('postgresql://'):
            url = DRIVER + '://' + url[len('postgresql://'):]
        return url

    port = environ.get('PGPORT') or '5432'
    return URL.create(
        DRIVER,
        username=environ.get('PGUSER') or None,
        password=environ.get('PGPASSWORD') or None,
        host=environ.get('PGHOST') or 'localhost',
        port=int(port),
        database=environ.get('PGDATABASE') or None,
    ).render_as_string(hide_password=False)


def query(sql, params=None):
    """Run a SQL statement and return the rows as a list of dicts."""
    result = db.session.execute(text(sql), params or {})
    return [dict(row) for row in result.mappings()]


def check_connection():
    """Round-trip a trivial statement through the pool."""
    db.session.execute(text('SELECT 1'))
    return True
