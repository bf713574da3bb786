"""
Configuration settings for the Air Quality Visualisation API
"""
import os

from dotenv import load_dotenv

from aqviz.database import build_database_uri

basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))

# Values already exported in the shell win over the .env file
load_dotenv(os.path.join(basedir, '.env'))


class Config:
    """Flask application configuration"""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Server
    PORT = int(os.environ.get('PORT') or 5000)

    # Database configuration (DATABASE_URL, or the libpq PG* variables)
    SQLALCHEMY_DATABASE_URI = build_database_uri(os.environ)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}

    # API settings
    API_DEFAULT_LIMIT = int(os.environ.get('API_DEFAULT_LIMIT') or 50)
    API_MAX_LIMIT = int(os.environ.get('API_MAX_LIMIT') or 500)

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    API_DEFAULT_LIMIT = 5
    API_MAX_LIMIT = 20
