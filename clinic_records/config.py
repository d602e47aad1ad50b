"""
Settings for the clinic records API, picked by FLASK_ENV.
Values come from the process environment (and a local .env file).
"""
import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SECRET_KEY = 'clinic-records-dev-key'
DEFAULT_DATABASE_URL = 'sqlite:///clinic_records.db'


class Config:
    """Shared by every environment"""
    SECRET_KEY = os.getenv('SECRET_KEY', DEFAULT_SECRET_KEY)

    # Visit store
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', DEFAULT_DATABASE_URL)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')

    # Comma separated; '*' lets the front desk UI call from anywhere
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    @classmethod
    def check(cls):
        """Raise ValueError when the environment cannot run this config."""


class DevelopmentConfig(Config):
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Real deployments: explicit secrets and a pooled database"""
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 3600,
        'pool_size': 10,
        'max_overflow': 20,
    }

    @classmethod
    def check(cls):
        secret = os.getenv('SECRET_KEY')
        if not secret or secret == DEFAULT_SECRET_KEY:
            raise ValueError("SECRET_KEY must be set to a non-default value in production")
        if not os.getenv('DATABASE_URL'):
            raise ValueError("DATABASE_URL must be set in production")


class TestingConfig(Config):
    """In-memory database, cheap password hashing"""
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv('TEST_DATABASE_URL', 'sqlite:///:memory:')
    SQLALCHEMY_ENGINE_OPTIONS = {}
    BCRYPT_LOG_ROUNDS = 4


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}


def get_config(name=None):
    """
    Config class for ``name`` (default: FLASK_ENV). Unknown names fall back
    to development. Raises ValueError if the chosen config's environment
    requirements are not met.
    """
    name = name or os.getenv('FLASK_ENV', 'development')
    config_class = config.get(name, DevelopmentConfig)
    config_class.check()
    return config_class
