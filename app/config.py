"""Application configuration.

Values are read from the environment (a local .env is loaded by the app
package) with development-friendly defaults.
"""
import os


def _env_bool(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///poketrade.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    ADMIN_SECRET = os.getenv('ADMIN_SECRET')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Translation provider
    TRANSLATION_SERVICE = os.getenv('TRANSLATION_SERVICE', 'google')
    GOOGLE_TRANSLATE_API_KEY = os.getenv('GOOGLE_TRANSLATE_API_KEY', '')
    GOOGLE_CLOUD_PROJECT_ID = os.getenv('GOOGLE_CLOUD_PROJECT_ID', 'project-poke-trade')
    GOOGLE_GLOSSARY_LOCATION = os.getenv('GOOGLE_GLOSSARY_LOCATION', 'us-central1')
    DEEPL_API_KEY = os.getenv('DEEPL_API_KEY', '')
    DEEPL_API_URL = os.getenv('DEEPL_API_URL', 'https://api-free.deepl.com/v2/translate')
    TRANSLATION_TIMEOUT = float(os.getenv('TRANSLATION_TIMEOUT', 5))

    # Bulk translation rate limiting (seconds between provider calls)
    TRANSLATION_SHORT_DELAY = float(os.getenv('TRANSLATION_SHORT_DELAY', 0.1))
    TRANSLATION_LONG_DELAY = float(os.getenv('TRANSLATION_LONG_DELAY', 0.2))
    TRANSLATION_LONG_TEXT_THRESHOLD = int(os.getenv('TRANSLATION_LONG_TEXT_THRESHOLD', 100))

    # Cache hit bookkeeping runs on a background executor when enabled
    TRANSLATION_CACHE_ASYNC_TOUCH = _env_bool('TRANSLATION_CACHE_ASYNC_TOUCH', 'true')


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    ADMIN_SECRET = 'test-admin-secret'
    JWT_SECRET_KEY = 'test-secret-key-for-testing'
    TRANSLATION_SERVICE = 'google'
    GOOGLE_TRANSLATE_API_KEY = 'test-google-key'
    TRANSLATION_SHORT_DELAY = 0
    TRANSLATION_LONG_DELAY = 0
    TRANSLATION_CACHE_ASYNC_TOUCH = False


class ProductionConfig(Config):
    DEBUG = False


config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def get_config(config_name: str | None):
    """Return the config class for a name, defaulting to development."""
    return config_by_name.get(config_name or 'development', DevelopmentConfig)
