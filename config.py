import os


class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///shortly.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.environ.get('SECRET_KEY') or os.urandom(24)  # Для подписи cookie сессии
    CACHE_TYPE = 'SimpleCache'
    CACHE_DEFAULT_TIMEOUT = 3600  # 1 час
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    CREATE_RATE_LIMIT = os.environ.get('CREATE_RATE_LIMIT', '100/day')
    REDIRECT_RATE_LIMIT = os.environ.get('REDIRECT_RATE_LIMIT', '1000/day')
    TITLE_FETCH_TIMEOUT = float(os.environ.get('TITLE_FETCH_TIMEOUT', 5))  # секунды
    CODE_LENGTH = 5
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SECRET_KEY = 'testing'
    CACHE_TYPE = 'NullCache'
    RATELIMIT_ENABLED = False
    LOG_LEVEL = 'DEBUG'
