"""Configuration classes, selected by name in the application factory."""
import os
from datetime import timedelta

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev_key_please_change')
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET', SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL', 'sqlite:///' + os.path.join(BASE_DIR, 'taskmanager.db')
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Registering with this token grants the admin role
    ADMIN_INVITE_TOKEN = os.environ.get('ADMIN_INVITE_TOKEN')

    CLIENT_URL = os.environ.get('CLIENT_URL', '*')

    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(BASE_DIR, 'uploads'))
    ALLOWED_IMAGE_EXTENSIONS = {'jpg', 'jpeg', 'png'}
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing'
    JWT_SECRET_KEY = 'testing-jwt-secret-key-of-sufficient-length'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    ADMIN_INVITE_TOKEN = 'let-me-in'
    LOG_LEVEL = 'WARNING'


class ProductionConfig(Config):
    DEBUG = False


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}
