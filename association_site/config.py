"""
Configuration settings for the student association website backend
"""
import os


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'y', 'on')


class Config:
    """Flask application configuration"""

    # Flask secret key
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'association.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'

    # Session cookie ('sid' holds the opaque session token)
    SESSION_TOKEN_COOKIE = 'sid'
    SESSION_TTL_DAYS = int(os.environ.get('SESSION_TTL_DAYS') or 1)
    SESSION_COOKIE_SECURE = _env_flag(
        'SESSION_COOKIE_SECURE',
        (os.environ.get('APP_ENV') or 'production').lower() not in ('development', 'testing'),
    )

    # Credentials
    PASSWORD_HASH_ITERATIONS = int(os.environ.get('PASSWORD_HASH_ITERATIONS') or 100_000)
    MIN_PASSWORD_LENGTH = 6

    # First-login bootstrap (only honoured while the users table is empty)
    BOOTSTRAP_USERNAME = os.environ.get('BOOTSTRAP_USERNAME') or 'admin'
    BOOTSTRAP_PASSWORD = os.environ.get('BOOTSTRAP_PASSWORD') or 'admin'

    # Blob storage (Vercel Blob REST API)
    BLOB_READ_WRITE_TOKEN = os.environ.get('BLOB_READ_WRITE_TOKEN')
    BLOB_API_URL = os.environ.get('BLOB_API_URL') or 'https://blob.vercel-storage.com'
    BLOB_URL_PATTERN = os.environ.get('BLOB_URL_PATTERN') or r'\.vercel-storage\.com/'
    MAX_UPLOAD_BYTES = 10 * 1024 * 1024
    # Whole request bodies, checked by Werkzeug before any form parsing
    MAX_CONTENT_LENGTH = MAX_UPLOAD_BYTES + 64 * 1024
    ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/png', 'image/webp', 'image/gif')

    # Transactional email (JSON HTTP API)
    MAIL_API_URL = os.environ.get('MAIL_API_URL') or 'https://api.resend.com/emails'
    MAIL_API_KEY = os.environ.get('MAIL_API_KEY')
    MAIL_FROM = os.environ.get('MAIL_FROM') or 'noreply@example.org'
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL') or 'board@example.org'
    ASSOCIATION_NAME = os.environ.get('ASSOCIATION_NAME') or 'Student Association'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SESSION_COOKIE_SECURE = False
    PASSWORD_HASH_ITERATIONS = 100_000
    BLOB_READ_WRITE_TOKEN = None
    MAIL_API_KEY = None
