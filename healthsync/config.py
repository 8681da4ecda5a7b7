import os
from datetime import timedelta


def _env_flag(name, default="false"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///healthsync.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT (bearer header, the SPA and mobile client both send Authorization)
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'change-me-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.getenv('JWT_EXPIRES_MINUTES', '1440')))
    JWT_TOKEN_LOCATION = ['headers']
    JWT_HEADER_NAME = 'Authorization'
    JWT_HEADER_TYPE = 'Bearer'

    # CORS
    FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:5173')
    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', 'http://localhost:5173,http://localhost:3000').split(',') if o.strip()]

    # AI chat completion API (OpenAI compatible)
    AI_CHAT_BASE_URL = os.getenv('AI_CHAT_BASE_URL', 'https://api.groq.com/openai/v1')
    AI_CHAT_API_KEY = os.getenv('GROQ_API_KEY', '')
    AI_CHAT_MODEL = os.getenv('AI_CHAT_MODEL', 'openai/gpt-oss-120b')
    AI_CHAT_TIMEOUT = int(os.getenv('AI_CHAT_TIMEOUT', '60'))

    # Google OAuth
    GOOGLE_CLIENT_ID = os.getenv('GOOGLE_CLIENT_ID', '')
    GOOGLE_CLIENT_SECRET = os.getenv('GOOGLE_CLIENT_SECRET', '')
    GOOGLE_REDIRECT_URI = os.getenv('GOOGLE_REDIRECT_URI', 'http://localhost:5000/api/auth/google/callback')
    GOOGLE_ANDROID_CLIENT_ID = os.getenv('GOOGLE_ANDROID_CLIENT_ID', '')

    # Email
    MAIL_SERVER = os.getenv('MAIL_SERVER', 'smtp.gmail.com')
    MAIL_PORT = int(os.getenv('MAIL_PORT', '587'))
    MAIL_USERNAME = os.getenv('MAIL_USERNAME', '')
    MAIL_PASSWORD = os.getenv('MAIL_PASSWORD', '')
    MAIL_USE_TLS = _env_flag('MAIL_USE_TLS', 'true')
    MAIL_DEFAULT_SENDER = os.getenv('MAIL_DEFAULT_SENDER', 'HealthSync <no-reply@healthsync.local>')

    # Verification codes
    VERIFICATION_CODE_TTL = timedelta(minutes=5)
    RESET_OTP_TTL = timedelta(minutes=10)

    # File uploads
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', 'static/uploads')
    UPLOAD_URL_PREFIX = os.getenv('UPLOAD_URL_PREFIX', '/static/uploads')
    MAX_AVATAR_SIZE = 5 * 1024 * 1024
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    ALLOWED_IMAGE_EXTENSIONS = {'jpg', 'jpeg', 'png', 'gif', 'webp'}

    # Rate Limiting
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_HEADERS_ENABLED = True

    ADMIN_REGISTRATION_ENABLED = _env_flag('ADMIN_REGISTRATION_ENABLED')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False
    # secrets must come from the environment
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')
    PREFERRED_URL_SCHEME = 'https'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'testing-secret-key-with-enough-length'
    RATELIMIT_ENABLED = False
    ADMIN_REGISTRATION_ENABLED = True
    AI_CHAT_API_KEY = 'test-key'
    GOOGLE_CLIENT_ID = 'test-client-id'
    GOOGLE_CLIENT_SECRET = 'test-client-secret'
    FRONTEND_URL = 'http://frontend.test'
    LOG_LEVEL = 'WARNING'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
