import os
from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()

class Config:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///errandhub.db")

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
    ACCESS_EXPIRES = int(os.getenv("ACCESS_EXPIRES", 86400))

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    SOCKETIO_MESSAGE_QUEUE = os.getenv("SOCKETIO_MESSAGE_QUEUE")

    RATELIMIT_HEADERS_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

    ORDERS_PAGE_SIZE = 20
    CHATTING_PAGE_SIZE = 30

class DevelopmentConfig(Config):
    DEBUG = True

class ProductionConfig(Config):
    DEBUG = False

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    RATELIMIT_ENABLED = False
    BCRYPT_LOG_ROUNDS = 4

CONFIGS = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
