import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'smartpark-dev-secret')

    # Database - any SQLAlchemy URL (sqlite, mysql+pymysql, postgresql)
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///smartpark.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Fixed fee per parking session, in RWF
    PARKING_FEE = int(os.getenv('PARKING_FEE', '500'))

    # Bearer tokens
    TOKEN_MAX_AGE = int(os.getenv('TOKEN_MAX_AGE', str(24 * 3600)))

    # Default admin account created on startup
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'Password1.')

    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'smartpark-test-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    ADMIN_PASSWORD = 'admin-pass'
