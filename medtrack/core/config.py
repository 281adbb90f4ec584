import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../'))
load_dotenv(os.path.join(BASE_DIR, '.env'))


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv('PROJECT_NAME', 'FAMILY MEDTRACK')
    SECRET_KEY: str = os.getenv('SECRET_KEY', 'change-me')
    API_PREFIX: str = '/api'
    BACKEND_CORS_ORIGINS: List[str] = ['*']
    DATABASE_URL: str = os.getenv('SQL_DATABASE_URL', 'sqlite:///' + os.path.join(BASE_DIR, 'medtrack.db'))
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 60 * 60 * 24 * 7  # Token expired after 7 days
    SECURITY_ALGORITHM: str = 'HS256'
    LOGGING_CONFIG_FILE: str = os.path.join(BASE_DIR, 'logging.ini')

    # Calendar days are computed in this zone unless the request names another one
    DEFAULT_TIMEZONE: str = os.getenv('DEFAULT_TIMEZONE', 'UTC')
    AUTO_CREATE_TABLES: bool = os.getenv('AUTO_CREATE_TABLES', 'false').lower() == 'true'


settings = Settings()
