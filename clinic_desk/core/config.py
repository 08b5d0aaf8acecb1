import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../'))
load_dotenv(os.path.join(BASE_DIR, '.env'))


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv('PROJECT_NAME', 'CLINIC DESK')
    SECRET_KEY: str = os.getenv('SECRET_KEY', 'clinic-desk-development-secret-key-change-me')
    API_PREFIX: str = '/api'
    BACKEND_CORS_ORIGINS: List[str] = ['*']
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 60 * 60 * 12  # One working day
    SECURITY_ALGORITHM: str = 'HS256'
    LOGGING_CONFIG_FILE: str = os.path.join(BASE_DIR, 'logging.ini')

    # Clinic backend that owns patients, medicines and expenses
    CLINIC_API_URL: str = os.getenv('CLINIC_API_URL', 'http://localhost:5000/api')
    CLINIC_API_TIMEOUT: float = float(os.getenv('CLINIC_API_TIMEOUT', '10'))

    PATIENT_REPORT_LIMIT: int = int(os.getenv('PATIENT_REPORT_LIMIT', '1000'))
    RECENT_PATIENTS_LIMIT: int = 5
    PRESCRIPTION_DRAFT_TTL_SECONDS: int = int(os.getenv('PRESCRIPTION_DRAFT_TTL_SECONDS', '3600'))  # 1 hour default


settings = Settings()
