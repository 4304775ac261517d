import os
from pathlib import Path
from dotenv import load_dotenv
from voice_capture.constants import APP_DIR

load_dotenv()

DEFAULT_JWT_SECRET = "dev-secret-change-me"
DEFAULT_DATABASE_URL = f"sqlite:///{(APP_DIR / 'data').as_posix()}/voice_capture.db"


class Settings:
    DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    JWT_SECRET = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
    USER_TOKEN_EXPIRE_HOURS = int(os.getenv("USER_TOKEN_EXPIRE_HOURS", "168"))
    ADMIN_TOKEN_EXPIRE_HOURS = int(os.getenv("ADMIN_TOKEN_EXPIRE_HOURS", "24"))
    UPLOADS_DIR = Path(os.getenv("UPLOADS_DIR", (APP_DIR / "uploads").as_posix()))
    UPLOADS_URL_PREFIX = os.getenv("UPLOADS_URL_PREFIX", "/uploads").rstrip("/")
    MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))
    REJECTION_ID_RETRIES = int(os.getenv("REJECTION_ID_RETRIES", "3"))
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
