from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from voice_capture.constants import APP_DIR
from voice_capture.core.config import DEFAULT_DATABASE_URL, settings

DATA_DIR = APP_DIR / "data"


def prepare_data_dir(database_url: str) -> bool:
    """Create the bundled data directory when the default SQLite file is used."""
    if database_url != DEFAULT_DATABASE_URL:
        return False
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return True


SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL
prepare_data_dir(SQLALCHEMY_DATABASE_URL)

connect_args = {}
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
