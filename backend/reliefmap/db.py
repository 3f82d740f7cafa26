from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from reliefmap.core.config import get_settings
# keep a single metadata across all model modules
from reliefmap.models.base import Base

settings = get_settings()

# 1) DATABASE_URL when given (e.g. postgresql+psycopg://...)
# 2) otherwise SQLite under DATA_DIR
SQLALCHEMY_DATABASE_URL = settings.database_url
_is_sqlite = settings.is_sqlite

if _is_sqlite and not settings.DATABASE_URL:
    settings.DATA_DIR.mkdir(parents=True, exist_ok=True)

_connect_args = {"check_same_thread": False} if _is_sqlite else {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args=_connect_args,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def register_models() -> None:
    # import every model module so its table lands on Base.metadata
    import reliefmap.models.profile  # noqa: F401
    import reliefmap.models.help_request  # noqa: F401
    import reliefmap.models.offer  # noqa: F401
    import reliefmap.models.zone  # noqa: F401


def init_db(bind=None) -> None:
    register_models()
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
