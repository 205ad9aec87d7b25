from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from train_api.config import settings

connect_args = {"check_same_thread": False} if settings.is_sqlite else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    connect_args=connect_args,
    pool_pre_ping=not settings.is_sqlite,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a session scoped to one request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create all tables known to the metadata"""
    # models must be imported so their tables are registered on Base
    from train_api import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
