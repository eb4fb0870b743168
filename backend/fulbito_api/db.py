from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker

from .config import Config


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    Config.DATABASE_URL,
    echo=Config.SQLALCHEMY_ECHO,
    pool_pre_ping=True,
    connect_args=_connect_args(Config.DATABASE_URL),
)
SessionLocal = scoped_session(sessionmaker(bind=engine, autoflush=False, autocommit=False))


def get_db():
    return SessionLocal()
