# lotto_admin/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from lotto_admin.core.config import settings


def build_engine(database_url: str):
    if database_url.startswith("sqlite"):
        # SQLite is only used locally and in tests; FastAPI runs sync routes in a threadpool
        return create_engine(database_url, connect_args={"check_same_thread": False})

    return create_engine(
        database_url,
        # check the connection before use and reconnect if the server dropped it
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        # recycle hourly so the database never closes an idle connection under us
        pool_recycle=3600,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
