import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker


DEFAULT_DATABASE_URL = "sqlite:///delve.db"


def create_session_factory(database_url: str | None = None) -> sessionmaker:
    url = database_url or os.getenv("DELVE_DATABASE_URL") or DEFAULT_DATABASE_URL
    engine = create_engine(url, pool_pre_ping=True)
    return sessionmaker(bind=engine)
