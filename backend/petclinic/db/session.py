"""Module: session."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from petclinic.core.config import settings

# SQLite connections are bound to the creating thread unless told otherwise;
# FastAPI runs sync endpoints in a threadpool.
_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(
    settings.database_url,
    echo=settings.sql_echo,
    connect_args=_connect_args,
    future=True,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
