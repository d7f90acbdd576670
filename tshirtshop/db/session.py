from contextlib import contextmanager
import os
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/tshirtshop.db")


def build_engine(database_url: str = DATABASE_URL) -> Engine:
    if database_url.startswith("sqlite"):
        if ":memory:" in database_url or database_url.rstrip("/").endswith("sqlite:"):
            # one shared connection, otherwise every session sees an empty database
            return create_engine(
                database_url,
                future=True,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        # Ensure sqlite file parent directory exists to avoid 'unable to open database file'
        db_path = database_url.split(":///", 1)[-1]
        Path(db_path).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, future=True)


def make_session_factory(engine: Engine):
    """Return a ``get_session`` context manager bound to ``engine``.

    Each ``with`` block is one unit of work: committed when the block exits
    normally, rolled back when anything is raised inside it.
    """
    SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)

    @contextmanager
    def get_session():
        session = SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return get_session


def init_db(engine: Engine) -> None:
    from ..models import Base

    Base.metadata.create_all(engine)
