"""Connection to the application database."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from adminkit import errors
from adminkit.config import Settings

log = logging.getLogger(__name__)

MAX_IDLE_CONNS = 20
MAX_OPEN_CONNS = 200


class Database:
    """An engine and the sessions opened on it."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """A session committed on success and rolled back on error."""
        db_session = self._sessions()
        try:
            yield db_session
            db_session.commit()
        except BaseException:
            db_session.rollback()
            raise
        finally:
            db_session.close()


def connection_url(settings: Settings) -> URL:
    """The PostgreSQL URL for the ``database`` section of the settings."""
    conf = settings.database
    query = {"sslmode": conf.ssl_mode} if conf.ssl_mode else {}
    return URL.create(
        "postgresql",
        username=conf.user or None,
        password=conf.password or None,
        host=conf.host or None,
        port=conf.port or None,
        database=conf.name or None,
        query=query,
    )


def new_database(settings: Settings) -> Database:
    """Connect to the configured database; raises CustomError if that fails."""
    url = connection_url(settings)
    log.info("Connecting to %s", url.render_as_string(hide_password=True))
    try:
        engine = create_engine(
            url,
            pool_size=MAX_IDLE_CONNS,
            max_overflow=MAX_OPEN_CONNS - MAX_IDLE_CONNS,
        )
        with engine.connect():
            pass
    except (SQLAlchemyError, ImportError) as exc:
        raise errors.wrap(exc, "Cannot connect to database") from exc
    return Database(engine)