"""Database connection setup."""

from __future__ import annotations

import logging
import time

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

log = logging.getLogger(__name__)


def build_dsn(user: str, password: str, host: str, port: int, name: str, sslmode: str) -> str:
    """Return the PostgreSQL connection URL for the given settings."""
    return f"postgres://{user}:{password}@{host}:{port}/{name}?sslmode={sslmode}"


def connect_database(user, password, host, port, name, sslmode, retry_interval) -> Engine:
    """Create an engine and block until the database answers."""
    dsn = build_dsn(user, password, host, port, name, sslmode)
    engine = create_engine("postgresql://" + dsn.removeprefix("postgres://"))
    while True:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            log.info("[db] Connection set")
            return engine
        except SQLAlchemyError:
            log.warning("[db] Connection attempt failed, retrying in %d seconds", retry_interval)
            time.sleep(retry_interval)