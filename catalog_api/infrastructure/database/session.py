# catalog_api/infrastructure/database/session.py

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from catalog_api.config.settings import settings
from catalog_api.infrastructure.database.base_model import BaseModel

_engine: Engine | None = None

_SessionLocal = sessionmaker(
    autoflush=False,
    expire_on_commit=False,
)


def init_engine(database_url: str | None = None, *, echo: bool = False) -> Engine:
    global _engine

    url = database_url or settings.database_url
    kwargs: dict = {"echo": echo, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            # one shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool

    if _engine is not None:
        _engine.dispose()

    _engine = create_engine(url, **kwargs)
    if url.startswith("sqlite"):
        _enable_sqlite_savepoints(_engine)
    _SessionLocal.configure(bind=_engine)
    return _engine


def _enable_sqlite_savepoints(engine: Engine) -> None:
    # pysqlite defers BEGIN until the first DML, so a SAVEPOINT would open
    # (and its RELEASE would commit) the outer transaction
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def get_engine() -> Engine:
    if _engine is None:
        init_engine()
    return _engine  # type: ignore[return-value]


def create_schema() -> None:
    import catalog_api.infrastructure.database.models  # noqa: F401

    BaseModel.metadata.create_all(get_engine())


def drop_schema() -> None:
    BaseModel.metadata.drop_all(get_engine())


def new_session() -> Session:
    get_engine()
    return _SessionLocal()


@contextmanager
def db_session() -> Iterator[Session]:
    session = new_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
