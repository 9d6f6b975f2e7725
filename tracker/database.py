import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from tracker.config.settings import settings, Settings
from tracker.exceptions import Conflict, InternalError

logger = logging.getLogger(__name__)


def build_engine(config: Settings) -> Engine:
    """Create the engine for the configured backend.

    The dialect is the only thing that differs between SQLite, MySQL and
    Postgres; everything above this module talks to the ORM session.
    """
    connect_args = {}
    if config.backend == "sqlite":
        connect_args["check_same_thread"] = False
    elif config.backend == "postgresql" and config.database_sslmode:
        connect_args["sslmode"] = config.database_sslmode

    engine = create_engine(config.database_url, connect_args=connect_args, pool_pre_ping=True)

    if config.backend == "sqlite":
        enable_sqlite_foreign_keys(engine)

    return engine


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    # SQLite ignores ON DELETE clauses unless the pragma is set per connection
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = build_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind: Engine = None) -> None:
    """Create all tables that do not exist yet"""
    # Import models so they are registered with Base.metadata
    import tracker.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def commit(db: Session, conflict_message: str = None) -> None:
    """Commit the session, translating storage failures.

    Unique constraint violations become ``Conflict`` when the caller expects
    them; every other storage error becomes ``InternalError``.
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if conflict_message:
            raise Conflict(conflict_message) from exc
        logger.exception("Integrity error on commit")
        raise InternalError("server error") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Storage error on commit")
        raise InternalError("server error") from exc


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
