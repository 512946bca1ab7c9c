"""
Database session management.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from mindcare.core.config import settings
from mindcare.db.base import Base


def _use_immediate_transactions(sqlite_engine: Engine):
    """
    Take SQLite's write lock at BEGIN so concurrent writers queue on the busy
    timeout instead of failing with "database is locked" mid-transaction.
    """
    @event.listens_for(sqlite_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(
    database_url: str,
    echo: bool = False,
    connect_timeout: int = settings.DB_CONNECT_TIMEOUT,
    pool_timeout: int = settings.DB_POOL_TIMEOUT,
) -> Engine:
    """Create an engine whose calls are bounded by the configured timeouts."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        sqlite_engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": connect_timeout},
        )
        _use_immediate_transactions(sqlite_engine)
        return sqlite_engine

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_timeout=pool_timeout,
        connect_args={
            "connect_timeout": connect_timeout,
            "read_timeout": connect_timeout,
            "write_timeout": connect_timeout,
        },
    )


def make_session_factory(bind: Engine) -> sessionmaker:
    """Session factory; objects stay readable after the session closes."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


engine = make_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

SessionLocal = make_session_factory(engine)


def init_db(bind: Engine = None):
    """Initialize database tables."""
    # Import models so they register on the metadata
    import mindcare.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
