# novashop/database.py
from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from novashop.core.config import Settings

# ---------------------------------------------------------
# Connection pool
#
# - pool_size=5       : at most 5 concurrent connections per process
# - max_overflow=0    : do not open extra connections beyond the pool
# - pool_timeout=30   : waiting longer than this for a connection
#                       raises, surfaced to clients as a 500
# - pool_pre_ping=True: validate connections before using them
#
# SQLite (tests, local runs) gets a single shared in-process connection.
# ---------------------------------------------------------


def _with_sslmode(db_url: str) -> str:
    """Append sslmode=require if it is not already present."""
    if "sslmode=" in db_url:
        return db_url
    if "?" in db_url:
        return db_url + "&sslmode=require"
    return db_url + "?sslmode=require"


def build_engine(settings: Settings) -> Engine:
    """
    Create the process-wide engine from settings.

    Called once by create_app(); the engine is stored on app.state.
    """
    db_url = settings.DATABASE_URL

    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    connect_args: dict[str, int] = {}
    if db_url.startswith("postgres"):
        if settings.DB_REQUIRE_SSL:
            db_url = _with_sslmode(db_url)
        connect_args["connect_timeout"] = settings.DB_CONNECT_TIMEOUT

    return create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        connect_args=connect_args,
    )


def create_db_and_tables(engine: Engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    """
    FastAPI dependency that yields a SQLModel Session bound to the app engine.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(request.app.state.engine) as session:
        yield session
