import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Mapping

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from common_sense.core.config import Settings
from common_sense.core.errors import ConfigurationError


logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Engine plus session factory, opened at startup and disposed at shutdown."""

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 5,
        pool_timeout: float = 10.0,
        statement_timeout_ms: int = 0,
        ssl: bool = False,
    ):
        options = {"echo": echo, "pool_pre_ping": True}

        if url.startswith("sqlite"):
            # sqlite3's timeout is how long a writer waits on a locked database
            options["connect_args"] = {"check_same_thread": False, "timeout": pool_timeout}
            if url in ("sqlite://", "sqlite:///:memory:"):
                options["poolclass"] = StaticPool
        else:
            options["pool_size"] = pool_size
            options["pool_timeout"] = pool_timeout
            connect_args = {}
            if url.startswith("postgresql"):
                if statement_timeout_ms:
                    connect_args["options"] = f"-c statement_timeout={statement_timeout_ms}"
                if ssl:
                    connect_args["sslmode"] = "require"
            options["connect_args"] = connect_args

        self.url = url
        self.engine = create_engine(url, **options)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            pool_size=settings.DATABASE_POOL_SIZE,
            pool_timeout=settings.DATABASE_POOL_TIMEOUT,
            statement_timeout_ms=settings.DATABASE_STATEMENT_TIMEOUT_MS,
            ssl=settings.DATABASE_SSL,
        )

    def create_tables(self):
        # register every table on Base.metadata before creating
        import common_sense.models.registry  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ensured")

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Commit everything done inside the block, or roll all of it back."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def upsert(
    db: Session,
    model,
    values: Mapping,
    conflict_keys: Iterable[str],
    update: Mapping,
):
    """INSERT .. ON CONFLICT DO UPDATE keyed on ``conflict_keys``.

    ``update`` maps column names to new values; a value of ``None`` means
    "take the value that was being inserted".
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        insert = postgresql.insert
    elif dialect == "sqlite":
        insert = sqlite.insert
    else:
        raise ConfigurationError(f"Upserts are not supported on {dialect}")

    stmt = insert(model).values(**values)
    set_ = {
        column: stmt.excluded[column] if value is None else value
        for column, value in update.items()
    }
    stmt = stmt.on_conflict_do_update(index_elements=list(conflict_keys), set_=set_)
    db.execute(stmt)
