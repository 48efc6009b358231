"""
Database schema and connection management.

Tables are declared with SQLAlchemy; repositories talk to them through
Database.query, which takes SQL text with $1..$n positional placeholders.
One engine (and its connection pool) is shared per process.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    create_engine,
    event,
    text,
)
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base

from .logger import get_logger

Base = declarative_base()

_PLACEHOLDER = re.compile(r"\$(\d+)")


class Company(Base):
    """Company model; handle is the natural key."""

    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"))
    description = Column(Text, nullable=False)
    logo_url = Column(Text)


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, CheckConstraint("salary >= 0"))
    equity = Column(Numeric, CheckConstraint("equity <= 1.0"))
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def to_bind_params(sql: str, params: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite $n placeholders as named binds.

    Returns:
        ("... WHERE handle = :p1", {"p1": "acme"})
    """
    bound_sql = _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql)
    binds = {f"p{idx}": value for idx, value in enumerate(params, start=1)}
    return bound_sql, binds


class Database:
    """Query-execution collaborator: SQL text + positional params in, rows out."""

    def __init__(self, url: str):
        self.url = url
        self.engine = create_engine(url)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

    def create_tables(self) -> None:
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        Base.metadata.drop_all(self.engine)

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """
        Execute one statement in its own transaction.

        Args:
            sql: SQL text using $1, $2, ... placeholders
            params: Values for the placeholders, in position order

        Returns:
            Rows as dicts (empty list for statements without a result set)
        """
        logger = get_logger()
        bound_sql, binds = to_bind_params(sql, params)
        logger.debug("Executing query", sql=" ".join(sql.split()), params=list(params))
        logger.record_query()

        with self.engine.begin() as conn:
            result = conn.execute(text(bound_sql), binds)
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings()]

    def close(self) -> None:
        self.engine.dispose()


def _ensure_sqlite_dir(url: str) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    if parsed.database and parsed.database != ":memory:":
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)


# Process-wide handle
_database: Optional[Database] = None


def init_database(url: Optional[str] = None, create_tables: bool = True) -> Database:
    """
    Initialize the process-wide database handle.

    Args:
        url: SQLAlchemy URL (default: DATABASE_URL from settings)
        create_tables: Create the companies and jobs tables if missing

    Returns:
        Database instance
    """
    global _database

    if url is None:
        from .config import get_settings
        url = get_settings().database_url

    close_database()
    _ensure_sqlite_dir(url)
    _database = Database(url)
    if create_tables:
        _database.create_tables()

    get_logger().info("Database initialized", backend=_database.engine.dialect.name)
    return _database


def get_database() -> Database:
    """Return the process-wide database, initializing it on first use."""
    if _database is None:
        return init_database()
    return _database


def close_database() -> None:
    """Dispose of the connection pool."""
    global _database

    if _database is not None:
        _database.close()
        _database = None
