"""
Database schema and statement execution.

Tables are declared with SQLAlchemy so the schema can be bootstrapped on
SQLite or PostgreSQL; all reads and writes go through Store.execute() as
hand-written SQL with $1..$n positional placeholders.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    Text,
    create_engine,
    event,
    text,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base

from .errors import ConstraintViolationError
from .logger import get_logger

logger = get_logger()

Base = declarative_base()

_PLACEHOLDER = re.compile(r"\$(\d+)")


class Company(Base):
    """Company owning job postings. Read-only from the jobs layer."""

    __tablename__ = "companies"

    handle = Column(Text, primary_key=True)
    name = Column(Text, unique=True, nullable=False)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"))
    description = Column(Text, nullable=False)
    logo_url = Column(Text)


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, CheckConstraint("salary >= 0"))
    equity = Column(Numeric, CheckConstraint("equity <= 1.0"))
    company_handle = Column(
        Text,
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )


def create_db_engine(database_url: str) -> Engine:
    """
    Create an engine for the given URL.

    SQLite only enforces foreign keys when asked to on each connection,
    and file databases need their parent directory to exist.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_database(engine: Engine) -> None:
    """
    Create the companies and jobs tables if they do not exist.

    Args:
        engine: Engine returned by create_db_engine()
    """
    Base.metadata.create_all(engine)


def to_named_binds(sql: str, params: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite $1..$n placeholders into SQLAlchemy named binds (:p1..:pn).

    Raises:
        ValueError: if a placeholder has no matching value
    """
    def _replace(match: "re.Match[str]") -> str:
        index = int(match.group(1))
        if index < 1 or index > len(params):
            raise ValueError(f"Placeholder ${index} has no value ({len(params)} given)")
        return f":p{index}"

    statement = _PLACEHOLDER.sub(_replace, sql)
    binds = {f"p{i}": value for i, value in enumerate(params, start=1)}
    return statement, binds


class Store:
    """
    Executes parameterized SQL against the relational engine.

    Each call runs in its own transaction. Integrity failures (foreign key,
    unique, check) surface as ConstraintViolationError; every other store
    error propagates unchanged.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> "Store":
        return cls(create_db_engine(database_url))

    def execute(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        statement, binds = to_named_binds(sql, params)
        logger.debug("Executing statement", sql=" ".join(sql.split()), params=len(binds))
        logger.record_statement()

        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(statement), binds)
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings()]
        except IntegrityError as e:
            logger.warning("Store rejected statement", error=str(e.orig))
            raise ConstraintViolationError(str(e.orig)) from e

    def dispose(self) -> None:
        self.engine.dispose()
