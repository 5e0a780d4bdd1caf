"""Shared plumbing for the SQLAlchemy-backed stores."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from jokebox.core.errors import ConflictError, StoreUnavailableError

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT: dict[str, Any] = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
    "mysql": mysql.insert,
    "mariadb": mysql.insert,
}


@contextmanager
def store_errors(session: Session, action: str) -> Iterator[None]:
    """Translate driver failures into the store error taxonomy.

    The session is rolled back before the translated error propagates so the
    caller can keep using it.
    """
    try:
        yield
    except IntegrityError as err:
        session.rollback()
        logger.warning("Constraint violation while %s: %s", action, err.orig)
        raise ConflictError(f"Conflict while {action}") from err
    except DBAPIError as err:
        session.rollback()
        logger.error("Store failure while %s", action, exc_info=True)
        raise StoreUnavailableError() from err


def dialect_insert(session: Session, table: Any) -> Any:
    """Return an ``INSERT`` construct that supports the dialect's upsert clause."""
    dialect = session.get_bind().dialect.name
    try:
        insert = _INSERT_BY_DIALECT[dialect]
    except KeyError as err:  # pragma: no cover - deployment misconfiguration
        raise StoreUnavailableError(f"Unsupported database dialect: {dialect}") from err
    return insert(table)
