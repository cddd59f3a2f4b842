"""
Statement execution for fragments built by app.core.sql.

Statements arrive as SQL text with positional placeholders ($1, $2, ...) and
an ordered parameter list. They are compiled to SQLAlchemy bind parameters
and run through the request's Session:

- "no row returned" becomes NotFoundError
- a unique/foreign key violation becomes ConflictError
- anything else from the driver propagates unchanged
"""

import logging
import re
from typing import Any, Dict, List, Sequence, Tuple

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")
_ILIKE_RE = re.compile(r"\bILIKE\b")


def compile_positional(sql: str, params: Sequence[Any], dialect: str) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite $n placeholders as :p_n binds and pair them with their values.

    SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII.
    """
    compiled = _PLACEHOLDER_RE.sub(lambda m: f":p_{m.group(1)}", sql)
    if dialect == "sqlite":
        compiled = _ILIKE_RE.sub("LIKE", compiled)

    binds = {f"p_{idx}": value for idx, value in enumerate(params, start=1)}
    return compiled, binds


def _execute(db: Session, sql: str, params: Sequence[Any]):
    compiled, binds = compile_positional(sql, params, db.get_bind().dialect.name)
    logger.debug(f"Executing SQL: {compiled} | params={list(params)}")
    return db.execute(text(compiled), binds)


def insert_one(db: Session, sql: str, params: Sequence[Any], conflict: str) -> Dict[str, Any]:
    """
    Run an INSERT ... RETURNING statement and commit.

    Raises:
        ConflictError: If a constraint rejects the row (message: conflict)
    """
    try:
        row = _execute(db, sql, params).mappings().first()
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info(f"Insert rejected: {conflict} ({e.orig})")
        raise ConflictError(conflict) from e

    return dict(row)


def select_all(db: Session, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """Run a SELECT statement and return every row as a dict."""
    return [dict(row) for row in _execute(db, sql, params).mappings().all()]


def select_one(db: Session, sql: str, params: Sequence[Any], not_found: str) -> Dict[str, Any]:
    """
    Run a SELECT statement expected to match one row.

    Raises:
        NotFoundError: If no row matches (message: not_found)
    """
    row = _execute(db, sql, params).mappings().first()
    if row is None:
        raise NotFoundError(not_found)
    return dict(row)


def update_one(
    db: Session,
    sql: str,
    params: Sequence[Any],
    not_found: str,
    conflict: str = "Update conflicts with an existing record",
) -> Dict[str, Any]:
    """
    Run an UPDATE ... RETURNING statement on a single keyed row and commit.

    Raises:
        NotFoundError: If the key matched no row; nothing is committed
        ConflictError: If the new values violate a constraint
    """
    try:
        row = _execute(db, sql, params).mappings().first()
    except IntegrityError as e:
        db.rollback()
        logger.info(f"Update rejected: {conflict} ({e.orig})")
        raise ConflictError(conflict) from e

    if row is None:
        db.rollback()
        raise NotFoundError(not_found)

    db.commit()
    return dict(row)


def delete_one(db: Session, sql: str, params: Sequence[Any], not_found: str) -> Dict[str, Any]:
    """
    Run a DELETE ... RETURNING statement on a single keyed row and commit.

    Raises:
        NotFoundError: If the key matched no row
    """
    row = _execute(db, sql, params).mappings().first()
    if row is None:
        db.rollback()
        raise NotFoundError(not_found)

    db.commit()
    return dict(row)
