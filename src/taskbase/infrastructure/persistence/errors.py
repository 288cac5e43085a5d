"""Translation of SQLAlchemy driver errors into TaskBase exceptions.

Repositories call :func:`translate_error` at their boundary so that no
SQLAlchemy exception type leaks into services or routers.
"""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from taskbase.core.exceptions import DatabaseError, PoolError

# SQLSTATEs for unique_violation and foreign_key_violation (PostgreSQL)
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def _sqlstate(error: IntegrityError) -> str | None:
    orig = error.orig
    driver_error = getattr(orig, "__cause__", None) or orig
    return getattr(orig, "sqlstate", None) or getattr(driver_error, "sqlstate", None)


def is_unique_violation(error: IntegrityError, constraint: str, column: str) -> bool:
    """Check whether an IntegrityError was raised by a given unique constraint.

    PostgreSQL drivers report the SQLSTATE and constraint name; SQLite only
    reports ``UNIQUE constraint failed: <table>.<column>``.

    Args:
        error: The error raised by the flush or commit.
        constraint: Name of the unique constraint.
        column: Fully qualified ``table.column`` covered by the constraint.
    """
    orig = error.orig
    driver_error = getattr(orig, "__cause__", None) or orig

    sqlstate = _sqlstate(error)
    constraint_name = getattr(driver_error, "constraint_name", None)
    if sqlstate == UNIQUE_VIOLATION and constraint_name:
        return constraint_name == constraint

    message = str(orig)
    if constraint in message:
        return True
    return "UNIQUE constraint failed" in message and column in message


def is_foreign_key_violation(error: IntegrityError) -> bool:
    """Check whether an IntegrityError references a row that does not exist."""
    if _sqlstate(error) == FOREIGN_KEY_VIOLATION:
        return True
    return "FOREIGN KEY constraint failed" in str(error.orig)


def translate_error(error: SQLAlchemyError) -> DatabaseError:
    """Map a SQLAlchemy error onto the generic database error classes."""
    if isinstance(error, PoolTimeoutError):
        return PoolError("Timed out waiting for a database connection")
    return DatabaseError(f"Database operation failed: {type(error).__name__}")
