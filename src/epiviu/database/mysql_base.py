from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from mysql.connector import errors as mysql_errors

from ..core.exceptions import IntegrityError, StoreUnavailableError

logger = logging.getLogger(__name__)


def _rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql_errors.Error as e:
        # Connection already gone; the server discards the open transaction.
        logger.warning("Rollback failed: %s", e)


@contextmanager
def db_cursor(conn_factory, *, dictionary: bool = True):
    """Yield (conn, cursor) inside one transaction.

    Commits when the block finishes, rolls back on any exception. Driver
    errors are translated into domain errors: IntegrityError keeps the MySQL
    errno, connection-level failures become StoreUnavailableError.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql_errors.IntegrityError as e:
        _rollback(conn)
        raise IntegrityError(str(e.msg or e), errno=e.errno) from e
    except (mysql_errors.InterfaceError, mysql_errors.OperationalError) as e:
        _rollback(conn)
        raise StoreUnavailableError("Banco de dados indisponível") from e
    except Exception:
        _rollback(conn)
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_date(value: Any) -> Optional[date]:
    """Normalize DATE columns: the connector returns date, some setups return str."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")
