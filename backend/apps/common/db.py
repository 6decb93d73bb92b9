from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections
from rest_framework import status

from apps.api.exceptions import ApplicationError
from .logger import get_logger

logger = get_logger(__name__).bind(component="common", layer="db")

Row = Dict[str, Any]


class QueryExecutionError(ApplicationError):
    """The data store rejected a statement or could not hand out a connection."""

    def __init__(self, message: str = "Database query failed", *, alias: str = DEFAULT_DB_ALIAS):
        super().__init__(
            "SERVER_ERROR",
            message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        self.alias = alias


def _statement_head(sql: str, width: int = 60) -> str:
    flat = " ".join(sql.split())
    return flat if len(flat) <= width else f"{flat[:width]}..."


class SQLGateway:
    """
    Parameterized raw-SQL access on top of a Django connection alias.

    Placeholders use the DB-API ``%s`` style understood by every Django
    backend. Connection pooling (size, queueing, wait timeout) is configured on
    the alias in ``DATABASES``; a saturated pool blocks here until a connection
    frees up or the driver gives up, which surfaces as ``QueryExecutionError``.
    """

    def __init__(self, alias: str = DEFAULT_DB_ALIAS, *, connection_handler=None):
        self.alias = alias
        self._connections = connection_handler or connections
        self.logger = logger.bind(alias=alias)

    def query_rows(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        with self.logger.timed("Fetched rows", statement=_statement_head(sql)) as out:
            rows = self._execute(sql, params, single=False)
            out["rows"] = len(rows)
        return rows

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Row]:
        with self.logger.timed("Fetched single row", statement=_statement_head(sql)) as out:
            rows = self._execute(sql, params, single=True)
            out["found"] = bool(rows)
        return rows[0] if rows else None

    def random_function_sql(self) -> str:
        """Dialect-specific random ordering expression (``RANDOM()``, ``RAND()``)."""
        return self._connections[self.alias].ops.random_function_sql()

    def ping(self) -> bool:
        row = self.query_one("SELECT 1 AS ok")
        return bool(row and row.get("ok") == 1)

    def _execute(self, sql: str, params: Sequence[Any], *, single: bool) -> List[Row]:
        connection = self._connections[self.alias]
        try:
            with connection.cursor() as cursor:
                cursor.execute(sql, list(params))
                columns = [col[0] for col in (cursor.description or ())]
                if single:
                    record = cursor.fetchone()
                    return [dict(zip(columns, record))] if record is not None else []
                return [dict(zip(columns, record)) for record in cursor.fetchall()]
        except DatabaseError as exc:
            self.logger.error(
                "Query execution failed",
                statement=_statement_head(sql),
                error=str(exc),
                exception=exc.__class__.__name__,
            )
            raise QueryExecutionError(alias=self.alias) from exc


__all__ = ["QueryExecutionError", "SQLGateway", "Row"]
