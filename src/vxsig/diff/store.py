"""Read-only access to BinDiff result databases."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import TracebackType
from typing import Any

from vxsig.config.defaults import DEFAULT_TIMEOUT_SECONDS
from vxsig.diff.errors import DiffIOError, DiffNotFoundError, SchemaError
from vxsig.diff.queries import PROBE, REQUIRED_TABLES, TABLE_COLUMNS
from vxsig.utils.logging import get_logger

log = get_logger(__name__)


class DiffStore:
    """An open diff-result database.

    Wraps the SQLite connection so that nothing outside ``vxsig.diff`` sees the
    native handle. Use as a context manager or call :meth:`close`.
    """

    def __init__(self, path: str, connection: sqlite3.Connection) -> None:
        self.path = path
        self._conn: sqlite3.Connection | None = connection

    def __enter__(self) -> DiffStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._conn is None

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            log.debug("store_closed", path=self.path)

    def execute(self, query: str, params: Iterable[Any] = ()) -> sqlite3.Cursor:
        if self._conn is None:
            raise DiffIOError(self.path, "store is closed")
        try:
            return self._conn.execute(query, tuple(params))
        except sqlite3.Error as exc:
            raise DiffIOError(self.path, str(exc)) from exc

    def table_columns(self, table: str) -> set[str]:
        """Return the column names of ``table``; empty if it does not exist."""
        return {row[0] for row in self.execute(TABLE_COLUMNS, (table,))}

    def require_columns(self, table: str, columns: Iterable[str]) -> None:
        present = self.table_columns(table)
        if not present:
            raise SchemaError(self.path, table, "table is missing")
        missing = [c for c in columns if c not in present]
        if missing:
            raise SchemaError(
                self.path,
                table,
                "missing columns",
                expected=", ".join(columns),
                actual=", ".join(sorted(present)),
            )

    def validate_schema(self, required: Mapping[str, Iterable[str]] = REQUIRED_TABLES) -> None:
        """Check that every match table exists with its address columns."""
        for table, columns in required.items():
            self.require_columns(table, tuple(columns))
        log.debug("schema_validated", path=self.path, tables=sorted(required))


def open_store(path: str | Path, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> DiffStore:
    """Open ``path`` read-only.

    Raises DiffNotFoundError if the path is not a file and DiffIOError if
    SQLite cannot read it.
    """
    file_path = Path(path)
    display = str(path)
    if not file_path.is_file():
        raise DiffNotFoundError(display)

    uri = f"{file_path.resolve().as_uri()}?mode=ro"
    try:
        conn = sqlite3.connect(uri, uri=True, timeout=timeout)
    except sqlite3.Error as exc:
        raise DiffIOError(display, str(exc)) from exc

    # connect() is lazy; force a header read so junk files fail here.
    try:
        conn.execute(PROBE).fetchone()
    except sqlite3.Error as exc:
        conn.close()
        raise DiffIOError(display, str(exc)) from exc

    log.debug("store_opened", path=display)
    return DiffStore(display, conn)
