"""Single-pass cursors over match tables."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator

from vxsig.diff.errors import DiffIOError, SchemaError
from vxsig.diff.models import ADDRESS_WIDTH, AddressPair, Granularity, to_address
from vxsig.diff.queries import MATCH_COLUMNS, MATCH_QUERIES
from vxsig.diff.store import DiffStore
from vxsig.utils.logging import get_logger

log = get_logger(__name__)


class MatchCursor:
    """Lazy, finite, non-restartable stream of AddressPairs for one table.

    Rows are yielded in the order SQLite returns them. Iterating a second time
    raises RuntimeError; issue a new query instead.
    """

    def __init__(
        self,
        path: str,
        granularity: Granularity,
        rows: sqlite3.Cursor,
        address_width: int = ADDRESS_WIDTH,
    ) -> None:
        self.path = path
        self.granularity = granularity
        self.address_width = address_width
        self.rows_read = 0
        self._rows: sqlite3.Cursor | None = rows
        self._started = False

    def __iter__(self) -> Iterator[AddressPair]:
        if self._started:
            raise RuntimeError(f"{self.granularity.label} cursor already consumed")
        self._started = True
        return self._generate()

    def close(self) -> None:
        if self._rows is not None:
            self._rows.close()
            self._rows = None

    def _generate(self) -> Iterator[AddressPair]:
        rows = self._rows
        if rows is None:
            return
        try:
            while True:
                try:
                    row = rows.fetchone()
                except sqlite3.Error as exc:
                    raise DiffIOError(self.path, str(exc)) from exc
                if row is None:
                    break
                pair = AddressPair(self._address(row[0], 0), self._address(row[1], 1))
                self.rows_read += 1
                yield pair
        finally:
            self.close()

    def _address(self, raw: object, column: int) -> int:
        table = self.granularity.table
        name = MATCH_COLUMNS[column]
        if not isinstance(raw, int) or isinstance(raw, bool):
            raise SchemaError(
                self.path,
                table,
                f"row {self.rows_read}: {name} is not an integer address",
                expected="INTEGER",
                actual=type(raw).__name__ if raw is not None else "NULL",
            )
        address = to_address(raw, self.address_width)
        if address is None:
            raise SchemaError(
                self.path,
                table,
                f"row {self.rows_read}: {name} value {raw:#x} exceeds address width",
                expected=f"< 2**{self.address_width}",
                actual=hex(raw),
            )
        return address


def query_matches(
    store: DiffStore, granularity: Granularity, address_width: int = ADDRESS_WIDTH
) -> MatchCursor:
    """Start a fresh query over the match table for ``granularity``."""
    log.debug("query_matches", path=store.path, table=granularity.table)
    rows = store.execute(MATCH_QUERIES[granularity])
    return MatchCursor(store.path, granularity, rows, address_width=address_width)
