"""Error taxonomy for reading diff-result stores.

Every failure of ``parse_diff_result`` is one of the four concrete classes
below. Each carries a ``kind`` tag plus the structured context needed to build
a message without reopening the store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vxsig.diff.models import AddressPair, Granularity


class DiffResultError(Exception):
    kind = "diff_result_error"

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class DiffNotFoundError(DiffResultError):
    kind = "not_found"

    def __init__(self, path: str) -> None:
        super().__init__(f"Diff result not found: {path}", path=path)


class DiffIOError(DiffResultError):
    kind = "io_error"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read diff result {path}: {reason}", path=path)
        self.reason = reason


class SchemaError(DiffResultError):
    kind = "schema_error"

    def __init__(
        self,
        path: str,
        table: str,
        detail: str,
        expected: object | None = None,
        actual: object | None = None,
    ) -> None:
        message = f"Invalid diff result {path}: table '{table}': {detail}"
        if expected is not None or actual is not None:
            message += f" (expected {expected}, got {actual})"
        super().__init__(message, path=path)
        self.table = table
        self.detail = detail
        self.expected = expected
        self.actual = actual


class CallbackError(DiffResultError):
    kind = "callback_error"

    def __init__(
        self,
        granularity: Granularity,
        match: AddressPair,
        index: int,
        sink_message: str,
        path: str | None = None,
    ) -> None:
        super().__init__(
            f"{granularity.label} sink rejected match #{index} {match}: {sink_message}",
            path=path,
        )
        self.granularity = granularity
        self.match = match
        self.index = index
        self.sink_message = sink_message
