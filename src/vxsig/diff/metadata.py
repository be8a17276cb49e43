"""Per-binary metadata stored alongside the match tables."""

from __future__ import annotations

from vxsig.diff.errors import SchemaError
from vxsig.diff.models import BinaryMetadata, MetadataPair
from vxsig.diff.queries import METADATA_COLUMNS, METADATA_QUERY, METADATA_TABLE
from vxsig.diff.store import DiffStore
from vxsig.utils.logging import get_logger

log = get_logger(__name__)


def extract_metadata(store: DiffStore) -> MetadataPair:
    """Read the two file records. The first row is the primary binary."""
    store.require_columns(METADATA_TABLE, METADATA_COLUMNS)
    rows = store.execute(METADATA_QUERY).fetchall()
    if len(rows) != 2:
        raise SchemaError(
            store.path, METADATA_TABLE, "wrong number of metadata rows", expected=2, actual=len(rows)
        )

    records = []
    for ordinal, row in enumerate(rows):
        for column, value in zip(METADATA_COLUMNS[1:], row):
            if not isinstance(value, str):
                raise SchemaError(
                    store.path,
                    METADATA_TABLE,
                    f"row {ordinal}: {column} is not text",
                    expected="TEXT",
                    actual=type(value).__name__ if value is not None else "NULL",
                )
        filename, exefilename, content_hash = row
        records.append(
            BinaryMetadata(name=filename, original_name=exefilename, content_hash=content_hash)
        )

    metadata = MetadataPair(primary=records[0], secondary=records[1])
    log.debug(
        "metadata_extracted",
        primary=metadata.primary.name,
        secondary=metadata.secondary.name,
    )
    return metadata
