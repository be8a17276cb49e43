"""SQL used against BinDiff result databases."""

from __future__ import annotations

from vxsig.diff.models import Granularity

# -- Match tables --

# No ORDER BY: rows come back in storage order.
MATCH_QUERIES = {
    Granularity.FUNCTION: "SELECT address1, address2 FROM function",
    Granularity.BASIC_BLOCK: "SELECT address1, address2 FROM basicblock",
    Granularity.INSTRUCTION: "SELECT address1, address2 FROM instruction",
}

MATCH_COLUMNS = ("address1", "address2")

# -- Metadata --

METADATA_TABLE = "file"

METADATA_COLUMNS = ("id", "filename", "exefilename", "hash")

# Ascending id is the producer's primary/secondary order.
METADATA_QUERY = """
SELECT filename, exefilename, hash
FROM file
ORDER BY id
"""

# -- Schema introspection --

TABLE_COLUMNS = "SELECT name FROM pragma_table_info(?)"

PROBE = "PRAGMA schema_version"

REQUIRED_TABLES = {granularity.table: MATCH_COLUMNS for granularity in Granularity}
