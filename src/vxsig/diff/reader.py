"""Parse a BinDiff result into streamed matches and optional metadata."""

from __future__ import annotations

from pathlib import Path

from vxsig.config.models import ReaderConfig
from vxsig.diff.cursor import query_matches
from vxsig.diff.dispatch import SinkLike, as_sink, dispatch
from vxsig.diff.metadata import extract_metadata
from vxsig.diff.models import Granularity, MetadataPair, ParseResult
from vxsig.diff.store import open_store
from vxsig.utils.logging import bind_diff_path, get_logger

log = get_logger(__name__)


def parse_diff_result(
    path: str | Path,
    on_function_match: SinkLike,
    on_basic_block_match: SinkLike,
    on_instruction_match: SinkLike,
    metadata_requested: bool = False,
    config: ReaderConfig | None = None,
) -> ParseResult:
    """Stream every match in a diff result to the given sinks.

    Tables are read in the order function, basic block, instruction, each row
    delivered exactly once in storage order. If ``metadata_requested`` is set
    the two file records are read first and returned on the result; otherwise
    the metadata table is never touched.

    Raises one of DiffNotFoundError, DiffIOError, SchemaError or CallbackError.
    The store is closed on every path.
    """
    config = config or ReaderConfig()
    sinks = {
        Granularity.FUNCTION: as_sink(on_function_match),
        Granularity.BASIC_BLOCK: as_sink(on_basic_block_match),
        Granularity.INSTRUCTION: as_sink(on_instruction_match),
    }
    counts: dict[Granularity, int] = {}

    with bind_diff_path(path):
        with open_store(path, timeout=config.timeout_seconds) as store:
            store.validate_schema()

            metadata: MetadataPair | None = None
            if metadata_requested:
                metadata = extract_metadata(store)

            for granularity in Granularity:
                cursor = query_matches(store, granularity, address_width=config.address_width)
                try:
                    counts[granularity] = dispatch(cursor, sinks[granularity], granularity, path=store.path)
                finally:
                    cursor.close()

        result = ParseResult(
            path=str(path),
            function_matches=counts[Granularity.FUNCTION],
            basic_block_matches=counts[Granularity.BASIC_BLOCK],
            instruction_matches=counts[Granularity.INSTRUCTION],
            metadata=metadata,
        )
        log.info(
            "diff_parsed",
            functions=result.function_matches,
            basic_blocks=result.basic_block_matches,
            instructions=result.instruction_matches,
            metadata_requested=metadata_requested,
        )
    return result
