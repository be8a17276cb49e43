"""vxsig: diff-result ingestion for binary signature synthesis."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from vxsig.diff.errors import (
    CallbackError,
    DiffIOError,
    DiffNotFoundError,
    DiffResultError,
    SchemaError,
)
from vxsig.diff.models import AddressPair, BinaryMetadata, Granularity, MetadataPair, ParseResult
from vxsig.diff.reader import parse_diff_result
from vxsig.version import __version__

if TYPE_CHECKING:
    from vxsig.config.models import VxsigConfig


@dataclass
class VxsigContext:
    """State shared across CLI commands."""

    config: VxsigConfig | None = None

    def ensure_config(self) -> VxsigConfig:
        if self.config is None:
            from vxsig.config.loader import load_config

            self.config = load_config()
        return self.config


__all__ = [
    "AddressPair",
    "BinaryMetadata",
    "CallbackError",
    "DiffIOError",
    "DiffNotFoundError",
    "DiffResultError",
    "Granularity",
    "MetadataPair",
    "ParseResult",
    "SchemaError",
    "VxsigContext",
    "__version__",
    "parse_diff_result",
]
