"""Frozen dataclasses describing the contents of a diff-result store."""

from __future__ import annotations

import enum
from dataclasses import dataclass

ADDRESS_WIDTH = 64


class Granularity(enum.Enum):
    """Match table granularity. Member order is the fixed dispatch order."""

    FUNCTION = "function"
    BASIC_BLOCK = "basicblock"
    INSTRUCTION = "instruction"

    @property
    def table(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_label(cls, label: str) -> Granularity:
        normalized = label.strip().lower().replace("_", "-")
        for member in cls:
            if member.label == normalized or member.value == normalized:
                return member
        available = ", ".join(m.label for m in cls)
        raise ValueError(f"Unknown granularity '{label}'. Available: {available}")


def format_address(address: int) -> str:
    return f"0x{address:08x}"


def to_address(raw: int, width: int = ADDRESS_WIDTH) -> int | None:
    """Interpret a stored SQLite integer as an unsigned address.

    SQLite integers are signed 64-bit, so negative values are read back as
    their two's-complement unsigned value. Returns None if the result does not
    fit in ``width`` bits.
    """
    value = raw & ((1 << 64) - 1) if raw < 0 else raw
    if value >= 1 << width:
        return None
    return value


@dataclass(frozen=True)
class AddressPair:
    primary: int
    secondary: int

    def __str__(self) -> str:
        return f"({format_address(self.primary)}, {format_address(self.secondary)})"


@dataclass(frozen=True)
class BinaryMetadata:
    name: str
    original_name: str
    content_hash: str


@dataclass(frozen=True)
class MetadataPair:
    primary: BinaryMetadata
    secondary: BinaryMetadata


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a successful parse. ``metadata`` is None unless requested."""

    path: str
    function_matches: int = 0
    basic_block_matches: int = 0
    instruction_matches: int = 0
    metadata: MetadataPair | None = None

    def count(self, granularity: Granularity) -> int:
        return {
            Granularity.FUNCTION: self.function_matches,
            Granularity.BASIC_BLOCK: self.basic_block_matches,
            Granularity.INSTRUCTION: self.instruction_matches,
        }[granularity]

    @property
    def total_matches(self) -> int:
        return self.function_matches + self.basic_block_matches + self.instruction_matches
