"""Shared test fixtures."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Callable, Sequence

import pytest

from vxsig.config.models import ReaderConfig, VxsigConfig

# Function matches from sshd.korg_vs_sshd.trojan1.BinDiff.
SSHD_FUNCTION_MATCHES = [
    (0x00058360, 0x08095860), (0x000583A0, 0x08095890), (0x00058410, 0x080958F0),
    (0x00058460, 0x08095930), (0x000584E0, 0x080959A0), (0x000585B0, 0x08095EA0),
    (0x00058670, 0x08095F70), (0x00058750, 0x08096050), (0x00058830, 0x08096140),
    (0x00058CA0, 0x08095A40), (0x00059150, 0x08096DA0), (0x000594F0, 0x08097070),
    (0x00059850, 0x080964D0), (0x00059940, 0x080965A0), (0x00059BB0, 0x08096760),
    (0x00059E20, 0x08096920), (0x0005A170, 0x08096AD0), (0x0005A2C0, 0x0804CB78),
    (0x0005A600, 0x08097670), (0x0005A940, 0x08097D80),
]

SSHD_FILES = [
    (1, "sshd.korg", "sshd.korg.hera.zeus1", "F705209F5671A2F85336717908007769B9FAFE54"),
    (2, "sshd.trojan1", "sshd", "86781CF0DF581B166A9ACAE32373BEB465704B54"),
]

NUM_FUNCTION_MATCHES = 20
NUM_BASIC_BLOCK_MATCHES = 169
NUM_INSTRUCTION_MATCHES = 1049

_SCHEMA = {
    "metadata": (
        "CREATE TABLE metadata (version TEXT, file1 INTEGER, file2 INTEGER, "
        "description TEXT, created DATE, modified DATE, similarity DOUBLE, confidence DOUBLE)"
    ),
    "file": (
        "CREATE TABLE file (id INTEGER PRIMARY KEY, filename TEXT, exefilename TEXT, "
        "hash CHARACTER(40), functions INT, libfunctions INT, calls INT, basicblocks INT, "
        "libbasicblocks INT, edges INT, libedges INT, instructions INT, libinstructions INT)"
    ),
    "function": (
        "CREATE TABLE function (id INTEGER PRIMARY KEY, address1 BIGINT, name1 TEXT, "
        "address2 BIGINT, name2 TEXT, similarity DOUBLE, confidence DOUBLE, flags INTEGER, "
        "algorithm SMALLINT, evaluate BOOLEAN, commentsported BOOLEAN, basicblocks INTEGER, "
        "edges INTEGER, instructions INTEGER)"
    ),
    "basicblock": (
        "CREATE TABLE basicblock (id INTEGER, functionid INT, address1 BIGINT, "
        "address2 BIGINT, algorithm SMALLINT, evaluate BOOLEAN)"
    ),
    "instruction": "CREATE TABLE instruction (basicblockid INT, address1 BIGINT, address2 BIGINT)",
}


def sshd_basic_block_matches() -> list[tuple[int, int]]:
    return [(0x0005ABD1 + 0x10 * i, 0x08097F58 + 0x10 * i) for i in range(NUM_BASIC_BLOCK_MATCHES)]


def sshd_instruction_matches() -> list[tuple[int, int]]:
    return [(0x0005ABD1 + 3 * i, 0x08097F58 + 3 * i) for i in range(NUM_INSTRUCTION_MATCHES)]


def write_bindiff(
    path: Path,
    functions: Sequence[tuple[object, object]] = (),
    basic_blocks: Sequence[tuple[object, object]] = (),
    instructions: Sequence[tuple[object, object]] = (),
    files: Sequence[tuple[int, object, object, object]] = SSHD_FILES,
    omit_tables: Sequence[str] = (),
) -> Path:
    """Write a minimal BinDiff result database to ``path``."""
    conn = sqlite3.connect(path)
    try:
        for table, ddl in _SCHEMA.items():
            if table not in omit_tables:
                conn.execute(ddl)
        if "metadata" not in omit_tables:
            conn.execute(
                "INSERT INTO metadata VALUES ('BinDiff 6', 1, 2, '', '2020-01-01', '2020-01-01', 0.9, 0.9)"
            )
        if "file" not in omit_tables:
            conn.executemany(
                "INSERT INTO file (id, filename, exefilename, hash) VALUES (?, ?, ?, ?)", files
            )
        if "function" not in omit_tables:
            conn.executemany(
                "INSERT INTO function (address1, address2, similarity, confidence) VALUES (?, ?, 1.0, 1.0)",
                functions,
            )
        if "basicblock" not in omit_tables:
            conn.executemany(
                "INSERT INTO basicblock (id, functionid, address1, address2) VALUES (?, 1, ?, ?)",
                [(i, a, b) for i, (a, b) in enumerate(basic_blocks)],
            )
        if "instruction" not in omit_tables:
            conn.executemany(
                "INSERT INTO instruction (basicblockid, address1, address2) VALUES (1, ?, ?)",
                instructions,
            )
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def make_diff(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing BinDiff databases under tmp_path."""
    counter = iter(range(1_000_000))

    def _make(**kwargs) -> Path:
        return write_bindiff(tmp_path / f"diff{next(counter)}.BinDiff", **kwargs)

    return _make


@pytest.fixture
def sshd_diff(make_diff) -> Path:
    return make_diff(
        functions=SSHD_FUNCTION_MATCHES,
        basic_blocks=sshd_basic_block_matches(),
        instructions=sshd_instruction_matches(),
    )


@pytest.fixture
def small_diff(make_diff) -> Path:
    return make_diff(
        functions=[(0x1000, 0x2000), (0x1100, 0x2100)],
        basic_blocks=[(0x1000, 0x2000), (0x1010, 0x2010), (0x1020, 0x2020)],
        instructions=[(0x1000, 0x2000)],
    )


@pytest.fixture
def sample_config() -> VxsigConfig:
    return VxsigConfig(reader=ReaderConfig(address_width=64, timeout_seconds=1.0))


@pytest.fixture
def sshd_expected() -> dict[str, object]:
    """Expected contents of ``sshd_diff``."""
    return {
        "functions": list(SSHD_FUNCTION_MATCHES),
        "basic_blocks": sshd_basic_block_matches(),
        "instructions": sshd_instruction_matches(),
        "files": list(SSHD_FILES),
    }
