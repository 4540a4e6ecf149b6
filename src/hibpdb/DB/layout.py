"""
On-disk layout shared by the builder and the range reader.

  0 .. TABLE_BYTES-1      : address table, ADDR_MAP_SIZE x uint32 little-endian.
                            table[p] = index of the first record whose prefix >= p,
                            table[2**24] = total number of records.
  TABLE_BYTES ..          : suffix records, RECORD_SIZE bytes each, ascending hash order.

There is no magic or version field. Files written with different constants
are only detected by the size check in RangeDB (see expected_file_size).
"""
from __future__ import annotations
import re
import sys
from array import array

from ..errors import ClientInputError, DatabaseFormatError

PREFIX_HEX_LEN = 6
PREFIX_BITS = PREFIX_HEX_LEN * 4
ADDR_MAP_SIZE = (1 << PREFIX_BITS) + 1
ADDR_ENTRY_SIZE = 4
TABLE_BYTES = ADDR_MAP_SIZE * ADDR_ENTRY_SIZE

HASH_HEX_LEN = 40                                  # SHA-1
RECORD_SIZE = (HASH_HEX_LEN - PREFIX_HEX_LEN) // 2  # 17 bytes

PREFIX_ERROR = "prefix should be the first 6 characters of the SHA-1 password"

_PREFIX_RE = re.compile(r"[0-9A-Fa-f]{%d}" % PREFIX_HEX_LEN)

# array("I") is native-endian; the file is little-endian everywhere
_SWAP = sys.byteorder != "little"


def new_table() -> array:
    table = array("I", [0]) * ADDR_MAP_SIZE
    if table.itemsize != ADDR_ENTRY_SIZE:  # pragma: no cover
        raise RuntimeError(f"array('I') is {table.itemsize} bytes on this platform")
    return table


def table_to_bytes(table: array) -> bytes:
    if len(table) != ADDR_MAP_SIZE:
        raise ValueError(f"address table must have {ADDR_MAP_SIZE} entries, got {len(table)}")
    if _SWAP:
        table = array("I", table)
        table.byteswap()
    return table.tobytes()


def table_from_bytes(raw: bytes) -> array:
    if len(raw) != TABLE_BYTES:
        raise DatabaseFormatError(
            f"address table is {len(raw):,} bytes, expected {TABLE_BYTES:,}"
        )
    table = array("I")
    table.frombytes(raw)
    if _SWAP:
        table.byteswap()
    return table


def record_offset(index: int) -> int:
    """Byte offset of the index-th suffix record."""
    return TABLE_BYTES + index * RECORD_SIZE


def expected_file_size(records: int) -> int:
    return record_offset(records)


def parse_prefix(text: str) -> int:
    """Parse a 6-hex-char prefix; anything else is a client error."""
    if not isinstance(text, str) or not _PREFIX_RE.fullmatch(text):
        raise ClientInputError(PREFIX_ERROR)
    return int(text, 16)
