from __future__ import annotations
import logging
import os
from itertools import islice
from typing import List, Tuple

from ..errors import CorruptDatabaseError, DatabaseFormatError
from ..models import RangeResult
from .layout import (
    ADDR_MAP_SIZE,
    RECORD_SIZE,
    TABLE_BYTES,
    expected_file_size,
    parse_prefix,
    record_offset,
    table_from_bytes,
)

log = logging.getLogger(__name__)


class RangeDB:
    """
    Read-only view over a range database.

    The address table is loaded once and kept as a read-only memoryview.
    Suffix records are fetched with os.pread, a positioned read, so
    concurrent threads never share a file cursor and a file truncated after
    load gives a short read instead of a fault.
    """
    def __init__(self, path: str):
        self.path = os.path.abspath(path)
        try:
            self._fd = open(self.path, "rb")
        except OSError as e:
            raise DatabaseFormatError(f"cannot open database {self.path}: {e}") from e
        try:
            raw = self._fd.read(TABLE_BYTES)
            if len(raw) < TABLE_BYTES:
                raise DatabaseFormatError(
                    f"{self.path} is {len(raw):,} bytes, shorter than the address table "
                    f"({TABLE_BYTES:,} bytes)"
                )
            self._table = memoryview(table_from_bytes(raw)).toreadonly()
            self._check_shape()
        except BaseException:
            self._fd.close()
            raise
        log.info("Loaded address table from %s: %d hashes", self.path, self.count)

    def _check_shape(self) -> None:
        # No version tag in the format: a builder with other constants shows
        # up as a size mismatch here.
        if self._table[0] != 0:
            raise DatabaseFormatError(f"{self.path}: address table does not start at 0")
        size = os.fstat(self._fd.fileno()).st_size
        want = expected_file_size(self.count)
        if size != want:
            raise DatabaseFormatError(
                f"{self.path}: file is {size:,} bytes but its address table describes "
                f"{self.count:,} records ({want:,} bytes)"
            )

    # ---- Getters ----
    @property
    def count(self) -> int:
        """Total number of suffix records (the sentinel entry)."""
        return self._table[ADDR_MAP_SIZE - 1]

    @property
    def addresses(self) -> memoryview:
        return self._table

    # ---- Query ----
    def bounds(self, prefix: int) -> Tuple[int, int]:
        """Return (start, end) record indexes for a 24-bit prefix."""
        if not 0 <= prefix < ADDR_MAP_SIZE - 1:
            raise ValueError(f"prefix out of range: {prefix}")
        return self._table[prefix], self._table[prefix + 1]

    def read_range(self, prefix: int) -> List[bytes]:
        start, end = self.bounds(prefix)
        n = end - start
        if n < 0 or end > self.count:
            raise CorruptDatabaseError(
                f"{self.path}: address table is inconsistent at prefix {prefix:06x} "
                f"(start={start}, end={end}, records={self.count})"
            )
        if n == 0:
            return []
        off = record_offset(start)
        size = n * RECORD_SIZE
        buf = os.pread(self._fd.fileno(), size, off)
        if len(buf) != size:
            raise CorruptDatabaseError(
                f"{self.path}: short read at offset {off}: wanted {size} bytes, got {len(buf)}"
            )
        return [buf[i:i + RECORD_SIZE] for i in range(0, size, RECORD_SIZE)]

    def lookup(self, prefix_text: str) -> RangeResult:
        prefix = parse_prefix(prefix_text)
        start, end = self.bounds(prefix)
        suffixes = [rec.hex() for rec in self.read_range(prefix)]
        return RangeResult(prefix=prefix, start=start, end=end, suffixes=suffixes)

    # ---- Checks ----
    def verify(self) -> None:
        """Full scan: the table must be non-decreasing. Slow (2**24 entries)."""
        t = self._table
        for p, (a, b) in enumerate(zip(t, islice(t, 1, None))):
            if b < a:
                raise DatabaseFormatError(
                    f"{self.path}: address table decreases at prefix {p + 1:06x} ({a} > {b})"
                )
        self._check_shape()

    # ---- lifecycle ----
    def close(self) -> None:
        self._fd.close()

    def __enter__(self) -> "RangeDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
