from __future__ import annotations
import binascii
import logging
import os
import re
import time
from array import array
from typing import Optional

from .. import config as CFG
from ..errors import MalformedInputError
from ..models import BuildStats
from .layout import (
    ADDR_MAP_SIZE,
    HASH_HEX_LEN,
    PREFIX_HEX_LEN,
    TABLE_BYTES,
    new_table,
    table_to_bytes,
)

log = logging.getLogger(__name__)

_HASH_RE = re.compile(rb"[0-9A-Fa-f]{%d}" % HASH_HEX_LEN)


def _backfill(table: array, lo: int, hi: int, value: int) -> None:
    """Set table[lo:hi] = value (half-open)."""
    if hi > lo:
        table[lo:hi] = array("I", [value]) * (hi - lo)


def generate_db(src: str,
                dst: str,
                *,
                progress_interval: Optional[float] = None,
                buffer_size: Optional[int] = None) -> BuildStats:
    """
    Compile a hash-sorted corpus into a range database.

    The corpus must be sorted ascending by hash; this is not checked. Each
    line holds at least 40 hex characters, anything after them (the
    ":count" column of the HIBP download) is ignored.

    The database is written to "<dst>.tmp" and moved onto dst only once the
    address table is in place, so a failed build never replaces a good file.
    """
    interval = CFG.PROGRESS_INTERVAL_SEC if progress_interval is None else progress_interval
    bufsize = buffer_size or CFG.IO_BUFFER_SIZE
    tmp = f"{dst}.tmp"

    log.info("Generating DB %r from %r...", dst, src)
    t0 = time.perf_counter()

    table = new_table()
    count = 0
    prefixes = 0
    previous = 0

    os.makedirs(os.path.dirname(os.path.abspath(dst)), exist_ok=True)
    try:
        with open(src, "rb", buffering=bufsize) as fin, open(tmp, "wb", buffering=bufsize) as fout:
            # address table placeholder; written last
            fout.seek(TABLE_BYTES)

            timer = time.monotonic()
            timer_count = 0

            for line_no, line in enumerate(fin, start=1):
                line = line.rstrip(b"\r\n")
                if len(line) < HASH_HEX_LEN:
                    raise MalformedInputError(line_no, line, "line shorter than a SHA-1 hash")
                if not _HASH_RE.match(line):
                    raise MalformedInputError(line_no, line, "hash is not hexadecimal")

                prefix = int(line[:PREFIX_HEX_LEN], 16)
                if prefix != previous:
                    _backfill(table, previous + 1, prefix + 1, count)
                    previous = prefix
                    prefixes += 1
                elif count == 0:
                    prefixes += 1  # first line with prefix 000000

                fout.write(binascii.unhexlify(line[PREFIX_HEX_LEN:HASH_HEX_LEN]))
                count += 1

                if time.monotonic() - timer > interval:
                    log.info("Parsed %d hashes, total: %d", count - timer_count, count)
                    timer_count = count
                    timer = time.monotonic()

            # slots above the last prefix (and the sentinel) point past the end
            _backfill(table, previous + 1, ADDR_MAP_SIZE, count)

            fout.seek(0)
            fout.write(table_to_bytes(table))
        os.replace(tmp, dst)
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise

    elapsed = time.perf_counter() - t0
    log.info("DB generated, contains %d hashes (%d prefixes) in %.2fs", count, prefixes, elapsed)
    return BuildStats(path=dst, records=count, prefixes=prefixes, seconds=elapsed)
