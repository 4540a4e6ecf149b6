# hibpdb/engine.py
from __future__ import annotations

import logging
import os
from typing import Optional

from .models import BuildStats, RangeResult
from .DB.builder import generate_db
from .DB.rangedb import RangeDB

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer used by the CLI and the Flask app:
      * generate(src, dst): corpus -> database file
      * load(path):         open a database and map its address table
      * lookup(prefix):     range query for a 6-hex-char prefix
      * verify():           full address-table check
      * shutdown():         close the database
    """

    def __init__(self) -> None:
        self._db: Optional[RangeDB] = None

    # ------------- build -------------

    def generate(self, src: str, dst: str) -> BuildStats:
        if not os.path.exists(src):
            raise FileNotFoundError(src)
        if self._db is not None and os.path.abspath(dst) == self._db.path:
            raise RuntimeError(f"refusing to rebuild {dst} while it is being served")
        return generate_db(src, dst)

    # ------------- serve -------------

    def load(self, path: str) -> None:
        if self._db is not None:
            self.shutdown()
        log.info("Loading database from %s", path)
        self._db = RangeDB(path)

    @property
    def db(self) -> RangeDB:
        if self._db is None:
            raise RuntimeError("Engine not initialized. Call load() first.")
        return self._db

    @property
    def count(self) -> int:
        return self.db.count

    def lookup(self, prefix: str) -> RangeResult:
        return self.db.lookup(prefix)

    def verify(self) -> None:
        log.info("Verifying address table of %s", self.db.path)
        self.db.verify()
        log.info("Database OK: %d hashes", self.db.count)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            if self._db is not None:
                self._db.close()
        finally:
            self._db = None
            log.info("Engine shutdown complete")
