"""
hibpdb - prefix-indexed lookup database for the Have I Been Pwned
SHA-1 password corpus.

A sorted corpus is compiled once into a file holding a direct-address table
of 2**24 + 1 offsets followed by fixed-width 17-byte hash suffixes. Lookups
by 6-hex-char prefix are then one table read plus one positioned file read.

Example Usage:
    from hibpdb import Engine

    eng = Engine()
    eng.generate("pwned-passwords-sha1-ordered-by-hash.txt", "pwned.db")
    eng.load("pwned.db")
    print(eng.lookup("21bd12").suffixes)
    eng.shutdown()
"""
from .engine import Engine
from .DB import RangeDB, generate_db
from .errors import (
    HibpDBError,
    MalformedInputError,
    DatabaseFormatError,
    CorruptDatabaseError,
    ClientInputError,
)

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "RangeDB",
    "generate_db",
    "HibpDBError",
    "MalformedInputError",
    "DatabaseFormatError",
    "CorruptDatabaseError",
    "ClientInputError",
]
