from .builder import generate_db
from .rangedb import RangeDB

__all__ = ["generate_db", "RangeDB"]
