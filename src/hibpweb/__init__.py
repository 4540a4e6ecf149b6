"""HTTP range API over a hibpdb database."""
from .web import create_app, serve

__all__ = ["create_app", "serve"]
