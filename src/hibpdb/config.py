from __future__ import annotations
import os

# Logging level for the CLI (overridden by --verbose)
LOG_LEVEL: str = os.environ.get("HIBPDB_LOG_LEVEL", "INFO")

# Builder: seconds between progress lines
PROGRESS_INTERVAL_SEC: float = float(os.environ.get("HIBPDB_PROGRESS_INTERVAL", "10"))

# Builder: read/write buffer sizes (the corpus has hundreds of millions of lines)
IO_BUFFER_SIZE: int = 16 * 1024 * 1024

# Server
DEFAULT_LISTEN: str = os.environ.get("HIBPDB_LISTEN", "localhost:8080")
