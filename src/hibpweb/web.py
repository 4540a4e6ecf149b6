from __future__ import annotations
import logging
import time
from flask import Flask, Response, current_app, jsonify

from hibpdb.engine import Engine
from hibpdb.errors import ClientInputError, CorruptDatabaseError

log = logging.getLogger(__name__)

_EXT = "hibpdb"


def _engine() -> Engine:
    return current_app.extensions[_EXT]


def create_app(engine: Engine) -> Flask:
    """Build the Flask app around an already-loaded Engine."""
    app = Flask(__name__)
    app.extensions[_EXT] = engine

    # ---------- errors ----------
    @app.errorhandler(ClientInputError)
    def bad_prefix(e: ClientInputError):
        return Response(str(e), status=400, mimetype="text/plain")

    @app.errorhandler(CorruptDatabaseError)
    def corrupt_db(e: CorruptDatabaseError):
        log.error("Database read failed: %s", e, exc_info=e)
        return Response("internal error reading database", status=500, mimetype="text/plain")

    # ---------- API ----------
    @app.get("/api/range/<prefix>")
    def api_range(prefix: str):
        t0 = time.perf_counter()
        res = _engine().lookup(prefix)
        rv = jsonify(res.suffixes)
        log.info("Prefix %06x fetched, %d hashes, duration: %.3fms",
                 res.prefix, res.count, (time.perf_counter() - t0) * 1000)
        return rv

    @app.get("/health")
    def health():
        return jsonify({"ok": True, "records": _engine().count})

    return app


def parse_listen(listen: str) -> tuple[str, int]:
    """'host:port' -> (host, port); ':8080' listens on all interfaces."""
    host, sep, port = listen.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"listen address must be host:port, got {listen!r}")
    return (host.strip("[]") or "0.0.0.0"), int(port)


def serve(engine: Engine, listen: str, *, debug: bool = False) -> None:
    host, port = parse_listen(listen)
    app = create_app(engine)
    log.info("Starting server, listening on %r", listen)
    app.run(host=host, port=port, debug=debug, threaded=True, use_reloader=False)
