from __future__ import annotations
import argparse, json, logging
from . import config as CFG
from .engine import Engine
from .errors import HibpDBError
from hibpweb.web import parse_listen, serve

log = logging.getLogger("hibpdb")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, CFG.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _listen_address(value: str) -> str:
    try:
        parse_listen(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    return value


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="hibpdb", description="Have I Been Pwned range database")
    p.add_argument("--verbose", action="store_true")
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("generate", help="Generate lookup database from ordered-by-hash txt file")
    g.add_argument("corpus", help="pwned-passwords-sha1-ordered-by-hash.txt")
    g.add_argument("db", help="database file to write (overwritten)")

    s = sub.add_parser("serve", help="Start the password range API")
    s.add_argument("db")
    s.add_argument("--listen", type=_listen_address, default=CFG.DEFAULT_LISTEN, help="address to listen (host:port)")

    q = sub.add_parser("lookup", help="Run a single range query")
    q.add_argument("db")
    q.add_argument("prefix", help="first 6 hex characters of a SHA-1 hash")
    q.add_argument("--json", action="store_true", help="Emit a JSON array")

    v = sub.add_parser("verify", help="Check the address table of a database")
    v.add_argument("db")

    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    eng = Engine()
    try:
        if args.cmd == "generate":
            eng.generate(args.corpus, args.db)
            return 0

        eng.load(args.db)
        if args.cmd == "serve":
            serve(eng, args.listen, debug=args.verbose)
        elif args.cmd == "lookup":
            res = eng.lookup(args.prefix)
            if args.json:
                print(json.dumps(res.suffixes))
            else:
                for sfx in res.suffixes:
                    print(sfx)
        elif args.cmd == "verify":
            eng.verify()
        return 0
    except (HibpDBError, OSError) as e:
        log.error("%s", e)
        return 1
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
