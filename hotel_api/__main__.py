"""Command line entry point.

    python -m hotel_api serve --db db.json --port 3000
    python -m hotel_api hash-password secret
"""
import argparse
import os
import sys

import uvicorn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hotel-api", description="Hotel management REST API")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--db", help="Path to the JSON document (DB_PATH)")
    serve.add_argument("--host", help="Bind address (HOST)")
    serve.add_argument("--port", type=int, help="Port (PORT)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    hasher = sub.add_parser("hash-password", help="Print a password hash for db.json")
    hasher.add_argument("password")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "hash-password":
        from hotel_api.auth import hash_password

        print(hash_password(args.password))
        return 0

    # settings are read from the environment when hotel_api.config is imported
    if args.db:
        os.environ["DB_PATH"] = args.db
    if args.host:
        os.environ["HOST"] = args.host
    if args.port:
        os.environ["PORT"] = str(args.port)

    from hotel_api import config

    uvicorn.run(
        "hotel_api.app:main_app",
        factory=True,
        host=config.HOST,
        port=config.PORT,
        reload=args.reload,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
