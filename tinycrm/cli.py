"""
Command line entry point.

    tinycrm serve [--host HOST] [--port PORT]
    tinycrm adduser <username> <password>
"""

import argparse
import asyncio
import logging
import sys

from tinycrm.config import settings

logger = logging.getLogger(__name__)


async def add_user(username: str, password: str) -> int:
    """Create a credential record. Returns the process exit status."""
    from tinycrm.api.deps import get_password_hash
    from tinycrm.database import async_session_maker, engine, init_db
    from tinycrm.services.repository import Repository

    await init_db()
    try:
        async with async_session_maker() as session:
            repo = Repository(session)
            if await repo.get_user_by_username(username) is not None:
                print(f"User '{username}' already exists")
                return 1
            await repo.create_user(username, get_password_hash(password))
    finally:
        await engine.dispose()

    print(f"User '{username}' created successfully")
    return 0


def serve(host: str, port: int) -> int:
    import uvicorn

    print(f"Running on port {port}")
    uvicorn.run("tinycrm.main:app", host=host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tinycrm", description="Tiny CRM server")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.HOST)
    serve_parser.add_argument("--port", type=int, default=settings.PORT)

    adduser_parser = subparsers.add_parser("adduser", help="Create a login")
    adduser_parser.add_argument("username")
    adduser_parser.add_argument("password")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "adduser":
        return asyncio.run(add_user(args.username, args.password))
    if args.command == "serve":
        return serve(args.host, args.port)

    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
