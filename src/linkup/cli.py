"""Command line entry point.

Run with: linkup serve | linkup init-db
"""

import argparse
import asyncio
import logging
import sys

import uvicorn

from linkup.config import settings


def setup_logging(level: str | None = None) -> None:
    """Configure logging for the service."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def init_db() -> None:
    """Create all tables that do not exist yet."""
    from linkup.database import engine
    from linkup.models import Base

    logger = logging.getLogger(__name__)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    logger.info("Database tables created")


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run the requested command."""
    parser = argparse.ArgumentParser(prog="linkup", description="LinkUp API service")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=3000)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("init-db", help="Create database tables")

    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    if args.command == "init-db":
        asyncio.run(init_db())
        return 0

    uvicorn.run(
        "linkup.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
