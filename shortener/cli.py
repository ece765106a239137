"""
Command-line interface for the content shortener.

Usage:
    content-shortener shorten "some text"
    content-shortener shorten --file snippet.ts
    cat snippet.ts | content-shortener shorten
    content-shortener get <id or share link>
    content-shortener health
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from .addresser import ContentAddresser
from .errors import ShortenError
from .service import ShortenService, DEFAULT_KEY_PREFIX, DEFAULT_MAX_PAYLOAD_BYTES
from .store import create_store
from .common.logging_config import setup_logging
from .common.url_builder import build_share_url, extract_identifier


class ShortenerCLI:
    """Command-line interface for the content shortener."""

    def __init__(
        self,
        service: ShortenService,
        base_url: str = "http://localhost:9200",
        path_prefix: str = "/s",
    ):
        self.service = service
        self.base_url = base_url
        self.path_prefix = path_prefix

    @staticmethod
    def _fail(message: str) -> int:
        print(json.dumps({"success": False, "error": message}, indent=2), file=sys.stderr)
        return 1

    async def shorten(self, text: Optional[str] = None, file_path: Optional[str] = None) -> int:
        """Shorten text, a file's contents, or stdin."""
        try:
            if file_path:
                with open(file_path, "rb") as f:
                    payload = f.read()
            elif text is not None:
                payload = text
            else:
                payload = sys.stdin.buffer.read()
        except OSError as e:
            return self._fail(f"Cannot read input: {e}")

        try:
            identifier = await self.service.shorten(payload)
        except ShortenError as e:
            return self._fail(str(e))

        print(json.dumps({
            "success": True,
            "id": identifier,
            "url": build_share_url(identifier, self.base_url, self.path_prefix),
        }, indent=2))
        return 0

    async def get(self, value: str) -> int:
        """Print the payload for an identifier or share link."""
        identifier = extract_identifier(value)

        try:
            data = await self.service.retrieve_bytes(identifier)
        except ShortenError as e:
            return self._fail(f"'{identifier}': {e}")

        sys.stdout.buffer.write(data)
        sys.stdout.flush()
        return 0

    async def health(self) -> int:
        """Check backing store health."""
        health_status = await self.service.health_check()
        print(json.dumps({"success": True, "health": health_status}, indent=2))
        return 0 if health_status["overall"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Content Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten text
  %(prog)s shorten "hello world"

  # Shorten a file
  %(prog)s shorten --file snippet.ts

  # Get content back
  %(prog)s get b94d27b9934d

  # Check health
  %(prog)s health
        """
    )

    parser.add_argument(
        "--backend",
        default=os.getenv("STORE_BACKEND", "auto"),
        choices=["auto", "redis"],
        help="Store backend (default: from STORE_BACKEND env or auto, which needs a Redis URL)"
    )
    parser.add_argument(
        "--redis-url",
        default=os.getenv("REDIS_URL"),
        help="Redis connection URL (default: from REDIS_URL env)"
    )
    parser.add_argument(
        "--key-prefix",
        default=os.getenv("KEY_PREFIX", DEFAULT_KEY_PREFIX),
        help=f"Namespace prefix (default: from KEY_PREFIX env or {DEFAULT_KEY_PREFIX})"
    )
    parser.add_argument(
        "--identifier-length",
        type=int,
        default=int(os.getenv("IDENTIFIER_LENGTH", "12")),
        help="Hex characters kept as the identifier (default: from IDENTIFIER_LENGTH env or 12)"
    )
    parser.add_argument(
        "--max-bytes",
        type=int,
        default=int(os.getenv("MAX_PAYLOAD_BYTES", str(DEFAULT_MAX_PAYLOAD_BYTES))),
        help="Largest accepted payload (default: from MAX_PAYLOAD_BYTES env)"
    )
    parser.add_argument(
        "--base-url",
        default=os.getenv("BASE_URL", "http://localhost:9200"),
        help="Base URL for share links"
    )
    parser.add_argument(
        "--path-prefix",
        default=os.getenv("PATH_PREFIX", "/s"),
        help="Path prefix for share links"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Store content")
    shorten_parser.add_argument("text", nargs="?", help="Text to store (stdin if omitted)")
    shorten_parser.add_argument("--file", help="Read content from a file")

    get_parser = subparsers.add_parser("get", help="Print stored content")
    get_parser.add_argument("identifier", help="Identifier or share link")

    subparsers.add_parser("health", help="Check backing store health")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logger = setup_logging(level="DEBUG" if args.verbose else "WARNING")

    # Each CLI run is its own process, so an in-memory store would drop
    # every entry on exit.
    backend = args.backend
    if backend == "auto":
        backend = "redis" if args.redis_url else "memory"
    if backend == "memory":
        return ShortenerCLI._fail(
            "The CLI needs a durable store: set REDIS_URL or pass --redis-url"
        )

    try:
        store = await create_store(backend, args.redis_url, logger)
    except Exception as e:
        return ShortenerCLI._fail(f"Cannot open store: {e}")

    service = ShortenService(
        store=store,
        addresser=ContentAddresser(args.identifier_length),
        key_prefix=args.key_prefix,
        max_payload_bytes=args.max_bytes,
        logger=logger,
    )
    cli = ShortenerCLI(service, base_url=args.base_url, path_prefix=args.path_prefix)

    try:
        if args.command == "shorten":
            return await cli.shorten(args.text, args.file)
        elif args.command == "get":
            return await cli.get(args.identifier)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1
    finally:
        await service.close()


def run():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
