#!/usr/bin/env python3
"""
Command-line interface for the tinylinks store.

Works directly on the JSON snapshot file, so it can be used while the
server is stopped. Running it against the file of a live server races with
the server's own writes.

Usage:
    python tinylinks_cli.py shorten <url> [--custom-code CODE]
    python tinylinks_cli.py list
    python tinylinks_cli.py get <short_code>
    python tinylinks_cli.py delete <short_code>
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add repository root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from lib.database.json_store import JSONFileStore
from lib.service import URLShortenerService
from lib.shortcode import ShortCodeGenerator
from lib.common.logging_config import setup_logging
from lib.common.url_builder import build_short_url
from lib.exceptions import URLShortenerError


class TinylinksCLI:
    """Command-line interface for the URL store."""

    def __init__(self, data_file: str, base_url: str, verbose: bool = False):
        self.data_file = data_file
        self.base_url = base_url
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.service = None

    async def initialize(self):
        """Open the store and build the service."""
        store = JSONFileStore(path=self.data_file, logger=self.logger.getChild("store"))
        await store.initialize()

        self.service = URLShortenerService(
            store=store,
            short_code_generator=ShortCodeGenerator(default_length=6),
            logger=self.logger,
        )

    async def cleanup(self):
        if self.service:
            await self.service.close()

    def _fail(self, message: str) -> int:
        print(json.dumps({"success": False, "error": message}, indent=2), file=sys.stderr)
        return 1

    async def shorten(self, url: str, custom_code: Optional[str] = None) -> int:
        """Shorten a URL."""
        try:
            result = await self.service.shorten(url, custom_code)
        except URLShortenerError as e:
            return self._fail(str(e))

        print(json.dumps({
            "success": True,
            "code": result.code,
            "shortUrl": build_short_url(result.code, self.base_url),
            "url": result.record.url,
        }, indent=2))
        return 0

    async def list_urls(self) -> int:
        """Print every short URL."""
        records = await self.service.list_all()

        print(json.dumps({
            "success": True,
            "count": len(records),
            "urls": {code: record.to_dict() for code, record in records.items()},
        }, indent=2))
        return 0

    async def get(self, short_code: str) -> int:
        """Show one short URL without counting a visit."""
        record = await self.service.get_record(short_code)

        if record is None:
            return self._fail(f"Short code '{short_code}' not found")

        print(json.dumps({"success": True, "code": short_code, **record.to_dict()}, indent=2))
        return 0

    async def delete(self, short_code: str) -> int:
        """Delete a short URL."""
        try:
            await self.service.delete_code(short_code)
        except URLShortenerError as e:
            return self._fail(str(e))

        print(json.dumps({"success": True, "code": short_code}, indent=2))
        return 0


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="tinylinks CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s shorten https://example.com/long/url
  %(prog)s shorten https://example.com/long/url --custom-code mylink
  %(prog)s list
  %(prog)s get mylink
  %(prog)s delete mylink
        """
    )

    parser.add_argument(
        "--data-file",
        default=os.getenv("DATA_FILE", "urls.json"),
        help="JSON snapshot file (default: from DATA_FILE env or urls.json)"
    )
    parser.add_argument(
        "--base-url",
        default=os.getenv("BASE_URL", "http://localhost:3000"),
        help="Base URL used to print short URLs"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--custom-code", help="Custom short code")

    subparsers.add_parser("list", help="List all short URLs")

    get_parser = subparsers.add_parser("get", help="Show a short URL")
    get_parser.add_argument("short_code", help="Short code to lookup")

    delete_parser = subparsers.add_parser("delete", help="Delete a short URL")
    delete_parser.add_argument("short_code", help="Short code to delete")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    cli = TinylinksCLI(
        data_file=args.data_file,
        base_url=args.base_url,
        verbose=args.verbose,
    )

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url, args.custom_code)
        elif args.command == "list":
            return await cli.list_urls()
        elif args.command == "get":
            return await cli.get(args.short_code)
        elif args.command == "delete":
            return await cli.delete(args.short_code)
        else:
            parser.print_help()
            return 1

    except URLShortenerError as e:
        return cli._fail(str(e))
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
