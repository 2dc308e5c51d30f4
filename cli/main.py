import argparse
import asyncio
import logging
import sys

from core.cover_art import get_album_art
from utils.retry_http import RetryingClient, RetryPolicy
from cli.summary import render_result


# -------------------------
# Lookup
# -------------------------

async def lookup(album_id: str, base_url: str | None, retries: int | None) -> str | None:
    policy = RetryPolicy(max_retries=retries) if retries is not None else None

    async with RetryingClient(policy=policy) as client:
        return await get_album_art(album_id, client=client, base_url=base_url)


# -------------------------
# CLI entry
# -------------------------

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="coverart",
        description="Resolve the front cover image URL of a release",
    )
    parser.add_argument("album_id", help="Release identifier (MusicBrainz MBID)")

    parser.add_argument("--verbose", action="store_true", help="Show request and retry logs")
    parser.add_argument("--base-url", help="Cover art archive base URL")
    parser.add_argument("--retries", type=int, help="Retries on 429/5xx (default: 3)")

    args = parser.parse_args(argv)

    if args.retries is not None and args.retries < 0:
        parser.error("--retries must be >= 0")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s | %(message)s",
    )
    if not args.verbose:
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)

    url = asyncio.run(lookup(args.album_id, args.base_url, args.retries))

    render_result(args.album_id, url)

    if url is None:
        sys.exit(1)


if __name__ == "__main__":
    main()
