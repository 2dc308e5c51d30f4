import logging
from typing import Optional

from core.config import Config
from core.errors import describe_error
from utils.retry_http import Ok, RetryingClient, TransportError

logger = logging.getLogger(__name__)


def cover_art_url(album_id: str, base_url: Optional[str] = None) -> str:
    base = (base_url or Config.COVER_ART_BASE_URL).rstrip("/")
    return f"{base}/release/{album_id}/front"


async def get_album_art(
    album_id: str,
    client: Optional[RetryingClient] = None,
    base_url: Optional[str] = None,
) -> Optional[str]:
    """
    Resolve the front cover image URL of a release.

    Returns the image URL (or the redirect target pointing at it),
    or None when the archive has no art or the lookup failed.
    Request failures are logged, never raised.
    """
    endpoint = cover_art_url(album_id, base_url)

    if client is None:
        async with RetryingClient() as own_client:
            return await _resolve(album_id, endpoint, own_client)

    return await _resolve(album_id, endpoint, client)


async def _resolve(album_id: str, endpoint: str, client: RetryingClient) -> Optional[str]:
    try:
        outcome = await client.fetch(endpoint, follow_redirects=False)
    except Exception as e:
        logger.error(f"Error retrieving cover art: {describe_error(e)}")
        return None

    if isinstance(outcome, Ok):
        response = outcome.response
        # 200: the image itself, report where it was served from
        if response.status_code == 200:
            return str(response.url)
        if response.status_code == 307:
            return response.headers.get("location") or None
        return None

    if isinstance(outcome, TransportError):
        if outcome.status_code == 307:
            return outcome.location
        if outcome.status_code == 404:
            logger.error(f"No album art found for album ID: {album_id}")
            return None

    logger.error(f"Error retrieving cover art: {describe_error(outcome)}")
    return None
