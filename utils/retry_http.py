import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

import httpx

from core.config import Config

logger = logging.getLogger(__name__)


# =========================
# Retry policy
# =========================

def is_retryable_status(status_code: int) -> bool:
    # Rate limited or server side failure
    return status_code == 429 or status_code >= 500


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


def linear_delay(retry_count: int) -> float:
    """Seconds to wait before the Nth retry (2s, 4s, 6s with the defaults)."""
    return retry_count * Config.RETRY_DELAY_MS / 1000


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = Config.MAX_RETRIES
    retry_condition: Callable[[int], bool] = is_retryable_status
    retry_delay: Callable[[int], float] = linear_delay

    def should_retry(self, status_code: int, retry_count: int) -> bool:
        return retry_count < self.max_retries and self.retry_condition(status_code)

    def delay_for(self, retry_count: int) -> float:
        return self.retry_delay(retry_count)


# =========================
# Request outcomes
# =========================

@dataclass(frozen=True)
class Ok:
    response: httpx.Response

    @property
    def status_code(self) -> int:
        return self.response.status_code


@dataclass(frozen=True)
class TransportError:
    """A response arrived but the client rejected its status."""

    status_code: int
    headers: httpx.Headers
    url: str
    error: httpx.HTTPStatusError

    @property
    def location(self) -> Optional[str]:
        return self.headers.get("location") or None


@dataclass(frozen=True)
class NetworkFailure:
    """No response at all (connection refused, timeout, broken protocol)."""

    cause: Exception


HttpOutcome = Union[Ok, TransportError, NetworkFailure]


# =========================
# Client
# =========================

class RetryingClient:
    """
    Thin wrapper around httpx.AsyncClient that re-issues a GET while
    the policy allows it.

    - Statuses accepted by `validate_status` are returned as-is.
    - Rejected statuses matching the retry condition are retried
      after `policy.delay_for(n)` seconds.
    - Anything else raises httpx.HTTPStatusError carrying the last
      response. Network errors are raised unchanged and never retried.
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        timeout: float = Config.REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        validate_status: Optional[Callable[[int], bool]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.policy = policy or RetryPolicy()
        self.validate_status = validate_status or is_success_status
        self._sleep = sleep
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "RetryingClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, *, follow_redirects: bool = False) -> httpx.Response:
        retry_count = 0

        while True:
            response = await self._client.get(url, follow_redirects=follow_redirects)

            if self.validate_status(response.status_code):
                return response

            if not self.policy.should_retry(response.status_code, retry_count):
                raise httpx.HTTPStatusError(
                    f"Request failed with status code {response.status_code}",
                    request=response.request,
                    response=response,
                )

            retry_count += 1
            delay = self.policy.delay_for(retry_count)
            logger.debug(
                f"GET {url} returned {response.status_code}, "
                f"retry {retry_count}/{self.policy.max_retries} in {delay:.1f}s"
            )
            await self._sleep(delay)

    async def fetch(self, url: str, *, follow_redirects: bool = False) -> HttpOutcome:
        try:
            response = await self.get(url, follow_redirects=follow_redirects)
        except httpx.HTTPStatusError as e:
            return TransportError(
                status_code=e.response.status_code,
                headers=e.response.headers,
                url=str(e.request.url),
                error=e,
            )
        except httpx.RequestError as e:
            return NetworkFailure(cause=e)

        return Ok(response)
