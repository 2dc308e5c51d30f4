import httpx

from utils.retry_http import NetworkFailure, TransportError


def describe_error(error) -> str:
    """
    Turn any caught error (or failed request outcome) into a
    single human-readable line.
    """
    if isinstance(error, TransportError):
        error = error.error
    elif isinstance(error, NetworkFailure):
        error = error.cause

    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        status = f"{response.status_code} {response.reason_phrase}".strip()
        return f"HTTP {status} for {error.request.url}"

    if isinstance(error, httpx.TimeoutException):
        return f"Request timed out: {_request_url(error)}"

    if isinstance(error, httpx.RequestError):
        message = str(error) or "no details"
        return (
            f"Network error ({type(error).__name__}): {message} "
            f"for {_request_url(error)}"
        )

    return str(error) or type(error).__name__


def _request_url(error: httpx.RequestError) -> str:
    # .request raises when the error was built without one
    try:
        return str(error.request.url)
    except RuntimeError:
        return "<unknown url>"
