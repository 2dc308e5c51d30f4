import os


def _env_number(name: str, default, cast=int):
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise RuntimeError(
            f"{name} must be a number, got {raw!r}. "
            "Please fix it in your environment or .env file."
        )


class Config:

    DEFAULT_COVER_ART_BASE_URL = "http://coverartarchive.org"

    COVER_ART_BASE_URL = os.getenv(
        "COVERART_BASE_URL", DEFAULT_COVER_ART_BASE_URL
    ).rstrip("/")

    MAX_RETRIES = _env_number("COVERART_MAX_RETRIES", 3)
    RETRY_DELAY_MS = _env_number("COVERART_RETRY_DELAY_MS", 2000)
    REQUEST_TIMEOUT = _env_number("COVERART_TIMEOUT", 10, cast=float)
