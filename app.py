import os
import logging

import uvicorn

from api.main import create_app


def main() -> None:
    """
    Canonical entrypoint for the CoverArt service.

    Responsibilities:
    - load runtime config from env
    - create FastAPI app
    - start ASGI server
    """

    host = os.getenv("COVERART_HOST", "127.0.0.1")
    port = int(os.getenv("COVERART_PORT", "8000"))
    log_level = os.getenv("COVERART_LOG_LEVEL", "info")

    logging.basicConfig(
        level=log_level.upper(),
        format="[COVERART] %(asctime)s | %(levelname)s | %(message)s",
    )

    app = create_app(host=host, port=port)

    logging.info("Starting FastAPI backend...")
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=log_level,
        access_log=False,
    )


if __name__ == "__main__":
    main()
