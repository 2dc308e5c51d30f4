import os
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, APIRouter, Request
from fastapi.middleware.cors import CORSMiddleware

from api.models import CoverArtResponse
from api.routes.config import router as config_router
from core.cover_art import get_album_art
from utils.retry_http import RetryingClient


def create_app(
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
    client_factory: Callable[[], RetryingClient] = RetryingClient,
) -> FastAPI:
    # ----------------------------------
    # Config
    # ----------------------------------

    api = APIRouter(prefix="/api")

    allowed_origins = [
        o.strip()
        for o in os.getenv(
            "ALLOWED_ORIGINS",
            f"http://{host}:{port}",
        ).split(",")
    ]

    # ----------------------------------
    # Lifespan (HTTP client ownership)
    # ----------------------------------

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.client = client_factory()
        yield
        await app.state.client.aclose()

    app = FastAPI(
        title="CoverArt API",
        lifespan=lifespan,
    )

    # ----------------------------------
    # Middleware
    # ----------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ----------------------------------
    # Routes
    # ----------------------------------

    @api.get("/health")
    def health():
        return {"status": "ok"}

    @api.get("/release/{album_id}/front", response_model=CoverArtResponse)
    async def front_cover(album_id: str, request: Request):
        url = await get_album_art(album_id, client=request.app.state.client)
        return CoverArtResponse(
            album_id=album_id,
            url=url,
            found=url is not None,
        )

    api.include_router(config_router)
    app.include_router(api)

    return app
