from pydantic import BaseModel, Field
from typing import Optional


class CoverArtResponse(BaseModel):
    album_id: str
    url: Optional[str] = Field(
        default=None,
        description="Front cover image URL, or null when none was found"
    )
    found: bool = False


class ConfigResponse(BaseModel):
    cover_art_base_url: str
    max_retries: int
    retry_delay_ms: int
    request_timeout: float
