from fastapi import APIRouter

from core.config import Config
from api.models import ConfigResponse

router = APIRouter(prefix="/config", tags=["config"])

@router.get("", response_model=ConfigResponse)
def get_config():
    return ConfigResponse(
        cover_art_base_url=Config.COVER_ART_BASE_URL,
        max_retries=Config.MAX_RETRIES,
        retry_delay_ms=Config.RETRY_DELAY_MS,
        request_timeout=Config.REQUEST_TIMEOUT,
    )
