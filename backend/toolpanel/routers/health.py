from datetime import datetime
from fastapi import APIRouter, Depends

from ..core.logging_config import get_logger
from ..core.settings import Settings, get_settings
from ..dependencies import get_file_store
from ..models.health import ComponentStatus, HealthResponse
from ..store import FileStore

router = APIRouter(tags=['health'])
logger = get_logger(__name__)


@router.get('/health', response_model=HealthResponse)
async def get_health(
    settings: Settings = Depends(get_settings),
    store: FileStore = Depends(get_file_store),
) -> HealthResponse:
    logger.info('🚦 health_check starting...')
    components = [
        ComponentStatus(name='api', status='ok', detail='FastAPI responding'),
        ComponentStatus(name='file_store', status='ok', detail=f'{len(store)} records in memory'),
    ]
    response = HealthResponse(
        status='ok',
        version=settings.api_version,
        environment=settings.environment,
        timestamp=datetime.utcnow(),
        file_count=len(store),
        details=components,
    )
    logger.info('✅ 🚦 health_check done.')
    return response
