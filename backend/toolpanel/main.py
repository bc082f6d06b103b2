import uvicorn
from fastapi import FastAPI

from .core.logging_config import configure_logging, get_logger
from .core.settings import get_settings
from .routers import compress, convert, files, health
from .store import FileStore

configure_logging(get_settings().log_level)
logger = get_logger(__name__)


def create_app() -> FastAPI:
    logger.info('🧱 app_factory starting...')
    settings = get_settings()
    application = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        docs_url='/docs',
        redoc_url='/redoc',
    )
    application.state.file_store = FileStore()
    application.include_router(health.router)
    application.include_router(convert.router)
    application.include_router(compress.router)
    application.include_router(files.router)

    @application.on_event('shutdown')
    async def on_shutdown() -> None:
        logger.info('🛬 shutdown starting...')
        store: FileStore | None = getattr(application.state, 'file_store', None)
        if store is not None:
            store.clear()
        logger.info('✅ 🛬 shutdown done.')

    logger.info('✅ 🧱 app_factory done.')
    return application


app = create_app()


def run() -> None:
    """Serve the app with uvicorn using host and port from settings."""
    settings = get_settings()
    uvicorn.run('backend.toolpanel.main:app', host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == '__main__':
    run()
