import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import Settings
from app.exceptions.custom import InvalidQueryError
from app.exceptions.handlers import invalid_query_error_handler
from app.routers.gsm import router as gsm_router
from app.services.browser_provisioner import BrowserProvisioner
from app.services.gsmarena import GsmArenaService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("playwright").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    provisioner = BrowserProvisioner(
        settings.environment,
        bundled_executable_path=settings.chromium_executable_path,
        headless=settings.headless,
    )
    # Fail at startup rather than on the first request
    provisioner.launch_config()
    logger.info("Browser provisioned for %s mode", settings.environment)

    service = GsmArenaService(
        provisioner,
        base_url=settings.gsmarena_base_url,
        navigation_timeout_ms=settings.navigation_timeout_ms,
        results_timeout_ms=settings.results_timeout_ms,
        close_timeout=settings.close_timeout_s,
        force_close_timeout=settings.force_close_timeout_s,
    )
    app.state.gsmarena_service = service

    yield

    await service.wait_closed()


app = FastAPI(title="GSM Search", lifespan=lifespan)

app.add_exception_handler(InvalidQueryError, invalid_query_error_handler)

app.include_router(gsm_router)
