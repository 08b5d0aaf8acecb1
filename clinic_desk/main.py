import logging
import logging.config

import uvicorn
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from clinic_desk.api.api_router import router
from clinic_desk.core.config import settings
from clinic_desk.helpers.exception_handler import CustomException, http_exception_handler

logging.config.fileConfig(settings.LOGGING_CONFIG_FILE, disable_existing_loggers=False)
logger = logging.getLogger(__name__)


def get_application() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME, docs_url="/docs", redoc_url='/re-docs',
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        description='''
        Clinic desk for admins and doctors
            - Medicine inventory with pack/unit conversion
            - Prescribing with stock and duplicate checks
            - Patient reports, revenue and monthly expenses
        '''
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(router, prefix=settings.API_PREFIX)
    application.add_exception_handler(CustomException, http_exception_handler)

    @application.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "services": {
                "clinic_api": settings.CLINIC_API_URL,
            }
        }

    for route in application.routes:
        path = getattr(route, 'path', None)
        methods = getattr(route, 'methods', None)
        logger.debug(f"Route: {path} {methods}")

    return application


app = get_application()
if __name__ == '__main__':
    uvicorn.run(app, host="0.0.0.0", port=8000)
