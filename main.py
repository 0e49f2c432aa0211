import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

import config

# Routers
from routers.demo import router as demo_router
from routers.forms import router as forms_router
from routers.github import router as github_router
from routers.health import router as health_router
from routers.responses import router as responses_router
from storage.base import Storage, StorageError
from storage.factory import select_storage

logger = logging.getLogger("formcraft")
logging.basicConfig(level=config.LOG_LEVEL)


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # malformed bodies/queries are client errors: 400, not FastAPI's default 422
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(
        "storage failure on %s %s: %s", request.method, request.url.path, exc, exc_info=exc
    )
    return JSONResponse(status_code=500, content={"detail": "Storage backend error"})


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    app = FastAPI(title="FormCraft API")

    # chosen once; handlers get it through deps.storage.get_storage
    app.state.storage = storage if storage is not None else select_storage()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials="*" not in config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(StorageError, _storage_error)

    # Register routers under the common prefix
    prefix = config.API_PREFIX
    app.include_router(demo_router, prefix=prefix)  # /ping, /demo
    app.include_router(forms_router, prefix=prefix)  # /forms/...
    app.include_router(responses_router, prefix=prefix)  # /responses/...
    app.include_router(health_router, prefix=prefix)  # /health/...
    app.include_router(github_router, prefix=prefix)  # /github/analyze

    # Production: serve the built SPA from the same process
    static_dir = Path(config.STATIC_DIR)
    if config.APP_ENV == "production" and static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="spa")
        logger.info("Serving static files from %s", static_dir)

    logger.info("FormCraft ready with %s storage", app.state.storage.backend)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT, reload=False)
