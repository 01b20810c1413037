import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path

import asyncpg
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

import core
from auth import router as auth_router
from cohorts import router as cohorts_router
from core import config
from core.db import Database
from core.errors import register_error_handlers
from core.log import configure_logging, log_requests
from students import router as students_router
from users import router as users_router

# Shipped as package data of `core` so installed copies find them too.
WEB_DIR = Path(core.__file__).resolve().parent

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.db
    # A dead store must not keep the API from starting; requests fail with 503 instead.
    try:
        await database.connect()
        logger.info('Connected to database "%s"', database.name)
    except (OSError, asyncio.TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
        logger.error("Error connecting to database: %s", exc)
    try:
        yield
    finally:
        await database.close()


def create_app(database: Database | None = None) -> FastAPI:
    # /docs is the hand-written API page; the generated explorer lives elsewhere.
    app = FastAPI(
        title="cohort-tools-api",
        lifespan=lifespan,
        docs_url="/swagger",
        redoc_url=None,
    )
    app.state.db = database or Database(config.database_url())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)
    register_error_handlers(app)

    app.include_router(students_router.router, tags=["students"])
    app.include_router(cohorts_router.router, tags=["cohorts"])
    app.include_router(users_router.router, tags=["users"])
    app.include_router(auth_router.router, tags=["auth"])

    @app.get("/docs", include_in_schema=False)
    def docs() -> FileResponse:
        return FileResponse(WEB_DIR / "views" / "docs.html", media_type="text/html")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    app.mount("/static", StaticFiles(directory=WEB_DIR / "public"), name="static")
    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    logger.info("Server listening on port %s", config.port())
    uvicorn.run(app, host="0.0.0.0", port=config.port())
