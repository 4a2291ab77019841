import logging
import sys
import time
from contextlib import asynccontextmanager

import structlog
from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request

from api.shared.entities.registry import BaseEntity
from core.settings import SETTINGS
from di.container import ApplicationContainer as DependencyContainer


def configure_logging() -> None:
    logging.basicConfig(
        level=SETTINGS.APP.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
            if SETTINGS.APP.JSON_LOGS
            else structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


configure_logging()

logger = logging.getLogger("supportchat")


class CustomFastAPI(FastAPI):
    container: DependencyContainer


@asynccontextmanager
async def lifespan(_app: CustomFastAPI):
    logger.info("Starting application initialization...")
    start_time = time.time()

    try:
        logger.info("Initializing database connection...")
        db_start = time.time()
        db_resource = _app.container.infrastructure.database()
        await db_resource.init()
        await db_resource.create_schema(BaseEntity.metadata)
        async with db_resource.engine.connect() as _conn:
            # Verify database connection
            await _conn.execute(text("SELECT 1"))
        logger.info(
            f"✅ Database ready at {db_resource.database_url} in {time.time() - db_start:.2f}s"
        )

        reply_generator = _app.container.services.reply_generator()
        if not reply_generator.is_configured:
            logger.warning(
                "⚠️  OPENAI_API_KEY not set. Chat replies will fail until it is configured."
            )

        logger.info(
            f"✅ Application startup completed in {time.time() - start_time:.2f}s"
        )
    except Exception as e:
        logger.exception(f"❌ Failed to initialize application: {str(e)}")
        raise

    yield

    try:
        db_resource = _app.container.infrastructure.database()
        if db_resource:
            await db_resource.shutdown()
        logger.info("Application shutdown complete")
    except Exception:
        logger.exception("Error during shutdown")


probes = APIRouter()


@probes.get("/")
async def root():
    return {"message": "Support chat API is running", "status": "ok"}


@probes.get("/health")
async def health():
    return {"status": "ok"}


@probes.get("/ready")
async def ready():
    return {"status": "ok"}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        return JSONResponse(status_code=exc.status_code, content=exc.detail)
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "detail": f"{exc.detail} : {request.url}",
                "status_code": 404,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "status_code": exc.status_code},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid input", "details": details},
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "Something went wrong",
        },
    )


def create_fastapi_app() -> CustomFastAPI:
    _app = CustomFastAPI(
        title="Support Chat API",
        description="Customer support chat relay for SpurStore",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Initialize dependency container
    _app.container = DependencyContainer()

    _app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    _app.add_exception_handler(RequestValidationError, validation_exception_handler)
    _app.add_exception_handler(Exception, general_exception_handler)

    # Same chat contract for the standalone backend and the serverless front-end
    from api.features.chat.router import router as chat_router

    _app.include_router(probes, tags=["Health"])
    _app.include_router(chat_router, prefix="/chat", tags=["Chat"])
    _app.include_router(chat_router, prefix="/api/chat", tags=["Chat"])

    return _app


app = create_fastapi_app()
