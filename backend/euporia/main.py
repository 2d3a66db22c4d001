import logging
import sys

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from euporia.config.settings import Settings
from euporia.config.settings import settings as default_settings
from euporia.database.documents import MalformedDocumentError, StoredDocumentError
from euporia.database.engine import build_engine, build_session_factory, init_db
from euporia.middleware.request_logging import log_requests_middleware
from euporia.routes.cart_routes import router as cart_router
from euporia.routes.conversation_routes import router as conversation_router
from euporia.routes.insight_routes import router as insight_router
from euporia.routes.profile_routes import router as profile_router
from euporia.routes.wishlist_routes import router as wishlist_router
from euporia.utils.logger import get_logger


def _configure_logging(settings: Settings) -> None:
    """Set up a structured, human-readable log format for the whole app.

    Format example::

        2026-02-19 10:33:19,123 | INFO     | euporia.database.repositories.wishlist_repository:64 | add — session=abc handle=p1 inserted=True
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(log_level)
    # Avoid duplicate handlers if create_app() is called more than once (e.g. tests)
    if not root.handlers:
        root.addHandler(handler)
    else:
        for h in root.handlers:
            h.setFormatter(formatter)

    # Quiet down noisy third-party loggers unless we're in DEBUG mode
    if log_level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def _register_error_handlers(app: FastAPI) -> None:
    logger = get_logger(__name__)

    @app.exception_handler(RequestValidationError)
    async def malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("%s %s — malformed request: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(MalformedDocumentError)
    async def malformed_document(request: Request, exc: MalformedDocumentError) -> JSONResponse:
        logger.warning("%s %s — document not serializable: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": "Document is not valid JSON"})

    @app.exception_handler(SQLAlchemyError)
    @app.exception_handler(StoredDocumentError)
    async def storage_failure(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "%s %s — storage failure: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"detail": "Internal storage error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    _configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting euporia backend — log_level=%s, db=%s",
        settings.log_level.upper(),
        settings.database_url,
    )

    engine = build_engine(settings.database_url, echo=settings.database_echo)
    init_db(engine)
    logger.info("Database tables verified / created.")

    app = FastAPI(title="Euporia Session Store", version="0.1.0")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests_middleware)
    _register_error_handlers(app)

    @app.get("/health", response_class=PlainTextResponse)
    def health() -> str:
        return "ok"

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "hello from euporia"}

    for router in (profile_router, conversation_router, insight_router, cart_router, wishlist_router):
        app.include_router(router, prefix=settings.api_prefix)
    logger.info("Store routers mounted at %s.", settings.api_prefix)

    return app


def run() -> None:
    import uvicorn

    uvicorn.run(
        "euporia.main:create_app",
        factory=True,
        host=default_settings.host,
        port=default_settings.port,
    )


if __name__ == "__main__":
    run()
