import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from common_sense.core.config import Settings, load_settings
from common_sense.core.database import Database
from common_sense.core.errors import CommonSenseError
from common_sense.models.orientation_db.seed_questions import seed_opinion_questions
from common_sense.routes.auth.auth_routers import auth_router
from common_sense.routes.community.community_routers import community_router
from common_sense.routes.dm.dm_routers import dm_router
from common_sense.routes.match.match_routers import match_router
from common_sense.routes.messages.message_routers import message_router
from common_sense.routes.preferences.preference_routers import preference_router


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO"):
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def _first_issue(exc: RequestValidationError) -> str:
    for error in exc.errors():
        # ValueErrors raised by our own validators carry the readable text
        cause = (error.get("ctx") or {}).get("error")
        if cause is not None:
            return str(cause)
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query"))
        return f"{location}: {error.get('msg')}" if location else error.get("msg", "Invalid input provided.")
    return "Invalid input provided."


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(CommonSenseError)
    async def handle_common_sense_error(request: Request, exc: CommonSenseError):
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": _first_issue(exc)})

    @app.exception_handler(SQLAlchemyError)
    async def handle_storage_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Storage failure while handling %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Something went wrong. Please try again."},
        )


def create_app(settings: Settings = None, database: Database = None) -> FastAPI:
    """Build the API. Settings are validated here, before anything else runs."""
    if settings is None:
        settings = load_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db_handle = database or Database.from_settings(settings)
        if settings.AUTO_CREATE_TABLES:
            db_handle.create_tables()
        if settings.SEED_OPINION_QUESTIONS:
            with db_handle.session() as session:
                seed_opinion_questions(session)
        app.state.database = db_handle
        logger.info("Common Sense API started")
        try:
            yield
        finally:
            # a handle passed in by the caller is closed by the caller
            if database is None:
                db_handle.dispose()
                logger.info("Database connections closed")

    app = FastAPI(title="Common Sense API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(preference_router)
    app.include_router(match_router)
    app.include_router(message_router)
    app.include_router(dm_router)
    app.include_router(community_router)

    @app.get("/", response_class=HTMLResponse)
    async def read_root():
        return """
        <html>
            <head>
                <title>Common Sense</title>
            </head>
            <body>
                <h1>Common Sense API</h1>
                <p>See the API documentation <a href="/docs">here</a>.</p>
            </body>
        </html>
        """

    return app
