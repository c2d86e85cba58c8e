from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from drive_consult.agents import get_consult_agent
from drive_consult.agents.base import ConsultAgent
from drive_consult.api.routes import consult, files
from drive_consult.core.config import Settings, get_settings
from drive_consult.core.credentials import load_google_credentials
from drive_consult.core.errors import ClientInputError, DriveConsultError
from drive_consult.core.logging_config import configure_logging
from drive_consult.services.document_source import DocumentSource, get_document_source

logger = logging.getLogger(__name__)

APP_NAME = "Drive Consult API"
APP_VERSION = "1.0.0"


def _needs_google_credentials(app: FastAPI) -> bool:
    settings = app.state.settings
    if app.state.document_source is None and settings.document_source_mode != "mock":
        return True
    return app.state.consult_agent is None and settings.model_provider != "openai"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the backend clients once; handlers only read them."""
    settings = app.state.settings
    credentials = load_google_credentials(settings) if _needs_google_credentials(app) else None

    if app.state.document_source is None:
        app.state.document_source = get_document_source(settings, credentials)
    if app.state.consult_agent is None:
        app.state.consult_agent = get_consult_agent(settings, credentials)

    logger.info("Server is running on http://localhost:%d", settings.backend_port)
    logger.info("Root folder ID: %s", settings.root_folder_id)
    logger.info("Effective settings: %s", settings.get_effective_settings())
    yield


async def drive_consult_error_handler(request: Request, exc: DriveConsultError):
    logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": ClientInputError.public_message})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": DriveConsultError.public_message})


def create_app(
    settings: Settings | None = None,
    document_source: DocumentSource | None = None,
    consult_agent: ConsultAgent | None = None,
) -> FastAPI:
    """Create the API. Handles that are not passed in are built at startup."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        description="Browse a Drive folder tree and consult Gemini over a folder's documents",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.document_source = document_source
    app.state.consult_agent = consult_agent

    app.add_exception_handler(DriveConsultError, drive_consult_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(files.router, prefix="/api")
    app.include_router(consult.router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "docs": "/docs"
        }

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.backend_port)


if __name__ == "__main__":
    run()
