"""Main FastAPI application factory."""
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docbridge.api.endpoints.mongo_endpoints import router as mongo_router
from docbridge.config.settings import API_PREFIX, CORS_ALLOW_ORIGINS
from docbridge.schemas.errors import InvalidRequestError
from docbridge.services.mongodb.client import close_mongodb_client

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="docbridge",
        description="HTTP request/response contracts over the MongoDB driver",
        version="0.1.0",
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(mongo_router, prefix=API_PREFIX, tags=["MongoDB"])

    @app.exception_handler(InvalidRequestError)
    async def invalid_request_handler(request: Request, exc: InvalidRequestError):
        logger.info("Rejected %s payload on %s", exc.model_name, request.url.path)
        return JSONResponse(status_code=422, content=jsonable_encoder(exc.to_dict()))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected payload on %s", request.url.path)
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder({"error": "invalid_request", "detail": exc.errors()}),
        )

    @app.get("/", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    @app.on_event("startup")
    async def startup_event():
        """Startup event handler."""
        logger.info("docbridge is starting up...")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Shutdown event handler."""
        logger.info("docbridge is shutting down...")
        close_mongodb_client()

    return app
