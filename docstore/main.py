"""Entry point for the document store service."""

import time
import uuid
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from docstore.config import DOCSTORE_HOST, DOCSTORE_PORT
from docstore.context import StorageContext, create_storage_context
from docstore.exceptions import (
    BlobNotFoundError,
    DocStoreException,
    FileRecordNotFoundError,
    FolderNotFoundError,
    ForbiddenError,
    InternalInconsistencyError,
    InvalidInputError,
    UploadTooLargeError,
)
from docstore.routes.audit_routes import router as audit_router
from docstore.routes.file_routes import router as file_router
from docstore.routes.folder_routes import router as folder_router
from docstore.schemas.common import ErrorResponse

logger = setup_logging('docstore')


def _error_response(status_code: int, exc: Exception, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(detail=str(exc), code=code).model_dump())


def _register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        request_id = getattr(request.state, 'request_id', 'unknown')
        logger.warning(f"Invalid input: {exc} [request_id={request_id}] path={request.url.path}")
        return _error_response(status.HTTP_400_BAD_REQUEST, exc, "INVALID_INPUT")

    @app.exception_handler(UploadTooLargeError)
    async def upload_too_large_handler(request: Request, exc: UploadTooLargeError):
        request_id = getattr(request.state, 'request_id', 'unknown')
        logger.warning(f"Upload too large: {exc} [request_id={request_id}] path={request.url.path}")
        return _error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, exc, "UPLOAD_TOO_LARGE")

    @app.exception_handler(FolderNotFoundError)
    async def folder_not_found_handler(request: Request, exc: FolderNotFoundError):
        request_id = getattr(request.state, 'request_id', 'unknown')
        logger.warning(f"Folder not found: {exc} [request_id={request_id}] path={request.url.path}")
        return _error_response(status.HTTP_404_NOT_FOUND, exc, "FOLDER_NOT_FOUND")

    @app.exception_handler(FileRecordNotFoundError)
    async def file_not_found_handler(request: Request, exc: FileRecordNotFoundError):
        request_id = getattr(request.state, 'request_id', 'unknown')
        logger.warning(f"File not found: {exc} [request_id={request_id}] path={request.url.path}")
        return _error_response(status.HTTP_404_NOT_FOUND, exc, "FILE_NOT_FOUND")

    @app.exception_handler(BlobNotFoundError)
    async def blob_not_found_handler(request: Request, exc: BlobNotFoundError):
        request_id = getattr(request.state, 'request_id', 'unknown')
        logger.warning(f"Blob not found: {exc} [request_id={request_id}] path={request.url.path}")
        return _error_response(status.HTTP_404_NOT_FOUND, exc, "FILE_NOT_FOUND")

    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(request: Request, exc: ForbiddenError):
        request_id = getattr(request.state, 'request_id', 'unknown')
        logger.warning(f"Forbidden: {exc} [request_id={request_id}] path={request.url.path}")
        return _error_response(status.HTTP_403_FORBIDDEN, exc, "FORBIDDEN")

    @app.exception_handler(InternalInconsistencyError)
    async def inconsistency_handler(request: Request, exc: InternalInconsistencyError):
        request_id = getattr(request.state, 'request_id', 'unknown')
        logger.error(
            f"INTERNAL INCONSISTENCY: {exc} [request_id={request_id}] path={request.url.path}",
            exc_info=True
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc, "INTERNAL_INCONSISTENCY")

    @app.exception_handler(DocStoreException)
    async def docstore_exception_handler(request: Request, exc: DocStoreException):
        request_id = getattr(request.state, 'request_id', 'unknown')
        logger.error(
            f"Document store exception: {exc} [request_id={request_id}] path={request.url.path}",
            exc_info=True
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc, "INTERNAL_ERROR")


def create_app(context: Optional[StorageContext] = None) -> FastAPI:
    """
    Build the FastAPI application around a storage context.

    When no context is given, one is created from the environment at startup.
    """
    app = FastAPI(
        title="Portal Document Store",
        description="Folder tree, file storage and audit trail for the staff portal",
        version="1.0.0"
    )
    app.state.storage = context

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """
        Middleware to log all HTTP requests and responses.
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        actor_email = request.headers.get("x-actor-email")

        logger.info(
            f"Request started: {request.method} {request.url.path} "
            f"[request_id={request_id}] [actor={actor_email or 'anonymous'}]"
        )

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
        )

        response.headers["X-Request-ID"] = request_id
        return response

    @app.on_event("startup")
    async def startup_event():
        """
        Build the storage context if the bootstrap did not supply one.
        """
        logger.info("Document store starting up...")
        if app.state.storage is None:
            app.state.storage = create_storage_context()
        logger.info("Storage ready")

    _register_exception_handlers(app)

    app.include_router(folder_router)
    app.include_router(file_router)
    app.include_router(audit_router)

    @app.get("/")
    async def root():
        """
        Root endpoint for health check.
        """
        return {"message": "Portal Document Store API", "status": "running"}

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint. Returns 200 if service is alive.
        """
        return {"status": "healthy", "service": "docstore"}

    return app


app = create_app()


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "docstore.main:app",
        host=DOCSTORE_HOST,
        port=DOCSTORE_PORT,
    )


if __name__ == "__main__":
    main()
