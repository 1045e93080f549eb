from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from auth_service.libs.result import Error
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error on {request.url.path}: {exc.base_error.code}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def handle_store_error(request: Request, exc: SQLAlchemyError):
    # Not retried; surfaces as a 5xx
    logger.error(f"Store error on {request.url.path}: {type(exc).__name__}: {exc}")
    error = ServerError(Error("INFRASTRUCTURE_ERROR", type(exc).__name__))
    return JSONResponse(status_code=error.status_code, content=error.to_response())


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Auth Service", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from auth_service.api.routes import auth, sessions

    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(sessions.router, tags=["Sessions"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(SQLAlchemyError, handle_store_error)

    return app
