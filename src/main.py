"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 3000
      or: python -m src.main
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from config.settings import settings
from src.erp_common.database import build_engine, build_session_factory, create_schema
from src.erp_common.errors import AppError, InternalError, ValidationFailedError
from src.erp_common.response import error_response
from src.erp_gateway.api.auth_router import router as auth_router
from src.erp_gateway.api.users_router import router as users_router
from src.erp_gateway.middleware.request_log import RequestLogMiddleware
from src.erp_gateway.user.store import UserStore

logger = logging.getLogger("erp.errors")


def _error_json(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, exc.details)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(status_code=exc.http_status, content=resp.model_dump())


def create_app(database_url: str | None = None) -> FastAPI:
    """Build the app. The engine and UserStore live for the lifespan of the app."""
    url = database_url or settings.DATABASE_URL

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Startup: create engine, schema and store. Shutdown: dispose."""
        engine = build_engine(url, echo=settings.DEBUG)
        await create_schema(engine)
        app.state.user_store = UserStore(build_session_factory(engine))
        yield
        await engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return _error_json(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        fields = sorted({".".join(str(p) for p in err["loc"][1:]) for err in exc.errors()})
        details = f"Invalid fields: {', '.join(f for f in fields if f)}" if fields else None
        return _error_json(request, ValidationFailedError("Invalid request body", details))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return _error_json(request, InternalError())

    app.include_router(auth_router)
    app.include_router(users_router)

    @app.get("/testApi", response_class=PlainTextResponse)
    async def test_api() -> str:
        return "OK!"

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, loop="uvloop")
