import logging
import sys
import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from api.features.messages import repository
from api.middleware.chain import build_middleware
from api.middleware.tracing import get_request_id
from api.shared.exceptions import ChatAPIException
from api.shared.response import JSONAPIResponse, error_response
from core.logging_config import configure_logging
from core.settings import SETTINGS
from di.container import ApplicationContainer as DependencyContainer

configure_logging(SETTINGS.APP)

logger = structlog.get_logger("chat")


class CustomFastAPI(FastAPI):
    container: DependencyContainer


@asynccontextmanager
async def lifespan(_app: CustomFastAPI):
    logger.info("app.startup.begin")
    start_time = time.time()
    lifecycle = _app.container.infrastructure.lifecycle()
    db_resource = _app.container.infrastructure.database()

    try:
        await db_resource.init()
        await repository.ensure_schema(db_resource.engine)
        logger.info("app.schema.ready", elapsed=round(time.time() - start_time, 3))
    except Exception:
        # Startup errors are fatal: the server refuses to start.
        logger.exception("app.startup.failed")
        await db_resource.shutdown()
        raise

    lifecycle.mark_ready()
    logger.info("app.ready", elapsed=round(time.time() - start_time, 3))

    try:
        yield
    finally:
        lifecycle.begin_drain()
        try:
            await db_resource.shutdown()
        except Exception as e:
            logger.exception("app.shutdown.failed")
            lifecycle.mark_stopped(e)
            raise
        lifecycle.mark_stopped()
        logger.info("app.stopped")


async def chat_exception_handler(request: Request, exc: ChatAPIException):
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "http.error",
        request_id=get_request_id(request),
        status_code=exc.status_code,
        error_code=exc.error_code,
        message=exc.message,
        details=exc.details,
        cause=repr(exc.__cause__) if exc.__cause__ is not None else None,
    )
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


def create_fastapi_app() -> CustomFastAPI:
    _app = CustomFastAPI(
        title="Chat Messages API",
        description="Post chat messages into numbered conversations and read them back",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        default_response_class=JSONAPIResponse,
        middleware=build_middleware(SETTINGS),
    )

    # Initialize dependency container
    _app.container = DependencyContainer()
    _app.container.wire(modules=[sys.modules[__name__]])
    _app.container.init_resources()

    # uvicorn's access log is replaced by AccessLogMiddleware
    logging.getLogger("uvicorn.access").disabled = True

    _app.add_exception_handler(ChatAPIException, chat_exception_handler)
    _app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Include feature routers
    from api.features.health.router import router as health_router
    from api.features.messages.router import conversations_router, messages_router

    _app.include_router(messages_router, prefix="/messages", tags=["Messages"])
    _app.include_router(
        conversations_router, prefix="/conversations", tags=["Conversations"]
    )
    _app.include_router(health_router, tags=["Health"])

    return _app


app = create_fastapi_app()
