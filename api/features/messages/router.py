"""Routers for the Messages feature.

Both prefixes match their whole subtree: anything after the conversation id
segment is ignored, and every path under ``/messages/`` posts a message.
"""
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from core.settings import Settings
from di.container import ApplicationContainer as DependencyContainer
from api.features.messages.controller import MessageController
from api.shared.db import get_db_session
from api.shared.exceptions import MethodNotAllowedError
from api.shared.response import JSONAPIResponse
from api.shared.utils import other_methods, read_body

messages_router = APIRouter()
conversations_router = APIRouter()


@messages_router.post("/{rest:path}")
@inject
async def post_message(
    request: Request,
    rest: str,
    controller: MessageController = Depends(
        Provide[DependencyContainer.controllers.message_controller]
    ),
    settings: Settings = Depends(Provide[DependencyContainer.infrastructure.settings]),
    db_session: AsyncSession = Depends(get_db_session),
):
    body = await read_body(request, timeout=settings.SERVER.READ_TIMEOUT)
    result = await controller.post_message(body=body, db_session=db_session)
    return JSONAPIResponse(result.model_dump())


@messages_router.api_route("/{rest:path}", methods=other_methods("POST"))
async def messages_method_not_allowed(rest: str):
    raise MethodNotAllowedError("POST")


@conversations_router.get("/{tail:path}")
@inject
async def get_conversation(
    tail: str,
    controller: MessageController = Depends(
        Provide[DependencyContainer.controllers.message_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    conversation = await controller.get_conversation(path=tail, db_session=db_session)
    return JSONAPIResponse(conversation.model_dump(mode="json"))


@conversations_router.api_route("/{tail:path}", methods=other_methods("GET"))
async def conversations_method_not_allowed(tail: str):
    raise MethodNotAllowedError("GET")
