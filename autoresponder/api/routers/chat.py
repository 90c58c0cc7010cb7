"""Chat router: post and list community messages, moderate users, manage chat settings."""

import logging
import os
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from autoresponder.api.dependencies import get_session
from autoresponder.api.schemas.chat import (
    ChatSettingsSchema,
    ChatSettingsUpdateRequest,
    MessageCreateRequest,
    MessageSchema,
    ModerationRequest,
    ModerationResponse,
    SendMessageResponse,
    UserStatusSchema,
)
from autoresponder.core.exceptions import ProjectError
from autoresponder.services.chat_service import BANNED, DEFAULT_CHAT_ID, MUTED, ChatService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chat", tags=["chat"])
limiter = Limiter(key_func=get_remote_address)

_CHAT_RATE_LIMIT = os.environ.get("CHAT_RATE_LIMIT", "30/minute")


@router.get("/messages", response_model=List[MessageSchema])
async def list_messages(
    chat_id: str = DEFAULT_CHAT_ID,
    limit: int = 100,
    session: AsyncSession = Depends(get_session),
):
    svc = ChatService(session)
    messages = await svc.list_messages(chat_id, limit=max(1, min(limit, 500)))
    return [MessageSchema.model_validate(m) for m in messages]


@router.post("/messages", response_model=SendMessageResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(_CHAT_RATE_LIMIT)
async def send_message(
    request: Request,
    body: MessageCreateRequest,
    session: AsyncSession = Depends(get_session),
):
    """Post a message; the response carries the bot reply when a rule answered it."""
    svc = ChatService(session)
    try:
        result = await svc.send_message(
            body.sender_id,
            body.sender_name,
            body.text,
            sender_role=body.sender_role,
            chat_id=body.chat_id,
        )
    except ProjectError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message) from exc

    return SendMessageResponse(
        message=MessageSchema.model_validate(result.message),
        reply=MessageSchema.model_validate(result.reply) if result.reply is not None else None,
        reason=result.response.reason if result.response is not None else None,
    )


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    message_id: UUID,
    session: AsyncSession = Depends(get_session),
):
    svc = ChatService(session)
    try:
        await svc.delete_message(message_id)
    except ProjectError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message) from exc


@router.get("/settings", response_model=ChatSettingsSchema)
async def get_settings(session: AsyncSession = Depends(get_session)):
    settings = await ChatService(session).get_settings()
    return ChatSettingsSchema(**settings.to_dict())


@router.put("/settings", response_model=ChatSettingsSchema)
async def update_settings(
    body: ChatSettingsUpdateRequest,
    session: AsyncSession = Depends(get_session),
):
    settings = await ChatService(session).update_settings(body.model_dump(exclude_none=True))
    return ChatSettingsSchema(**settings.to_dict())


@router.get("/users/restricted", response_model=List[UserStatusSchema])
async def list_restricted_users(session: AsyncSession = Depends(get_session)):
    users = await ChatService(session).list_restricted_users()
    return [UserStatusSchema.model_validate(u) for u in users]


@router.post("/users/{user_id}/mute", response_model=ModerationResponse)
async def mute_user(
    user_id: str,
    body: ModerationRequest,
    session: AsyncSession = Depends(get_session),
):
    svc = ChatService(session)
    try:
        notice = await svc.mute_user(user_id, body.user_name, chat_id=body.chat_id)
    except ProjectError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message) from exc
    return ModerationResponse(user_id=user_id, status=MUTED, notice=MessageSchema.model_validate(notice))


@router.post("/users/{user_id}/ban", response_model=ModerationResponse)
async def ban_user(
    user_id: str,
    body: ModerationRequest,
    session: AsyncSession = Depends(get_session),
):
    svc = ChatService(session)
    try:
        notice = await svc.ban_user(user_id, body.user_name, chat_id=body.chat_id)
    except ProjectError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message) from exc
    return ModerationResponse(user_id=user_id, status=BANNED, notice=MessageSchema.model_validate(notice))


@router.delete("/users/{user_id}/restriction", status_code=status.HTTP_204_NO_CONTENT)
async def lift_restriction(
    user_id: str,
    session: AsyncSession = Depends(get_session),
):
    svc = ChatService(session)
    try:
        await svc.lift_restriction(user_id)
    except ProjectError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message) from exc
