"""Message Routes — public listing and submission, owner/admin edit and delete.

Invariants:
    - Listing never includes submitterToken
    - POST answers 201 with the capability token; it is not retrievable later
    - PUT/DELETE require an admin bearer token or x-submitter-token (else 401)
    - All authorization and validation happens inside MessageStore

Design Decisions:
    - page/limit taken as raw strings: non-numeric values fall back to defaults
      instead of failing the request
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from guestbook.api.dependencies import resolve_actor
from guestbook.core.authorization import Actor
from guestbook.core.domain_types import MessageId
from guestbook.infrastructure.message_store import MessageStore, get_message_store
from guestbook.schemas.message import (
    MessageCreate, MessageCreated, MessageDeleted, MessageList,
    MessagePublic, MessageUpdate, MessageUpdated, Pagination,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.get("", response_model=MessageList, response_model_exclude_none=True)
async def list_messages(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    store: MessageStore = Depends(get_message_store),
):
    """List messages newest-first with pagination."""
    items, info = await store.list_messages(page, limit)
    return MessageList(
        messages=[MessagePublic.model_validate(item) for item in items],
        pagination=Pagination.model_validate(info.to_response()),
    )


@router.post(
    "", response_model=MessageCreated, response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_message(
    body: MessageCreate, store: MessageStore = Depends(get_message_store),
):
    """Post a message. The response carries the owner token exactly once."""
    message, token = await store.append(body.name, body.message)
    return MessageCreated.model_validate({**message.to_public(), "token": token})


@router.put(
    "/{message_id}", response_model=MessageUpdated,
    response_model_exclude_none=True,
)
async def update_message(
    message_id: int,
    body: MessageUpdate,
    actor: Actor = Depends(resolve_actor),
    store: MessageStore = Depends(get_message_store),
):
    message = await store.update(MessageId(message_id), body.message, actor)
    return MessageUpdated(message=MessagePublic.model_validate(message.to_public()))


@router.delete("/{message_id}", response_model=MessageDeleted)
async def delete_message(
    message_id: int,
    actor: Actor = Depends(resolve_actor),
    store: MessageStore = Depends(get_message_store),
):
    await store.remove(MessageId(message_id), actor)
    return MessageDeleted()
