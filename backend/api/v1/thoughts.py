"""Thought and reaction endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from services import thoughts as thought_store
from .thought_views import MessageResponse, RequestModel, ThoughtResponse

router = APIRouter(prefix="/thoughts", tags=["thoughts"])


class ThoughtCreateRequest(RequestModel):
    thought_text: str | None = None
    username: str | None = None


class ThoughtUpdateRequest(RequestModel):
    thought_text: str | None = None
    username: str | None = None


class ReactionCreateRequest(RequestModel):
    reaction_body: str | None = None
    username: str | None = None


@router.get("", response_model=list[ThoughtResponse])
async def list_thoughts(session: AsyncSession = Depends(get_db)) -> list[ThoughtResponse]:
    thoughts = await thought_store.list_thoughts(session)
    return [ThoughtResponse.from_thought(thought) for thought in thoughts]


@router.get("/{thought_id}", response_model=ThoughtResponse)
async def get_thought(
    thought_id: str,
    session: AsyncSession = Depends(get_db),
) -> ThoughtResponse:
    thought = await thought_store.get_thought(session, thought_id)
    return ThoughtResponse.from_thought(thought)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ThoughtResponse)
async def create_thought(
    payload: ThoughtCreateRequest | None = None,
    session: AsyncSession = Depends(get_db),
) -> ThoughtResponse:
    """Create a thought and link it to the user with the same username, if any."""
    payload = payload or ThoughtCreateRequest()
    thought = await thought_store.create_thought(
        session,
        thought_text=payload.thought_text,
        username=payload.username,
    )
    return ThoughtResponse.from_thought(thought)


@router.put("/{thought_id}", response_model=ThoughtResponse)
async def update_thought(
    thought_id: str,
    payload: ThoughtUpdateRequest | None = None,
    session: AsyncSession = Depends(get_db),
) -> ThoughtResponse:
    payload = payload or ThoughtUpdateRequest()
    thought = await thought_store.update_thought(
        session,
        thought_id,
        thought_text=payload.thought_text,
        username=payload.username,
    )
    return ThoughtResponse.from_thought(thought)


@router.delete("/{thought_id}", response_model=MessageResponse)
async def delete_thought(
    thought_id: str,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await thought_store.delete_thought(session, thought_id)
    return MessageResponse(message="Thought deleted successfully")


@router.post(
    "/{thought_id}/reactions",
    status_code=status.HTTP_201_CREATED,
    response_model=ThoughtResponse,
)
async def add_reaction(
    thought_id: str,
    payload: ReactionCreateRequest | None = None,
    session: AsyncSession = Depends(get_db),
) -> ThoughtResponse:
    payload = payload or ReactionCreateRequest()
    thought = await thought_store.add_reaction(
        session,
        thought_id,
        reaction_body=payload.reaction_body,
        username=payload.username,
    )
    return ThoughtResponse.from_thought(thought)


@router.delete("/{thought_id}/reactions/{reaction_id}", response_model=MessageResponse)
async def remove_reaction(
    thought_id: str,
    reaction_id: str,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await thought_store.remove_reaction(session, thought_id, reaction_id)
    return MessageResponse(message="Reaction deleted successfully")
