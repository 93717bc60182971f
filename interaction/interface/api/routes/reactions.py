"""Reaction routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, Response, status
from pydantic import BaseModel

from interaction.application.usecase.reaction import (
    BrowseReactionsRequest,
    BrowseReactionsResponse,
    BrowseReactionsUseCase,
    GetReactionSummaryRequest,
    GetReactionSummaryUseCase,
    GetUserReactionRequest,
    GetUserReactionResponse,
    GetUserReactionUseCase,
    ListReactionTypesResponse,
    ListReactionTypesUseCase,
    ReactionSummaryResponse,
    RemoveReactionRequest,
    RemoveReactionResponse,
    RemoveReactionUseCase,
    UpsertReactionRequest,
    UpsertReactionResponse,
    UpsertReactionUseCase,
)
from interaction.domain.value import ReactionCategory, ReactionType
from interaction.interface.api.identity import optional_actor, require_actor

router = APIRouter(tags=["reactions"], route_class=DishkaRoute)


class UpsertReactionAPIRequest(BaseModel):
    """API request for reacting to content."""

    reaction_type: ReactionType
    intensity: int = 1
    family_id: UUID | None = None
    generation_level: int | None = None
    family_context: dict | None = None
    relationship_context: dict | None = None
    emotional_context: dict | None = None
    cultural_context: str | None = None
    is_anonymous: bool = False
    is_private: bool = False


@router.put("/contents/{content_id}/reactions", response_model=UpsertReactionResponse)
async def upsert_reaction(
    content_id: UUID,
    request: UpsertReactionAPIRequest,
    response: Response,
    upsert_reaction_use_case: FromDishka[UpsertReactionUseCase],
    x_user_id: str | None = Header(default=None),
) -> UpsertReactionResponse:
    """React to a content item, replacing any previous reaction.

    Responds 201 when the reaction was created and 200 when an existing
    reaction was replaced.

    Args:
        content_id: Content UUID
        request: Reaction data
        response: Outgoing response (status code is set here)
        upsert_reaction_use_case: Upsert reaction use case from DI
        x_user_id: Actor ID header

    Returns:
        Stored reaction
    """
    user_id = require_actor(x_user_id, "react")
    result = await upsert_reaction_use_case.execute(
        UpsertReactionRequest(
            content_id=str(content_id),
            user_id=user_id,
            reaction_type=request.reaction_type,
            intensity=request.intensity,
            family_id=str(request.family_id) if request.family_id else None,
            generation_level=request.generation_level,
            family_context=request.family_context,
            relationship_context=request.relationship_context,
            emotional_context=request.emotional_context,
            cultural_context=request.cultural_context,
            is_anonymous=request.is_anonymous,
            is_private=request.is_private,
        )
    )
    response.status_code = (
        status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    )
    return result


@router.delete(
    "/contents/{content_id}/reactions", response_model=RemoveReactionResponse
)
async def remove_reaction(
    content_id: UUID,
    remove_reaction_use_case: FromDishka[RemoveReactionUseCase],
    x_user_id: str | None = Header(default=None),
) -> RemoveReactionResponse:
    """Remove the actor's reaction from a content item."""
    user_id = require_actor(x_user_id, "remove reactions")
    request = RemoveReactionRequest(content_id=str(content_id), user_id=user_id)
    return await remove_reaction_use_case.execute(request)


@router.get("/contents/{content_id}/reactions", response_model=GetUserReactionResponse)
async def get_user_reaction(
    content_id: UUID,
    get_user_reaction_use_case: FromDishka[GetUserReactionUseCase],
    x_user_id: str | None = Header(default=None),
) -> GetUserReactionResponse:
    """Get the actor's own reaction on a content item (empty when anonymous)."""
    request = GetUserReactionRequest(
        content_id=str(content_id), user_id=optional_actor(x_user_id)
    )
    return await get_user_reaction_use_case.execute(request)


@router.get(
    "/contents/{content_id}/reactions/summary",
    response_model=ReactionSummaryResponse,
)
async def get_reaction_summary(
    content_id: UUID,
    get_summary_use_case: FromDishka[GetReactionSummaryUseCase],
    x_user_id: str | None = Header(default=None),
) -> ReactionSummaryResponse:
    """Summarize reactions on a content item.

    Includes breakdowns by type, intensity, generation, cultural tag,
    family and category, plus the viewer's own reaction.
    """
    request = GetReactionSummaryRequest(
        content_id=str(content_id), viewer_id=optional_actor(x_user_id)
    )
    return await get_summary_use_case.execute(request)


@router.get("/reaction-types", response_model=ListReactionTypesResponse)
async def list_reaction_types(
    list_reaction_types_use_case: FromDishka[ListReactionTypesUseCase],
    category: ReactionCategory | None = None,
) -> ListReactionTypesResponse:
    """List the reaction type catalog, optionally filtered by category."""
    return await list_reaction_types_use_case.execute(category)


@router.get(
    "/generations/{generation_level}/reactions", response_model=BrowseReactionsResponse
)
async def list_reactions_by_generation(
    generation_level: int,
    browse_reactions_use_case: FromDishka[BrowseReactionsUseCase],
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> BrowseReactionsResponse:
    """List public reactions made at a generation level, newest first."""
    request = BrowseReactionsRequest(
        generation_level=generation_level, limit=limit, offset=offset
    )
    return await browse_reactions_use_case.execute(request)


@router.get(
    "/cultural-tags/{cultural_context}/reactions",
    response_model=BrowseReactionsResponse,
)
async def list_reactions_by_cultural_context(
    cultural_context: str,
    browse_reactions_use_case: FromDishka[BrowseReactionsUseCase],
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> BrowseReactionsResponse:
    """List public reactions tagged with a cultural context, newest first."""
    request = BrowseReactionsRequest(
        cultural_context=cultural_context, limit=limit, offset=offset
    )
    return await browse_reactions_use_case.execute(request)
