"""Reaction feeds across content by generation level or cultural context."""

from pydantic import BaseModel

from interaction.domain.service import ReactionService

from .common import ReactionItem


class BrowseReactionsRequest(BaseModel):
    """Exactly one of ``generation_level`` and ``cultural_context`` is set."""

    generation_level: int | None = None
    cultural_context: str | None = None
    limit: int = 50
    offset: int = 0


class BrowseReactionsResponse(BaseModel):
    """One page of reactions, newest first."""

    reactions: list[ReactionItem]
    limit: int
    offset: int


class BrowseReactionsUseCase:
    """Use case for the generation and cultural context reaction feeds."""

    def __init__(self, reaction_service: ReactionService) -> None:
        """Initialize browse reactions use case.

        Args:
            reaction_service: Reaction domain service
        """
        self.reaction_service = reaction_service

    async def execute(self, request: BrowseReactionsRequest) -> BrowseReactionsResponse:
        """Execute browse flow.

        Private reactions are never listed. Anonymous reactions are listed
        without their user.

        Raises:
            ValidationError: If the page bounds or the tag are invalid
        """
        if request.generation_level is not None:
            reactions = await self.reaction_service.list_by_generation(
                request.generation_level, limit=request.limit, offset=request.offset
            )
        else:
            reactions = await self.reaction_service.list_by_cultural_context(
                request.cultural_context or "",
                limit=request.limit,
                offset=request.offset,
            )
        return BrowseReactionsResponse(
            reactions=[ReactionItem.from_domain(r) for r in reactions],
            limit=request.limit,
            offset=request.offset,
        )
