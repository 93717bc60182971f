"""Remove reaction use case."""

from uuid import UUID

from pydantic import BaseModel

from interaction.domain.service import ReactionService
from interaction.domain.value import ContentId, UserId


class RemoveReactionRequest(BaseModel):
    """Remove reaction request."""

    content_id: str  # UUID string
    user_id: str  # User ID from the actor header


class RemoveReactionResponse(BaseModel):
    """Remove reaction response."""

    content_id: str
    reaction_id: int
    removed: bool


class RemoveReactionUseCase:
    """Use case for removing the actor's reaction from content."""

    def __init__(self, reaction_service: ReactionService) -> None:
        self.reaction_service = reaction_service

    async def execute(self, request: RemoveReactionRequest) -> RemoveReactionResponse:
        """Execute remove reaction flow.

        Raises:
            NotFoundError: If the user has no reaction on the content
        """
        reaction = await self.reaction_service.remove_reaction(
            ContentId(UUID(request.content_id)), UserId(UUID(request.user_id))
        )
        return RemoveReactionResponse(
            content_id=request.content_id, reaction_id=reaction.id, removed=True
        )
