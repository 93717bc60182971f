"""Reaction read use cases: summary, own reaction and type catalog."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from interaction.domain.model import BreakdownEntry, FamilyBreakdown, ReactionSummary
from interaction.domain.service import ReactionService
from interaction.domain.value import ContentId, ReactionCategory, UserId

from .common import ReactionItem

# Percentages are kept at full precision in the domain and rounded here
PERCENT_DIGITS = 2


class BreakdownItem(BaseModel):
    """One entry of a summary breakdown."""

    key: str | None
    label: str
    count: int
    percentage: float

    @classmethod
    def from_domain(cls, entry: BreakdownEntry) -> "BreakdownItem":
        key = entry.key
        if key is not None:
            key = key.value if hasattr(key, "value") else str(key)
        return cls(
            key=key,
            label=entry.label,
            count=entry.count,
            percentage=round(entry.percentage, PERCENT_DIGITS),
        )


class FamilyBreakdownItem(BaseModel):
    """Per-family breakdown, nested by generation."""

    family_id: str | None
    count: int
    percentage: float
    by_generation: list[BreakdownItem]

    @classmethod
    def from_domain(cls, entry: FamilyBreakdown) -> "FamilyBreakdownItem":
        return cls(
            family_id=str(entry.family_id) if entry.family_id else None,
            count=entry.count,
            percentage=round(entry.percentage, PERCENT_DIGITS),
            by_generation=[BreakdownItem.from_domain(e) for e in entry.by_generation],
        )


class ViewerReactionItem(BaseModel):
    """The viewing user's own reaction."""

    reaction_id: int
    reaction_type: str
    intensity: int
    created_at: datetime


class ReactionSummaryResponse(BaseModel):
    """Reaction summary response."""

    content_id: str
    total_reactions: int
    unique_reactors: int
    average_intensity: float
    by_type: list[BreakdownItem]
    by_intensity: list[BreakdownItem]
    by_generation: list[BreakdownItem]
    by_cultural_tag: list[BreakdownItem]
    by_family: list[FamilyBreakdownItem]
    by_category: list[BreakdownItem]
    viewer_reaction: ViewerReactionItem | None

    @classmethod
    def from_domain(
        cls, content_id: str, summary: ReactionSummary
    ) -> "ReactionSummaryResponse":
        """Convert a domain summary, rounding percentages for display."""

        def items(entries: list[BreakdownEntry]) -> list[BreakdownItem]:
            return [BreakdownItem.from_domain(entry) for entry in entries]

        viewer = summary.viewer_reaction
        return cls(
            content_id=content_id,
            total_reactions=summary.total_reactions,
            unique_reactors=summary.unique_reactors,
            average_intensity=round(summary.average_intensity, PERCENT_DIGITS),
            by_type=items(summary.by_type),
            by_intensity=items(summary.by_intensity),
            by_generation=items(summary.by_generation),
            by_cultural_tag=items(summary.by_cultural_tag),
            by_family=[FamilyBreakdownItem.from_domain(f) for f in summary.by_family],
            by_category=items(summary.by_category),
            viewer_reaction=(
                ViewerReactionItem(
                    reaction_id=viewer.reaction_id,
                    reaction_type=viewer.reaction_type.value,
                    intensity=viewer.intensity,
                    created_at=viewer.created_at,
                )
                if viewer
                else None
            ),
        )


class GetReactionSummaryRequest(BaseModel):
    """Reaction summary request."""

    content_id: str  # UUID string
    viewer_id: str | None = None  # Anonymous when absent


class GetUserReactionRequest(BaseModel):
    """Own reaction request."""

    content_id: str  # UUID string
    user_id: str | None = None


class GetUserReactionResponse(BaseModel):
    """Own reaction response (empty for anonymous viewers)."""

    content_id: str
    reaction: ReactionItem | None


class ReactionTypeItem(BaseModel):
    """Reaction type catalog entry."""

    reaction_type: str
    display_name: str
    icon: str
    color_code: str
    category: str


class ListReactionTypesResponse(BaseModel):
    """Reaction type catalog response."""

    reaction_types: list[ReactionTypeItem]
    total: int


class GetReactionSummaryUseCase:
    """Use case for summarizing the reactions on a content item."""

    def __init__(self, reaction_service: ReactionService) -> None:
        """Initialize get reaction summary use case.

        Args:
            reaction_service: Reaction domain service
        """
        self.reaction_service = reaction_service

    async def execute(
        self, request: GetReactionSummaryRequest
    ) -> ReactionSummaryResponse:
        """Execute summary flow.

        Args:
            request: Summary request

        Returns:
            Summary with percentages rounded to two decimals
        """
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
        summary = await self.reaction_service.summarize_reactions(
            ContentId(UUID(request.content_id)), viewer_id
        )
        return ReactionSummaryResponse.from_domain(request.content_id, summary)


class GetUserReactionUseCase:
    """Use case for reading the actor's own reaction on a content item."""

    def __init__(self, reaction_service: ReactionService) -> None:
        self.reaction_service = reaction_service

    async def execute(self, request: GetUserReactionRequest) -> GetUserReactionResponse:
        reaction = None
        if request.user_id:
            reaction = await self.reaction_service.get_user_reaction(
                ContentId(UUID(request.content_id)), UserId(UUID(request.user_id))
            )
        return GetUserReactionResponse(
            content_id=request.content_id,
            reaction=ReactionItem.from_domain(reaction) if reaction else None,
        )


class ListReactionTypesUseCase:
    """Use case for listing the reaction type catalog."""

    def __init__(self, reaction_service: ReactionService) -> None:
        self.reaction_service = reaction_service

    async def execute(
        self, category: Optional[ReactionCategory] = None
    ) -> ListReactionTypesResponse:
        types = self.reaction_service.list_reaction_types(category)
        items = [
            ReactionTypeItem(
                reaction_type=info.reaction_type.value,
                display_name=info.display_name,
                icon=info.icon,
                color_code=info.color_code,
                category=info.category.value,
            )
            for info in types
        ]
        return ListReactionTypesResponse(reaction_types=items, total=len(items))
