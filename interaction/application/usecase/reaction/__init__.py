"""Reaction use cases."""

from .browse_reactions import (
    BrowseReactionsRequest,
    BrowseReactionsResponse,
    BrowseReactionsUseCase,
)
from .common import ReactionItem
from .get_reactions import (
    BreakdownItem,
    FamilyBreakdownItem,
    GetReactionSummaryRequest,
    GetReactionSummaryUseCase,
    GetUserReactionRequest,
    GetUserReactionResponse,
    GetUserReactionUseCase,
    ListReactionTypesResponse,
    ListReactionTypesUseCase,
    ReactionSummaryResponse,
    ReactionTypeItem,
)
from .remove_reaction import (
    RemoveReactionRequest,
    RemoveReactionResponse,
    RemoveReactionUseCase,
)
from .upsert_reaction import (
    UpsertReactionRequest,
    UpsertReactionResponse,
    UpsertReactionUseCase,
)

__all__ = [
    "BrowseReactionsRequest",
    "BrowseReactionsResponse",
    "BrowseReactionsUseCase",
    "ReactionItem",
    "BreakdownItem",
    "FamilyBreakdownItem",
    "GetReactionSummaryRequest",
    "GetReactionSummaryUseCase",
    "GetUserReactionRequest",
    "GetUserReactionResponse",
    "GetUserReactionUseCase",
    "ListReactionTypesResponse",
    "ListReactionTypesUseCase",
    "ReactionSummaryResponse",
    "ReactionTypeItem",
    "RemoveReactionRequest",
    "RemoveReactionResponse",
    "RemoveReactionUseCase",
    "UpsertReactionRequest",
    "UpsertReactionResponse",
    "UpsertReactionUseCase",
]
