"""Application layer DI providers."""

from dishka import Scope, provide

from interaction.application.usecase.comment import (
    BrowseCommentsUseCase,
    ChangeVisibilityUseCase,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    FlagCommentUseCase,
    GetCommentLikedUseCase,
    GetCommentStatisticsUseCase,
    GetThreadUseCase,
    LikeCommentUseCase,
    ListCommentsUseCase,
    ListPendingModerationUseCase,
    ListRepliesUseCase,
    ModerateCommentUseCase,
    TrendingHashtagsUseCase,
    UnlikeCommentUseCase,
    UpdateCommentUseCase,
)
from interaction.application.usecase.reaction import (
    BrowseReactionsUseCase,
    GetReactionSummaryUseCase,
    GetUserReactionUseCase,
    ListReactionTypesUseCase,
    RemoveReactionUseCase,
    UpsertReactionUseCase,
)
from interaction.domain.service import CommentService, ProfileService, ReactionService
from interaction.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, profile_service: ProfileService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self, comment_service: CommentService, profile_service: ProfileService
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            comment_service=comment_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self, comment_service: CommentService, profile_service: ProfileService
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            comment_service=comment_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_like_comment_use_case(
        self, comment_service: CommentService
    ) -> LikeCommentUseCase:
        """Provide like comment use case."""
        return LikeCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_unlike_comment_use_case(
        self, comment_service: CommentService
    ) -> UnlikeCommentUseCase:
        """Provide unlike comment use case."""
        return UnlikeCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_list_replies_use_case(
        self, comment_service: CommentService, profile_service: ProfileService
    ) -> ListRepliesUseCase:
        """Provide list replies use case."""
        return ListRepliesUseCase(
            comment_service=comment_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_browse_comments_use_case(
        self, comment_service: CommentService, profile_service: ProfileService
    ) -> BrowseCommentsUseCase:
        """Provide generation and cultural tag comment feeds."""
        return BrowseCommentsUseCase(
            comment_service=comment_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_comment_statistics_use_case(
        self, comment_service: CommentService
    ) -> GetCommentStatisticsUseCase:
        """Provide comment statistics use case."""
        return GetCommentStatisticsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_trending_hashtags_use_case(
        self, comment_service: CommentService
    ) -> TrendingHashtagsUseCase:
        """Provide trending hashtags use case."""
        return TrendingHashtagsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_comment_liked_use_case(
        self, comment_service: CommentService
    ) -> GetCommentLikedUseCase:
        """Provide has-liked use case."""
        return GetCommentLikedUseCase(comment_service=comment_service)

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_moderate_comment_use_case(
        self, comment_service: CommentService
    ) -> ModerateCommentUseCase:
        """Provide moderate comment use case."""
        return ModerateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_flag_comment_use_case(
        self, comment_service: CommentService
    ) -> FlagCommentUseCase:
        """Provide flag comment use case."""
        return FlagCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_change_visibility_use_case(
        self, comment_service: CommentService
    ) -> ChangeVisibilityUseCase:
        """Provide change visibility use case."""
        return ChangeVisibilityUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_list_pending_moderation_use_case(
        self, comment_service: CommentService
    ) -> ListPendingModerationUseCase:
        """Provide moderation queue use case."""
        return ListPendingModerationUseCase(comment_service=comment_service)

    # Reaction use cases
    @provide(scope=Scope.REQUEST)
    def get_upsert_reaction_use_case(
        self, reaction_service: ReactionService
    ) -> UpsertReactionUseCase:
        """Provide upsert reaction use case."""
        return UpsertReactionUseCase(reaction_service=reaction_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_reaction_use_case(
        self, reaction_service: ReactionService
    ) -> RemoveReactionUseCase:
        """Provide remove reaction use case."""
        return RemoveReactionUseCase(reaction_service=reaction_service)

    @provide(scope=Scope.REQUEST)
    def get_reaction_summary_use_case(
        self, reaction_service: ReactionService
    ) -> GetReactionSummaryUseCase:
        """Provide reaction summary use case."""
        return GetReactionSummaryUseCase(reaction_service=reaction_service)

    @provide(scope=Scope.REQUEST)
    def get_user_reaction_use_case(
        self, reaction_service: ReactionService
    ) -> GetUserReactionUseCase:
        """Provide own reaction use case."""
        return GetUserReactionUseCase(reaction_service=reaction_service)

    @provide(scope=Scope.REQUEST)
    def get_list_reaction_types_use_case(
        self, reaction_service: ReactionService
    ) -> ListReactionTypesUseCase:
        """Provide reaction type catalog use case."""
        return ListReactionTypesUseCase(reaction_service=reaction_service)

    @provide(scope=Scope.REQUEST)
    def get_browse_reactions_use_case(
        self, reaction_service: ReactionService
    ) -> BrowseReactionsUseCase:
        """Provide generation and cultural context reaction feeds."""
        return BrowseReactionsUseCase(reaction_service=reaction_service)
