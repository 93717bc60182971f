"""Comment domain service.

Owns comment creation, editing, deletion, moderation and likes, and
materializes comment threads for readers.
"""

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Optional, Sequence

import logfire
from sqlalchemy.exc import IntegrityError

from interaction.config import CommentSettings, ModerationSettings, ThreadSettings
from interaction.domain.error import (
    ConflictError,
    ContentDeletedError,
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from interaction.domain.model import (
    Comment,
    CommentLike,
    CommentStatistics,
    HashtagCount,
    MentionCount,
)
from interaction.domain.model.comment import APPROVED_STATUSES
from interaction.domain.repository import CommentLikeRepository, CommentRepository
from interaction.domain.value import (
    CommentId,
    CommentStatus,
    ContentId,
    EventType,
    FamilyId,
    ModerationDecision,
    ModerationStatus,
    UserId,
)

from .base import Service, check_page
from .event_emitter import EventEmitter

DELETED_PLACEHOLDER_TEXT = "[deleted]"

# Moderation decisions allowed from each moderation status. Flagging is
# always allowed and is handled separately.
MODERATION_TRANSITIONS: dict[ModerationStatus, frozenset[ModerationStatus]] = {
    ModerationStatus.PENDING: frozenset(
        {
            ModerationStatus.APPROVED,
            ModerationStatus.REJECTED,
            ModerationStatus.AUTO_APPROVED,
        }
    ),
    ModerationStatus.FLAGGED: frozenset(
        {ModerationStatus.APPROVED, ModerationStatus.REJECTED}
    ),
}

# Statuses a moderator may move an ACTIVE comment to (deletion has its own path)
RESTRICTED_STATUSES = frozenset({CommentStatus.HIDDEN, CommentStatus.ARCHIVED})


@dataclass
class CommentThreadNode:
    """Node in a materialized comment thread.

    ``placeholder`` marks a deleted comment kept only so that its visible
    replies stay attached. Its text has been removed.
    """

    comment: Comment
    replies: list["CommentThreadNode"] = field(default_factory=list)
    placeholder: bool = False


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_like_repository: CommentLikeRepository,
        event_emitter: EventEmitter,
        comment_settings: CommentSettings,
        thread_settings: ThreadSettings,
        moderation_settings: ModerationSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            comment_like_repository: Comment like repository
            event_emitter: Interaction event emitter
            comment_settings: Comment content limits
            thread_settings: Thread traversal bounds
            moderation_settings: Moderation configuration
        """
        self.comment_repository = comment_repository
        self.comment_like_repository = comment_like_repository
        self.event_emitter = event_emitter
        self.comment_settings = comment_settings
        self.thread_settings = thread_settings
        self.moderation_settings = moderation_settings

    def is_moderator(self, user_id: Optional[UserId]) -> bool:
        """Check whether a user is a configured moderator."""
        return user_id is not None and user_id in self.moderation_settings.moderator_ids

    def _validate_text(self, text: str) -> str:
        text = text.strip()
        if not text:
            raise ValidationError("Comment text cannot be empty")
        if len(text) > self.comment_settings.max_length:
            raise ValidationError(
                f"Comment text exceeds {self.comment_settings.max_length} characters"
            )
        return text

    def _require_moderator(
        self, user_id: UserId, action: str, comment_id: CommentId
    ) -> None:
        if not self.is_moderator(user_id):
            logfire.warn(
                "Moderation attempt by non-moderator",
                user_id=str(user_id),
                comment_id=comment_id,
                action=action,
            )
            raise ForbiddenError(action, "comment", str(comment_id), str(user_id))

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            The comment

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            logfire.warn("Comment not found", comment_id=comment_id)
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def create_comment(
        self,
        content_id: ContentId,
        author_id: UserId,
        text: str,
        parent_id: Optional[CommentId] = None,
        mentions: Optional[Sequence[UserId]] = None,
        hashtags: Optional[Sequence[str]] = None,
        media_urls: Optional[Sequence[str]] = None,
        family_id: Optional[FamilyId] = None,
        generation_level: Optional[int] = None,
        family_context: Optional[dict[str, Any]] = None,
        relationship_context: Optional[dict[str, Any]] = None,
        cultural_tags: Optional[Sequence[str]] = None,
        language_code: Optional[str] = None,
        is_anonymous: bool = False,
        is_private: bool = False,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Comment:
        """Create a comment on a content item or reply to another comment.

        The insert and the parent's reply counter increment happen in the
        same unit of work.

        Args:
            content_id: Content the comment is attached to
            author_id: Author user ID
            text: Comment text
            parent_id: Parent comment ID for replies (None for top-level)
            mentions: Mentioned users, in order
            hashtags: Hashtags, with or without leading '#'
            media_urls: Attached media references
            family_id: Family the comment is shared within
            generation_level: Author's generation level
            family_context: Free-form family context
            relationship_context: Free-form relationship context
            cultural_tags: Cultural tags
            language_code: Language tag (max 5 characters)
            is_anonymous: Hide author identity from readers
            is_private: Restrict to family members
            metadata: Free-form metadata

        Returns:
            Created comment with its ID assigned

        Raises:
            NotFoundError: If the parent comment does not exist or is deleted
            ValidationError: If the text or threading is invalid
        """
        with logfire.span(
            "comment_service.create_comment",
            content_id=str(content_id),
            author_id=str(author_id),
            parent_id=parent_id,
        ):
            text = self._validate_text(text)
            if language_code is not None and len(language_code) > 5:
                raise ValidationError("Language code must be at most 5 characters")

            depth = 0
            if parent_id is not None:
                parent = await self.comment_repository.find_by_id(parent_id)
                if parent is None:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=parent_id,
                        content_id=str(content_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.is_deleted:
                    logfire.warn("Reply to deleted comment", parent_id=parent_id)
                    raise ContentDeletedError("Comment", str(parent_id))
                if parent.content_id != content_id:
                    logfire.error(
                        "Parent comment does not belong to content",
                        parent_id=parent_id,
                        parent_content_id=str(parent.content_id),
                        target_content_id=str(content_id),
                    )
                    raise ValidationError(
                        "Parent comment does not belong to this content"
                    )
                depth = parent.depth + 1
                if depth > self.thread_settings.max_depth:
                    raise ValidationError(
                        f"Replies cannot be nested deeper than {self.thread_settings.max_depth}"
                    )

            moderation_status = (
                ModerationStatus.AUTO_APPROVED
                if self.moderation_settings.auto_approve
                else ModerationStatus.PENDING
            )

            now = datetime.now()
            comment = Comment(
                content_id=content_id,
                author_id=author_id,
                text=text,
                parent_id=parent_id,
                depth=depth,
                mentions=list(dict.fromkeys(mentions or [])),
                hashtags=_normalize_hashtags(hashtags or []),
                media_urls=list(media_urls or []),
                status=CommentStatus.ACTIVE,
                moderation_status=moderation_status,
                family_id=family_id,
                generation_level=generation_level,
                family_context=family_context,
                relationship_context=relationship_context,
                cultural_tags=list(cultural_tags or []),
                language_code=language_code,
                is_anonymous=is_anonymous,
                is_private=is_private,
                metadata=dict(metadata or {}),
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            if parent_id is not None:
                await self.comment_repository.increment_reply_count(parent_id)

            logfire.info(
                "Comment created",
                comment_id=saved.id,
                content_id=str(content_id),
                depth=depth,
                moderation_status=moderation_status.value,
            )

            await self.event_emitter.emit_comment_event(
                EventType.COMMENT_CREATED,
                saved,
                author_id,
                comment_text=saved.text,
                mentions=[str(user_id) for user_id in saved.mentions],
                hashtags=saved.hashtags,
            )
            return saved

    async def edit_comment(
        self,
        comment_id: CommentId,
        editor_id: UserId,
        new_text: str,
        reason: Optional[str] = None,
    ) -> Comment:
        """Replace a comment's text, logging the previous text.

        Args:
            comment_id: Comment ID
            editor_id: User performing the edit (must be the author)
            new_text: Replacement text
            reason: Optional reason recorded in the edit history

        Returns:
            Updated comment

        Raises:
            NotFoundError: If the comment does not exist or is deleted
            ForbiddenError: If the editor is not the author
            ValidationError: If the new text is invalid
        """
        with logfire.span(
            "comment_service.edit_comment",
            comment_id=comment_id,
            editor_id=str(editor_id),
        ):
            comment = await self.get_comment_by_id(comment_id)

            if comment.author_id != editor_id:
                logfire.warn(
                    "Edit attempt by non-author",
                    comment_id=comment_id,
                    editor_id=str(editor_id),
                )
                raise ForbiddenError("edit", "comment", str(comment_id), str(editor_id))

            if comment.is_deleted:
                raise ContentDeletedError("Comment", str(comment_id))

            text = self._validate_text(new_text)
            updated = await self.comment_repository.save(
                comment.with_edit(text, editor_id, reason)
            )

            logfire.info(
                "Comment edited",
                comment_id=comment_id,
                edit_count=updated.edit_count,
                text_length=len(updated.text),
            )

            await self.event_emitter.emit_comment_event(
                EventType.COMMENT_UPDATED,
                updated,
                editor_id,
                comment_text=updated.text,
                edit_count=updated.edit_count,
                reason=reason,
            )
            return updated

    async def delete_comment(
        self, comment_id: CommentId, requester_id: UserId
    ) -> Comment:
        """Soft-delete a comment.

        The row is kept for audit and its replies stay addressable. The
        parent's reply counter is decremented in the same unit of work.

        Args:
            comment_id: Comment ID
            requester_id: User requesting deletion (author or moderator)

        Returns:
            The deleted comment

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the requester is neither author nor moderator
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=comment_id,
            requester_id=str(requester_id),
        ):
            comment = await self.get_comment_by_id(comment_id)

            if comment.author_id != requester_id and not self.is_moderator(
                requester_id
            ):
                logfire.warn(
                    "Delete attempt by non-author",
                    comment_id=comment_id,
                    requester_id=str(requester_id),
                )
                raise ForbiddenError(
                    "delete", "comment", str(comment_id), str(requester_id)
                )

            if comment.is_deleted:
                logfire.info("Comment already deleted", comment_id=comment_id)
                return comment

            deleted = await self.comment_repository.save(
                comment.model_copy(
                    update={
                        "status": CommentStatus.DELETED,
                        "updated_at": datetime.now(),
                    }
                )
            )
            if comment.parent_id is not None:
                await self.comment_repository.decrement_reply_count(comment.parent_id)

            logfire.info(
                "Comment deleted",
                comment_id=comment_id,
                by_moderator=comment.author_id != requester_id,
            )

            await self.event_emitter.emit_comment_event(
                EventType.COMMENT_DELETED, deleted, requester_id
            )
            return deleted

    async def moderate_comment(
        self,
        comment_id: CommentId,
        moderator_id: UserId,
        decision: ModerationDecision,
        reason: Optional[str] = None,
    ) -> Comment:
        """Apply a moderation decision.

        Args:
            comment_id: Comment ID
            moderator_id: Moderator applying the decision
            decision: APPROVED or REJECTED
            reason: Optional reason stored in metadata

        Returns:
            Moderated comment

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the user is not a moderator
            InvalidTransitionError: If the decision is not allowed from the
                current moderation status
        """
        with logfire.span(
            "comment_service.moderate_comment",
            comment_id=comment_id,
            moderator_id=str(moderator_id),
            decision=decision.value,
        ):
            comment = await self.get_comment_by_id(comment_id)
            self._require_moderator(moderator_id, "moderate", comment_id)

            target = ModerationStatus(decision.value)
            previous = comment.moderation_status
            _check_moderation_transition(comment, target)

            now = datetime.now()
            moderated = await self.comment_repository.save(
                comment.model_copy(
                    update={
                        "moderation_status": target,
                        "metadata": {
                            **comment.metadata,
                            "moderated_by": str(moderator_id),
                            "moderation_reason": reason,
                            "moderated_at": now.isoformat(),
                        },
                        "updated_at": now,
                    }
                )
            )

            logfire.info(
                "Comment moderated",
                comment_id=comment_id,
                previous_status=previous.value,
                moderation_status=target.value,
            )

            await self.event_emitter.emit_comment_event(
                EventType.COMMENT_MODERATED,
                moderated,
                moderator_id,
                approved=target == ModerationStatus.APPROVED,
                moderation_status=target.value,
                previous_status=previous.value,
                reason=reason,
            )
            return moderated

    async def auto_approve_comment(self, comment_id: CommentId) -> Comment:
        """Apply an external auto-approval signal to a pending comment.

        Args:
            comment_id: Comment ID

        Returns:
            The comment, AUTO_APPROVED

        Raises:
            NotFoundError: If the comment does not exist
            InvalidTransitionError: If the comment is not PENDING
        """
        with logfire.span("comment_service.auto_approve_comment", comment_id=comment_id):
            comment = await self.get_comment_by_id(comment_id)
            _check_moderation_transition(comment, ModerationStatus.AUTO_APPROVED)

            approved = await self.comment_repository.save(
                comment.model_copy(
                    update={
                        "moderation_status": ModerationStatus.AUTO_APPROVED,
                        "updated_at": datetime.now(),
                    }
                )
            )
            logfire.info("Comment auto-approved", comment_id=comment_id)
            return approved

    async def flag_comment(
        self,
        comment_id: CommentId,
        flagger_id: UserId,
        reason: Optional[str] = None,
    ) -> Comment:
        """Flag a comment for moderation.

        Flagging pre-empts any prior decision: the comment becomes FLAGGED
        whatever its current moderation status.

        Args:
            comment_id: Comment ID
            flagger_id: User flagging the comment
            reason: Optional reason stored in metadata

        Returns:
            Flagged comment

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.flag_comment",
            comment_id=comment_id,
            flagger_id=str(flagger_id),
        ):
            comment = await self.get_comment_by_id(comment_id)
            previous = comment.moderation_status

            now = datetime.now()
            flagged = await self.comment_repository.save(
                comment.model_copy(
                    update={
                        "moderation_status": ModerationStatus.FLAGGED,
                        "metadata": {
                            **comment.metadata,
                            "flagged_by": str(flagger_id),
                            "flag_reason": reason,
                            "flagged_at": now.isoformat(),
                        },
                        "updated_at": now,
                    }
                )
            )

            logfire.info(
                "Comment flagged",
                comment_id=comment_id,
                previous_status=previous.value,
            )

            await self.event_emitter.emit_comment_event(
                EventType.COMMENT_FLAGGED,
                flagged,
                flagger_id,
                reason=reason,
                previous_status=previous.value,
            )
            return flagged

    async def change_visibility(
        self,
        comment_id: CommentId,
        moderator_id: UserId,
        status: CommentStatus,
    ) -> Comment:
        """Hide or archive an active comment.

        Args:
            comment_id: Comment ID
            moderator_id: Moderator performing the change
            status: HIDDEN or ARCHIVED

        Returns:
            Updated comment

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the user is not a moderator
            ValidationError: If the status is not HIDDEN or ARCHIVED
            InvalidTransitionError: If the comment is not ACTIVE
        """
        with logfire.span(
            "comment_service.change_visibility",
            comment_id=comment_id,
            status=status.value,
        ):
            if status not in RESTRICTED_STATUSES:
                raise ValidationError("Visibility can only change to HIDDEN or ARCHIVED")

            comment = await self.get_comment_by_id(comment_id)
            self._require_moderator(moderator_id, "change visibility of", comment_id)

            if comment.status != CommentStatus.ACTIVE:
                raise InvalidTransitionError(
                    "comment", str(comment_id), comment.status.value, status.value
                )

            updated = await self.comment_repository.save(
                comment.model_copy(
                    update={"status": status, "updated_at": datetime.now()}
                )
            )
            logfire.info(
                "Comment visibility changed", comment_id=comment_id, status=status.value
            )
            return updated

    async def fetch_thread(
        self, comment_id: CommentId, viewer_id: Optional[UserId] = None
    ) -> CommentThreadNode:
        """Materialize a comment and its replies as a tree.

        Algorithm:
        1. Expand the descendant set breadth-first, one query per level,
           bounded by max depth, max fan-out per node and max node count
        2. Render bottom-up: a rendered comment keeps its rendered replies;
           a comment hidden from the viewer is dropped and its rendered
           replies are hoisted to the nearest rendered ancestor; a deleted
           comment with rendered replies becomes a placeholder
        3. Sort siblings by creation time ascending

        Moderators see comments regardless of moderation status.

        Args:
            comment_id: Root comment ID
            viewer_id: Viewing user (None for anonymous viewers)

        Returns:
            Root node of the thread

        Raises:
            NotFoundError: If the root does not exist or is not visible to
                the viewer
        """
        with logfire.span(
            "comment_service.fetch_thread",
            comment_id=comment_id,
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            root = await self.get_comment_by_id(comment_id)
            moderator_view = self.is_moderator(viewer_id)
            bounds = self.thread_settings

            nodes: dict[CommentId, Comment] = {comment_id: root}
            adjacency: dict[CommentId, list[CommentId]] = defaultdict(list)
            order: list[CommentId] = [comment_id]

            frontier = [comment_id]
            depth = 0
            truncated = False
            while frontier and depth < bounds.max_depth and not truncated:
                level = await self.comment_repository.find_children_of(
                    frontier, limit_per_parent=bounds.max_fanout
                )
                next_frontier: list[CommentId] = []
                for child in level:
                    # Skip rows already seen (malformed parent links)
                    if child.id is None or child.id in nodes:
                        continue
                    if child.parent_id not in nodes:
                        continue
                    if len(nodes) >= bounds.max_nodes:
                        truncated = True
                        break
                    nodes[child.id] = child
                    adjacency[child.parent_id].append(child.id)
                    order.append(child.id)
                    next_frontier.append(child.id)
                frontier = next_frontier
                depth += 1

            if truncated or (frontier and depth >= bounds.max_depth):
                logfire.warn(
                    "Thread traversal truncated",
                    comment_id=comment_id,
                    depth=depth,
                    node_count=len(nodes),
                )

            # Bottom-up: children always come after their parent in BFS order
            rendered: dict[CommentId, list[CommentThreadNode]] = {}
            for node_id in reversed(order):
                replies = [
                    node
                    for child_id in adjacency.get(node_id, [])
                    for node in rendered.pop(child_id, [])
                ]
                replies.sort(key=lambda node: (node.comment.created_at, node.comment.id))
                rendered[node_id] = _render(nodes[node_id], replies, moderator_view)

            result = rendered[comment_id]
            if len(result) != 1 or result[0].comment.id != comment_id:
                logfire.info(
                    "Thread root not visible to viewer",
                    comment_id=comment_id,
                    moderation_status=root.moderation_status.value,
                    status=root.status.value,
                )
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Thread fetched",
                comment_id=comment_id,
                node_count=len(nodes),
                depth=depth,
            )
            return result[0]

    async def list_for_content(
        self, content_id: ContentId, viewer_id: Optional[UserId] = None
    ) -> list[Comment]:
        """List top-level comments on a content item visible to the viewer.

        Args:
            content_id: Content ID
            viewer_id: Viewing user (None for anonymous viewers)

        Returns:
            Visible top-level comments, oldest first
        """
        with logfire.span(
            "comment_service.list_for_content", content_id=str(content_id)
        ):
            comments = await self.comment_repository.find_top_level_by_content(
                content_id
            )
            moderator_view = self.is_moderator(viewer_id)
            visible = [
                c
                for c in comments
                if c.is_visible
                or (moderator_view and c.status == CommentStatus.ACTIVE)
            ]
            logfire.info(
                "Comments listed for content",
                content_id=str(content_id),
                total=len(comments),
                visible=len(visible),
            )
            return visible

    async def list_pending_moderation(
        self, moderator_id: UserId, limit: int = 50
    ) -> list[Comment]:
        """List comments awaiting a moderation decision (PENDING or FLAGGED).

        Args:
            moderator_id: Moderator requesting the queue
            limit: Maximum number of comments

        Returns:
            Comments oldest first

        Raises:
            ForbiddenError: If the user is not a moderator
        """
        with logfire.span(
            "comment_service.list_pending_moderation", moderator_id=str(moderator_id)
        ):
            if not self.is_moderator(moderator_id):
                raise ForbiddenError(
                    "view", "moderation queue", "pending", str(moderator_id)
                )
            return await self.comment_repository.find_by_moderation_status(
                [ModerationStatus.PENDING, ModerationStatus.FLAGGED], limit=limit
            )

    async def list_replies(
        self,
        parent_id: CommentId,
        viewer_id: Optional[UserId] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Comment]:
        """List one page of the direct replies to a comment.

        Replies of a deleted parent stay listable, the same way a thread
        keeps them under a placeholder.

        Args:
            parent_id: Parent comment ID
            viewer_id: Viewing user (None for anonymous viewers)
            limit: Page size
            offset: Number of replies to skip

        Returns:
            Replies visible to the viewer, oldest first

        Raises:
            NotFoundError: If the parent does not exist or is hidden from
                the viewer
            ValidationError: If the page bounds are invalid
        """
        check_page(limit, offset)
        with logfire.span(
            "comment_service.list_replies",
            parent_id=parent_id,
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            parent = await self.get_comment_by_id(parent_id)
            moderator_view = self.is_moderator(viewer_id)
            if not parent.is_deleted and not _is_rendered(parent, moderator_view):
                raise NotFoundError("Comment", str(parent_id))

            replies = await self.comment_repository.find_replies(
                parent_id,
                moderation_statuses=None if moderator_view else list(APPROVED_STATUSES),
                limit=limit,
                offset=offset,
            )
            logfire.info("Replies listed", parent_id=parent_id, count=len(replies))
            return replies

    async def list_by_generation(
        self, generation_level: int, limit: int = 50, offset: int = 0
    ) -> list[Comment]:
        """List visible, non-private comments written at a generation level.

        Raises:
            ValidationError: If the page bounds are invalid
        """
        check_page(limit, offset)
        with logfire.span(
            "comment_service.list_by_generation", generation_level=generation_level
        ):
            return await self.comment_repository.find_visible_by_generation(
                generation_level, limit=limit, offset=offset
            )

    async def list_by_cultural_tag(
        self, cultural_tag: str, limit: int = 50, offset: int = 0
    ) -> list[Comment]:
        """List visible, non-private comments carrying a cultural tag.

        Raises:
            ValidationError: If the tag is blank or the page bounds are invalid
        """
        check_page(limit, offset)
        cultural_tag = cultural_tag.strip()
        if not cultural_tag:
            raise ValidationError("Cultural tag cannot be empty")
        with logfire.span(
            "comment_service.list_by_cultural_tag", cultural_tag=cultural_tag
        ):
            return await self.comment_repository.find_visible_by_cultural_tag(
                cultural_tag, limit=limit, offset=offset
            )

    async def get_comment_statistics(self, content_id: ContentId) -> CommentStatistics:
        """Aggregate the visible comments of a content item.

        Totals, likes, mean sentiment and the most used hashtags and
        mentions are all computed over visible comments only.

        Args:
            content_id: Content ID

        Returns:
            Statistics for the content item
        """
        with logfire.span(
            "comment_service.get_comment_statistics", content_id=str(content_id)
        ):
            comments = [
                c
                for c in await self.comment_repository.find_by_content(content_id)
                if c.is_visible
            ]
            top = self.comment_settings.top_tags_limit

            hashtags = Counter(tag for c in comments for tag in c.hashtags)
            mentions = Counter(user_id for c in comments for user_id in c.mentions)
            sentiments = [
                c.sentiment_score for c in comments if c.sentiment_score is not None
            ]

            statistics = CommentStatistics(
                content_id=content_id,
                total_comments=len(comments),
                total_replies=sum(1 for c in comments if c.is_reply),
                total_likes=sum(c.like_count for c in comments),
                average_sentiment=(
                    sum(sentiments) / len(sentiments) if sentiments else None
                ),
                top_hashtags=[
                    HashtagCount(hashtag=tag, count=n)
                    for tag, n in _most_common(hashtags, top, key=str)
                ],
                top_mentions=[
                    MentionCount(user_id=user_id, count=n)
                    for user_id, n in _most_common(mentions, top, key=str)
                ],
            )
            logfire.info(
                "Comment statistics computed",
                content_id=str(content_id),
                total_comments=statistics.total_comments,
            )
            return statistics

    async def trending_hashtags(self, limit: Optional[int] = None) -> list[HashtagCount]:
        """Most used hashtags on visible comments in the trending window.

        Args:
            limit: Maximum number of hashtags (defaults to the configured
                top tags limit)

        Returns:
            Hashtags, most used first
        """
        limit = self.comment_settings.top_tags_limit if limit is None else limit
        if limit < 1:
            raise ValidationError("limit must be at least 1")

        window = timedelta(days=self.comment_settings.trending_window_days)
        with logfire.span("comment_service.trending_hashtags", limit=limit):
            counts = await self.comment_repository.count_hashtags_since(
                datetime.now() - window, limit
            )
            return [HashtagCount(hashtag=tag, count=n) for tag, n in counts]

    async def has_user_liked(
        self, comment_id: CommentId, user_id: Optional[UserId]
    ) -> bool:
        """Check whether a user currently likes a comment.

        Anonymous viewers never have a like.

        Raises:
            NotFoundError: If the comment does not exist
        """
        await self.get_comment_by_id(comment_id)
        if user_id is None:
            return False
        like = await self.comment_like_repository.find_by_comment_and_user(
            comment_id, user_id
        )
        return like is not None

    async def like_comment(self, comment_id: CommentId, user_id: UserId) -> Comment:
        """Like a comment.

        Args:
            comment_id: Comment ID
            user_id: User liking the comment

        Returns:
            Comment with updated like count

        Raises:
            NotFoundError: If the comment does not exist or is deleted
            ConflictError: If the user already liked the comment
        """
        with logfire.span(
            "comment_service.like_comment", comment_id=comment_id, user_id=str(user_id)
        ):
            comment = await self.get_comment_by_id(comment_id)
            if comment.is_deleted:
                raise ContentDeletedError("Comment", str(comment_id))

            try:
                await self.comment_like_repository.save(
                    CommentLike(comment_id=comment_id, user_id=user_id)
                )
            except IntegrityError:
                logfire.warn(
                    "Duplicate like attempt",
                    comment_id=comment_id,
                    user_id=str(user_id),
                )
                raise ConflictError("CommentLike", "already liked this comment")

            await self.comment_repository.increment_like_count(comment_id)
            liked = await self.get_comment_by_id(comment_id)

            logfire.info(
                "Comment liked", comment_id=comment_id, like_count=liked.like_count
            )
            await self.event_emitter.emit_comment_event(
                EventType.COMMENT_LIKED, liked, user_id, like_count=liked.like_count
            )
            return liked

    async def unlike_comment(self, comment_id: CommentId, user_id: UserId) -> Comment:
        """Remove a like from a comment.

        Args:
            comment_id: Comment ID
            user_id: User removing their like

        Returns:
            Comment with updated like count

        Raises:
            NotFoundError: If the comment or the like does not exist
        """
        with logfire.span(
            "comment_service.unlike_comment",
            comment_id=comment_id,
            user_id=str(user_id),
        ):
            await self.get_comment_by_id(comment_id)

            deleted = await self.comment_like_repository.delete_by_comment_and_user(
                comment_id, user_id
            )
            if not deleted:
                logfire.info(
                    "No like to remove", comment_id=comment_id, user_id=str(user_id)
                )
                raise NotFoundError("CommentLike", f"{comment_id}/{user_id}")

            await self.comment_repository.decrement_like_count(comment_id)
            unliked = await self.get_comment_by_id(comment_id)

            logfire.info(
                "Comment unliked", comment_id=comment_id, like_count=unliked.like_count
            )
            await self.event_emitter.emit_comment_event(
                EventType.COMMENT_UNLIKED,
                unliked,
                user_id,
                like_count=unliked.like_count,
            )
            return unliked

    async def reconcile_counters(self, comment_id: CommentId) -> Comment:
        """Recompute reply and like counters from source rows.

        Args:
            comment_id: Comment ID

        Returns:
            Comment with corrected counters
        """
        with logfire.span("comment_service.reconcile_counters", comment_id=comment_id):
            comment = await self.get_comment_by_id(comment_id)
            reply_count = await self.comment_repository.count_live_children(comment_id)
            like_count = await self.comment_like_repository.count_by_comment(
                comment_id
            )

            if (reply_count, like_count) == (comment.reply_count, comment.like_count):
                return comment

            logfire.warn(
                "Comment counters drifted",
                comment_id=comment_id,
                stored_reply_count=comment.reply_count,
                actual_reply_count=reply_count,
                stored_like_count=comment.like_count,
                actual_like_count=like_count,
            )
            await self.comment_repository.set_counters(
                comment_id, reply_count, like_count
            )
            return await self.get_comment_by_id(comment_id)


def _normalize_hashtags(hashtags: Sequence[str]) -> list[str]:
    """Strip '#' and whitespace, drop empties and duplicates, keep order."""
    cleaned = (tag.strip().lstrip("#").strip() for tag in hashtags)
    return list(dict.fromkeys(tag for tag in cleaned if tag))


def _check_moderation_transition(comment: Comment, target: ModerationStatus) -> None:
    allowed = MODERATION_TRANSITIONS.get(comment.moderation_status, frozenset())
    if target not in allowed:
        logfire.warn(
            "Invalid moderation transition",
            comment_id=comment.id,
            current=comment.moderation_status.value,
            target=target.value,
        )
        raise InvalidTransitionError(
            "comment",
            str(comment.id),
            comment.moderation_status.value,
            target.value,
        )


def _render(
    comment: Comment, replies: list[CommentThreadNode], moderator_view: bool
) -> list[CommentThreadNode]:
    """Render one comment given its already-rendered replies.

    Returns the nodes that take this comment's place among its siblings.
    """
    if comment.is_deleted:
        if not replies:
            return []
        placeholder = comment.model_copy(
            update={
                "text": DELETED_PLACEHOLDER_TEXT,
                "mentions": [],
                "media_urls": [],
                "edit_history": [],
                "edit_count": 0,
                "is_edited": False,
            }
        )
        return [CommentThreadNode(comment=placeholder, replies=replies, placeholder=True)]

    if _is_rendered(comment, moderator_view):
        return [CommentThreadNode(comment=comment, replies=replies)]

    # Hidden from this viewer: hoist replies to the nearest rendered ancestor
    return replies


def _is_rendered(comment: Comment, moderator_view: bool) -> bool:
    return comment.status == CommentStatus.ACTIVE and (
        moderator_view or comment.is_approved
    )

def _most_common(
    counts: Counter, limit: int, key: Callable[[Any], str]
) -> list[tuple[Any, int]]:
    """Top ``limit`` entries by count, ties broken by ``key`` for stable output."""
    return sorted(counts.items(), key=lambda item: (-item[1], key(item[0])))[:limit]
