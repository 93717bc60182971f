"""End-to-end tests for comment and moderation endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from interaction.interface.api.app import create_app
from interaction.util.di.container import setup_di
from tests.conftest import MODERATOR_ID
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container."""
    app_instance = create_app()
    test_container = build_test_container()
    setup_di(app_instance, test_container)
    return TestClient(app_instance)


def actor(user_id=None) -> dict[str, str]:
    return {"X-User-Id": str(user_id or uuid4())}


MODERATOR = actor(MODERATOR_ID)


def post_comment(client, content_id, text, headers=None, **fields):
    response = client.post(
        f"/contents/{content_id}/comments",
        json={"text": text, **fields},
        headers=headers or actor(),
    )
    assert response.status_code == 201
    return response.json()["comment"]


def approve(client, comment_id):
    response = client.post(
        f"/comments/{comment_id}/moderation",
        json={"decision": "APPROVED"},
        headers=MODERATOR,
    )
    assert response.status_code == 200
    return response.json()["comment"]


class TestCommentEndpoints:
    """End-to-end tests for comment API endpoints.

    Note: These tests focus on the HTTP API interface layer.
    More detailed business logic tests are in unit tests.
    """

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_create_comment_without_actor_fails(self, client):
        """Should return 401 when the actor header is missing."""
        # Act
        response = client.post(f"/contents/{uuid4()}/comments", json={"text": "Hi"})

        # Assert
        assert response.status_code == 401
        assert "X-User-Id" in response.json()["detail"]

    def test_create_comment_with_malformed_actor_fails(self, client):
        response = client.post(
            f"/contents/{uuid4()}/comments",
            json={"text": "Hi"},
            headers={"X-User-Id": "not-a-uuid"},
        )

        assert response.status_code == 401

    def test_create_comment_with_empty_text(self, client):
        """Should map domain validation errors to 400."""
        # Act
        response = client.post(
            f"/contents/{uuid4()}/comments", json={"text": "   "}, headers=actor()
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["error_type"] == "ValidationError"

    def test_reply_to_missing_parent(self, client):
        response = client.post(
            f"/contents/{uuid4()}/comments",
            json={"text": "Reply", "parent_id": 424242},
            headers=actor(),
        )

        assert response.status_code == 404

    def test_comment_lifecycle(self, client):
        """Create, approve, reply, list and read the thread."""
        # Arrange
        content_id = uuid4()
        root = post_comment(client, content_id, "Happy birthday Grandpa!")
        approve(client, root["comment_id"])
        reply = post_comment(
            client, content_id, "Thank you!", parent_id=root["comment_id"]
        )
        approve(client, reply["comment_id"])

        # Act
        listing = client.get(f"/contents/{content_id}/comments")
        thread = client.get(f"/comments/{root['comment_id']}/thread")

        # Assert
        assert listing.status_code == 200
        assert listing.json()["total"] == 1
        assert listing.json()["comments"][0]["reply_count"] == 1

        assert thread.status_code == 200
        body = thread.json()
        assert body["total_comments"] == 2
        assert body["thread"]["comment"]["text"] == "Happy birthday Grandpa!"
        assert body["thread"]["replies"][0]["comment"]["text"] == "Thank you!"
        assert body["thread"]["replies"][0]["comment"]["depth"] == 1

    def test_pending_thread_is_not_found(self, client):
        """Comments awaiting moderation are hidden from regular readers."""
        comment = post_comment(client, uuid4(), "Pending")

        response = client.get(f"/comments/{comment['comment_id']}/thread")

        assert response.status_code == 404

    def test_edit_by_other_user_forbidden(self, client):
        """Should return 403 when a non-author edits."""
        # Arrange
        comment = post_comment(client, uuid4(), "Original")

        # Act
        response = client.patch(
            f"/comments/{comment['comment_id']}",
            json={"text": "Hijacked"},
            headers=actor(),
        )

        # Assert
        assert response.status_code == 403
        assert response.json()["error_type"] == "ForbiddenError"

    def test_edit_and_delete_by_author(self, client):
        # Arrange
        author = actor()
        comment = post_comment(client, uuid4(), "Original", headers=author)
        path = f"/comments/{comment['comment_id']}"

        # Act
        edited = client.patch(path, json={"text": "Fixed", "reason": "typo"}, headers=author)
        deleted = client.delete(path, headers=author)

        # Assert
        assert edited.status_code == 200
        assert edited.json()["comment"]["edit_count"] == 1
        assert edited.json()["comment"]["edit_history"][0]["previous_text"] == "Original"
        assert deleted.status_code == 200
        assert deleted.json()["status"] == "DELETED"

    def test_like_twice_conflicts(self, client):
        """Should return 409 on a duplicate like."""
        # Arrange
        comment = post_comment(client, uuid4(), "Like me")
        liker = actor()
        path = f"/comments/{comment['comment_id']}/like"

        # Act
        first = client.post(path, headers=liker)
        second = client.post(path, headers=liker)
        removed = client.delete(path, headers=liker)

        # Assert
        assert first.status_code == 200
        assert first.json()["like_count"] == 1
        assert second.status_code == 409
        assert removed.json() == {
            "comment_id": comment["comment_id"],
            "like_count": 0,
            "liked": False,
        }


class TestModerationEndpoints:
    """End-to-end tests for moderation endpoints."""

    def test_non_moderator_forbidden(self, client):
        comment = post_comment(client, uuid4(), "Review me")

        response = client.post(
            f"/comments/{comment['comment_id']}/moderation",
            json={"decision": "APPROVED"},
            headers=actor(),
        )

        assert response.status_code == 403

    def test_invalid_transition_is_bad_request(self, client):
        """Approving an already approved comment is rejected."""
        # Arrange
        comment = post_comment(client, uuid4(), "Review me")
        approve(client, comment["comment_id"])

        # Act
        response = client.post(
            f"/comments/{comment['comment_id']}/moderation",
            json={"decision": "APPROVED"},
            headers=MODERATOR,
        )

        # Assert
        assert response.status_code == 400

    def test_flag_and_queue(self, client):
        """Flagged comments return to the moderation queue."""
        # Arrange
        comment = post_comment(client, uuid4(), "Questionable")
        approve(client, comment["comment_id"])

        # Act
        flagged = client.post(
            f"/comments/{comment['comment_id']}/flag",
            json={"reason": "off-topic"},
            headers=actor(),
        )
        queue = client.get("/moderation/comments", headers=MODERATOR)

        # Assert
        assert flagged.status_code == 200
        assert flagged.json()["moderation_status"] == "FLAGGED"
        assert flagged.json()["comment"] is None
        assert [c["comment_id"] for c in queue.json()["comments"]] == [
            comment["comment_id"]
        ]

    def test_flagging_rejected_comment_does_not_reveal_text(self, client):
        """A stranger flagging a rejected comment gets the status only."""
        # Arrange
        comment = post_comment(client, uuid4(), "secret rejected text")
        client.post(
            f"/comments/{comment['comment_id']}/moderation",
            json={"decision": "REJECTED"},
            headers=MODERATOR,
        )

        # Act
        thread = client.get(f"/comments/{comment['comment_id']}/thread", headers=actor())
        flagged = client.post(
            f"/comments/{comment['comment_id']}/flag", json={}, headers=actor()
        )

        # Assert
        assert thread.status_code == 404
        assert flagged.status_code == 200
        assert flagged.json() == {
            "comment_id": comment["comment_id"],
            "moderation_status": "FLAGGED",
            "comment": None,
        }
        assert "secret" not in flagged.text

    def test_author_flagging_sees_comment(self, client):
        author = actor()
        comment = post_comment(client, uuid4(), "Mine", headers=author)

        flagged = client.post(
            f"/comments/{comment['comment_id']}/flag", json={}, headers=author
        )

        assert flagged.json()["comment"]["text"] == "Mine"

    def test_queue_requires_moderator(self, client):
        response = client.get("/moderation/comments", headers=actor())

        assert response.status_code == 403

    def test_hide_comment(self, client):
        comment = post_comment(client, uuid4(), "Hide me")

        response = client.post(
            f"/comments/{comment['comment_id']}/visibility",
            json={"status": "HIDDEN"},
            headers=MODERATOR,
        )

        assert response.status_code == 200
        assert response.json()["comment"]["status"] == "HIDDEN"


class TestCommentFeedEndpoints:
    """End-to-end tests for replies, likes, statistics and comment feeds."""

    def test_liked_reflects_actor(self, client):
        # Arrange
        comment = post_comment(client, uuid4(), "Like me")
        approve(client, comment["comment_id"])
        liker = actor()
        path = f"/comments/{comment['comment_id']}"
        client.post(f"{path}/like", headers=liker)

        # Act
        mine = client.get(f"{path}/liked", headers=liker)
        other = client.get(f"{path}/liked", headers=actor())
        anonymous = client.get(f"{path}/liked")

        # Assert
        assert mine.json() == {"comment_id": comment["comment_id"], "liked": True}
        assert other.json()["liked"] is False
        assert anonymous.json()["liked"] is False

    def test_liked_on_missing_comment(self, client):
        response = client.get("/comments/999999/liked", headers=actor())

        assert response.status_code == 404

    def test_list_replies_pages_oldest_first(self, client):
        # Arrange
        content_id = uuid4()
        root = post_comment(client, content_id, "Root")
        approve(client, root["comment_id"])
        for text in ("first", "second", "third"):
            reply = post_comment(
                client, content_id, text, parent_id=root["comment_id"]
            )
            approve(client, reply["comment_id"])
        post_comment(client, content_id, "pending", parent_id=root["comment_id"])

        # Act
        response = client.get(
            f"/comments/{root['comment_id']}/replies",
            params={"limit": 2, "offset": 1},
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert [r["text"] for r in body["replies"]] == ["second", "third"]
        assert body["limit"] == 2
        assert body["offset"] == 1

    def test_replies_of_pending_parent_not_found(self, client):
        root = post_comment(client, uuid4(), "Pending root")

        response = client.get(f"/comments/{root['comment_id']}/replies")

        assert response.status_code == 404

    def test_replies_rejects_zero_limit(self, client):
        response = client.get("/comments/1/replies", params={"limit": 0})

        assert response.status_code == 422

    def test_comment_statistics(self, client):
        # Arrange
        content_id = uuid4()
        mentioned = str(uuid4())
        root = post_comment(
            client,
            content_id,
            "So proud #graduation",
            hashtags=["#graduation", "family"],
            mentions=[mentioned],
        )
        approve(client, root["comment_id"])
        reply = post_comment(
            client,
            content_id,
            "Me too",
            parent_id=root["comment_id"],
            hashtags=["graduation"],
        )
        approve(client, reply["comment_id"])
        post_comment(client, content_id, "Hidden #graduation", hashtags=["graduation"])
        client.post(f"/comments/{root['comment_id']}/like", headers=actor())

        # Act
        response = client.get(f"/contents/{content_id}/comments/statistics")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["content_id"] == str(content_id)
        assert body["total_comments"] == 2
        assert body["total_replies"] == 1
        assert body["total_likes"] == 1
        assert body["top_hashtags"][0] == {"hashtag": "graduation", "count": 2}
        assert body["top_mentions"] == [{"user_id": mentioned, "count": 1}]

    def test_statistics_for_content_without_comments(self, client):
        response = client.get(f"/contents/{uuid4()}/comments/statistics")

        assert response.status_code == 200
        assert response.json()["total_comments"] == 0
        assert response.json()["average_sentiment"] is None

    def test_trending_hashtags(self, client):
        # Arrange
        for tags in (["reunion", "summer"], ["reunion"]):
            comment = post_comment(client, uuid4(), "Together", hashtags=tags)
            approve(client, comment["comment_id"])

        # Act
        response = client.get("/hashtags/trending", params={"limit": 1})

        # Assert
        assert response.status_code == 200
        assert response.json()["hashtags"] == [{"hashtag": "reunion", "count": 2}]

    def test_generation_feed_skips_private_comments(self, client):
        # Arrange
        public = post_comment(client, uuid4(), "From the elders", generation_level=2)
        approve(client, public["comment_id"])
        private = post_comment(
            client, uuid4(), "Family only", generation_level=2, is_private=True
        )
        approve(client, private["comment_id"])

        # Act
        response = client.get("/generations/2/comments")

        # Assert
        assert response.status_code == 200
        assert [c["text"] for c in response.json()["comments"]] == ["From the elders"]

    def test_cultural_tag_feed(self, client):
        # Arrange
        tagged = post_comment(
            client, uuid4(), "Happy Lunar New Year", cultural_tags=["lunar-new-year"]
        )
        approve(client, tagged["comment_id"])
        other = post_comment(client, uuid4(), "Happy birthday")
        approve(client, other["comment_id"])

        # Act
        response = client.get("/cultural-tags/lunar-new-year/comments")

        # Assert
        assert response.status_code == 200
        assert [c["text"] for c in response.json()["comments"]] == [
            "Happy Lunar New Year"
        ]
