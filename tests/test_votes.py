"""
Tests for helpful / unhelpful votes on reviews.
"""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from review_service.models import Review
from review_service.routers import votes


class TestCastVote:
    """Tests for POST /api/v1/reviews/{review_id}/votes"""

    def test_cast_helpful_vote(self, client: TestClient, db_session: Session, sample_review: Review):
        response = client.post(
            f"/api/v1/reviews/{sample_review.id}/votes",
            json={"user_id": 50, "is_helpful": True, "vote_confidence": 4},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["vote_type"] == "Helpful"
        assert data["confidence_text"] == "High"

        db_session.refresh(sample_review)
        assert sample_review.helpful_votes == 1
        assert sample_review.total_votes == 1

    def test_votes_feed_quality_score(self, client: TestClient, sample_review: Review):
        before = client.get(f"/api/v1/reviews/{sample_review.id}").json()["quality_score"]

        for user_id in (50, 51, 52):
            client.post(
                f"/api/v1/reviews/{sample_review.id}/votes",
                json={"user_id": user_id, "is_helpful": True},
            )
        client.post(
            f"/api/v1/reviews/{sample_review.id}/votes",
            json={"user_id": 53, "is_helpful": False},
        )

        data = client.get(f"/api/v1/reviews/{sample_review.id}").json()
        assert data["total_votes"] == 4
        assert data["helpfulness_ratio"] == 0.75
        # round(0.75 * 25) = 19
        assert data["quality_score"] == before + 19

    def test_duplicate_vote_rejected(self, client: TestClient, sample_review: Review):
        url = f"/api/v1/reviews/{sample_review.id}/votes"
        client.post(url, json={"user_id": 50, "is_helpful": True})

        response = client.post(url, json={"user_id": 50, "is_helpful": False})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unique_constraint_conflict_is_a_bad_request(
        self, client: TestClient, sample_review: Review, monkeypatch
    ):
        url = f"/api/v1/reviews/{sample_review.id}/votes"
        client.post(url, json={"user_id": 50, "is_helpful": True})
        # A concurrent request that passed the lookup before the first vote committed
        monkeypatch.setattr(votes, "_find_vote", lambda *args: None)

        response = client.post(url, json={"user_id": 50, "is_helpful": False})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "User has already voted on this review"

    def test_invalid_confidence(self, client: TestClient, sample_review: Review):
        response = client.post(
            f"/api/v1/reviews/{sample_review.id}/votes",
            json={"user_id": 50, "is_helpful": True, "vote_confidence": 0},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"]["errors"] == ["Vote confidence must be between 1 and 5"]

    def test_vote_review_not_found(self, client: TestClient):
        response = client.post("/api/v1/reviews/99999/votes", json={"user_id": 1, "is_helpful": True})
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestWithdrawVote:
    """Tests for DELETE /api/v1/reviews/{review_id}/votes/{user_id}"""

    def test_withdraw_vote(self, client: TestClient, db_session: Session, sample_review: Review):
        client.post(
            f"/api/v1/reviews/{sample_review.id}/votes",
            json={"user_id": 50, "is_helpful": False},
        )

        response = client.delete(f"/api/v1/reviews/{sample_review.id}/votes/50")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        db_session.refresh(sample_review)
        assert sample_review.unhelpful_votes == 0
        assert sample_review.helpfulness_ratio == 0.0

    def test_withdraw_missing_vote(self, client: TestClient, sample_review: Review):
        response = client.delete(f"/api/v1/reviews/{sample_review.id}/votes/50")
        assert response.status_code == status.HTTP_404_NOT_FOUND
