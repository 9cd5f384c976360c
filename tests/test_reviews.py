"""
Tests for Reviews

Tests the review endpoints:
- List reviews for a book (pagination, sorting, hidden reviews)
- Create a review (derived fields, validation, one per user per book)
- Get a single review
- Edit a review (scores recomputed, updated_at stamped)

Business Rules:
- One review per user per book
- Domain validation failures return 422 with every message at once
"""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from review_service.models import Review
from tests.conftest import FIXED_NOW, LONG_CONTENT, build_review


def review_payload(**overrides) -> dict:
    payload = {
        "user_id": 11,
        "overall_rating": 5,
        "title": "A must-read classic",
        "content": LONG_CONTENT,
    }
    payload.update(overrides)
    return payload


def add_review(db: Session, **overrides) -> Review:
    review = build_review(**overrides).prepare_for_save(FIXED_NOW)
    db.add(review)
    db.commit()
    db.refresh(review)
    return review


# =============================================================================
# List Reviews for Book
# =============================================================================


class TestListBookReviews:
    """Tests for GET /api/v1/books/{book_id}/reviews"""

    def test_list_reviews_empty(self, client: TestClient):
        response = client.get("/api/v1/books/1/reviews")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["items"] == []
        assert data["total"] == 0
        assert data["page"] == 1
        assert data["pages"] == 0

    def test_list_reviews_with_data(self, client: TestClient, sample_review: Review):
        response = client.get(f"/api/v1/books/{sample_review.book_id}/reviews")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 1

        review = data["items"][0]
        assert review["title"] == "Great slow burn"
        assert review["word_count"] == 23
        assert review["star_display"] == "★★★★☆"
        assert review["status"] == "Published"

    def test_hidden_reviews_are_left_out(self, client: TestClient, db_session: Session):
        add_review(db_session, user_id=1)
        add_review(db_session, user_id=2, is_visible=False)

        data = client.get("/api/v1/books/1/reviews").json()

        assert data["total"] == 1
        assert data["items"][0]["user_id"] == 1

    def test_list_reviews_pagination(self, client: TestClient, db_session: Session):
        for user_id in range(1, 6):
            add_review(db_session, user_id=user_id)

        response = client.get("/api/v1/books/1/reviews?page=2&per_page=2")

        data = response.json()
        assert data["total"] == 5
        assert data["pages"] == 3
        assert data["per_page"] == 2
        assert len(data["items"]) == 2

    def test_sort_by_helpful(self, client: TestClient, db_session: Session):
        add_review(db_session, user_id=1, helpful_votes=1)
        add_review(db_session, user_id=2, helpful_votes=9)

        data = client.get("/api/v1/books/1/reviews?sort=helpful").json()

        assert [item["user_id"] for item in data["items"]] == [2, 1]

    def test_sort_by_quality_is_default(self, client: TestClient, db_session: Session):
        add_review(db_session, user_id=1)
        add_review(db_session, user_id=2, story_rating=5)

        data = client.get("/api/v1/books/1/reviews").json()

        assert data["items"][0]["user_id"] == 2
        assert data["items"][0]["quality_score"] > data["items"][1]["quality_score"]

    def test_unknown_sort_rejected(self, client: TestClient):
        response = client.get("/api/v1/books/1/reviews?sort=random")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


# =============================================================================
# Create Review
# =============================================================================


class TestCreateReview:
    """Tests for POST /api/v1/books/{book_id}/reviews"""

    def test_create_review_success(self, client: TestClient):
        response = client.post("/api/v1/books/3/reviews", json=review_payload())

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["book_id"] == 3
        assert data["user_id"] == 11
        assert data["word_count"] == 23
        assert data["estimated_reading_time"] == 1
        # length 5 + derived summary 3
        assert data["quality_score"] == 8
        assert data["summary"] == LONG_CONTENT
        assert data["helpfulness_ratio"] == 0.0
        assert data["created_at"].startswith("2024-06-01T12:00:00")
        assert data["updated_at"] is None

    def test_create_detailed_review(self, client: TestClient):
        payload = review_payload(
            story_rating=5,
            pacing_rating=3,
            positive_aspects="Characters",
            negative_aspects="Slow start",
        )

        data = client.post("/api/v1/books/3/reviews", json=payload).json()

        assert data["is_detailed_review"] is True
        assert data["average_detailed_rating"] == 4.0
        # length 5 + detail 20 + summary, positive, negative 9
        assert data["quality_score"] == 34

    def test_create_trims_text(self, client: TestClient):
        payload = review_payload(title="   Padded title   ")

        data = client.post("/api/v1/books/3/reviews", json=payload).json()

        assert data["title"] == "Padded title"

    def test_create_review_duplicate(self, client: TestClient, sample_review: Review):
        payload = review_payload(user_id=sample_review.user_id)

        response = client.post(f"/api/v1/books/{sample_review.book_id}/reviews", json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already reviewed" in response.json()["detail"]

    def test_same_user_can_review_another_book(self, client: TestClient, sample_review: Review):
        payload = review_payload(user_id=sample_review.user_id)

        response = client.post("/api/v1/books/2/reviews", json=payload)

        assert response.status_code == status.HTTP_201_CREATED

    def test_create_review_invalid_rating(self, client: TestClient):
        response = client.post("/api/v1/books/3/reviews", json=review_payload(overall_rating=6))

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"]["errors"] == ["Overall rating must be between 1 and 5"]

    def test_create_review_reports_every_problem(self, client: TestClient):
        payload = review_payload(title="Bad", content="Too short", overall_rating=0)

        response = client.post("/api/v1/books/3/reviews", json=payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"]["errors"] == [
            "Review title must be at least 5 characters",
            "Review content must be at least 20 characters",
            "Overall rating must be between 1 and 5",
        ]

    def test_create_review_missing_fields(self, client: TestClient):
        response = client.post("/api/v1/books/3/reviews", json={"user_id": 1})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


# =============================================================================
# Get Single Review
# =============================================================================


class TestGetReview:
    """Tests for GET /api/v1/reviews/{review_id}"""

    def test_get_review_success(self, client: TestClient, sample_review: Review):
        response = client.get(f"/api/v1/reviews/{sample_review.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == sample_review.id

    def test_get_review_not_found(self, client: TestClient):
        response = client.get("/api/v1/reviews/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Review with id 99999 not found"


# =============================================================================
# Update Review
# =============================================================================


class TestUpdateReview:
    """Tests for PATCH /api/v1/reviews/{review_id}"""

    def test_update_review_recomputes(self, client: TestClient, sample_review: Review):
        new_content = " ".join(["chapter"] * 120)

        response = client.patch(
            f"/api/v1/reviews/{sample_review.id}",
            json={"content": new_content, "overall_rating": 2},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["overall_rating"] == 2
        assert data["word_count"] == 120
        # length 15 + summary 3
        assert data["quality_score"] == 18
        assert data["updated_at"].startswith("2024-06-01T12:00:00")

    def test_update_review_partial(self, client: TestClient, sample_review: Review):
        response = client.patch(
            f"/api/v1/reviews/{sample_review.id}",
            json={"target_audience": "Fans of epic fantasy"},
        )

        data = response.json()
        assert data["target_audience"] == "Fans of epic fantasy"
        assert data["title"] == "Great slow burn"

    def test_null_leaves_required_fields_alone(self, client: TestClient, sample_review: Review):
        response = client.patch(f"/api/v1/reviews/{sample_review.id}", json={"title": None})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["title"] == "Great slow burn"

    def test_update_review_invalid(self, client: TestClient, sample_review: Review):
        response = client.patch(f"/api/v1/reviews/{sample_review.id}", json={"story_rating": 9})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"]["errors"] == ["Story rating must be between 1 and 5"]

    def test_update_review_not_found(self, client: TestClient):
        response = client.patch("/api/v1/reviews/99999", json={"title": "Whatever title"})
        assert response.status_code == status.HTTP_404_NOT_FOUND
