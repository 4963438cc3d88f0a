"""Tests for review models"""
import pytest
from pydantic import ValidationError

from src.models.review import ReviewCreate, ReviewUpdate


class TestReviewCreate:

    def test_valid_review(self):
        review = ReviewCreate(product_id="507f1f77bcf86cd799439011", rating=5, comment="Great!")
        assert review.rating == 5
        assert review.title is None

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            ReviewCreate(product_id="507f1f77bcf86cd799439011", rating=rating)

    def test_comment_too_long(self):
        with pytest.raises(ValidationError):
            ReviewCreate(product_id="507f1f77bcf86cd799439011", rating=3, comment="x" * 1001)

    def test_title_too_long(self):
        with pytest.raises(ValidationError):
            ReviewCreate(product_id="507f1f77bcf86cd799439011", rating=3, title="x" * 201)


class TestReviewUpdate:

    def test_partial_update_tracks_sent_fields(self):
        update = ReviewUpdate(comment=None)
        assert update.model_dump(exclude_unset=True) == {"comment": None}

    def test_rating_range_applies_to_updates(self):
        with pytest.raises(ValidationError):
            ReviewUpdate(rating=9)
