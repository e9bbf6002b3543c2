import uuid

import pytest

from app.core.errors import ConflictError, DomainError, NotFoundError
from app.services.review_service import ReviewService


def test_average_rating_zero_without_reviews(db, make_user):
    maria = make_user("Maria")
    assert ReviewService().average_rating(db, maria.id) == 0.0


def test_average_rating_rounds_half_up_to_one_decimal(db, make_user):
    maria = make_user("Maria")
    svc = ReviewService()
    # 5 + 4 + 4 + 4 = 17 / 4 = 4.25 -> 4.3
    for stars in (5, 4, 4, 4):
        reviewer = make_user()
        svc.add_review(db, user_id=maria.id, reviewer_id=reviewer.id, stars=stars, comment="ótima")

    assert svc.average_rating(db, maria.id) == 4.3
    assert len(svc.list_reviews(db, maria.id)) == 4


def test_review_keeps_reviewer_name(db, make_user):
    maria = make_user("Maria")
    ana = make_user("Ana")
    review = ReviewService().add_review(db, user_id=maria.id, reviewer_id=ana.id, stars=5)

    assert review.reviewer_name == "Ana"
    assert ReviewService().has_reviewed(db, user_id=maria.id, reviewer_id=ana.id) is True
    assert ReviewService().has_reviewed(db, user_id=ana.id, reviewer_id=maria.id) is False


def test_duplicate_review_rejected(db, make_user):
    maria = make_user("Maria")
    ana = make_user("Ana")
    svc = ReviewService()
    svc.add_review(db, user_id=maria.id, reviewer_id=ana.id, stars=5)

    with pytest.raises(ConflictError):
        svc.add_review(db, user_id=maria.id, reviewer_id=ana.id, stars=1)


def test_self_review_rejected(db, make_user):
    maria = make_user("Maria")
    with pytest.raises(DomainError):
        ReviewService().add_review(db, user_id=maria.id, reviewer_id=maria.id, stars=5)


@pytest.mark.parametrize("stars", [0, 6])
def test_stars_out_of_range(db, make_user, stars):
    maria = make_user("Maria")
    ana = make_user("Ana")
    with pytest.raises(ValueError):
        ReviewService().add_review(db, user_id=maria.id, reviewer_id=ana.id, stars=stars)


def test_review_unknown_user(db, make_user):
    ana = make_user("Ana")
    with pytest.raises(NotFoundError):
        ReviewService().add_review(db, user_id=uuid.uuid4(), reviewer_id=ana.id, stars=3)
