# tests/services/test_stats.py
"""Tests for comment and user rating aggregates."""

from comment_stage.models import (
    COMMENT_STATUS_APPROVED,
    COMMENT_STATUS_PENDING,
    COMMENT_STATUS_REJECTED,
)
from comment_stage.services.ratings import UserRatingLedger
from comment_stage.services.stats import RatingAggregator
from tests.helpers import make_comment


def test_comment_stats_empty(db_session) -> None:
    stats = RatingAggregator(db_session).comment_stats("general")

    assert stats.total == 0
    assert stats.approved == 0
    assert stats.rejected == 0
    assert stats.pending == 0
    assert stats.avg_final_rating is None


def test_comment_stats_per_section(db_session, alice) -> None:
    make_comment(db_session, alice, status=COMMENT_STATUS_APPROVED, final_rating=5)
    make_comment(db_session, alice, status=COMMENT_STATUS_APPROVED, final_rating=2)
    make_comment(db_session, alice, status=COMMENT_STATUS_APPROVED)
    make_comment(db_session, alice, status=COMMENT_STATUS_REJECTED, rejection_reason="spam")
    make_comment(db_session, alice, status=COMMENT_STATUS_PENDING)
    make_comment(db_session, alice, site_section="news", status=COMMENT_STATUS_APPROVED,
                 final_rating=1)

    aggregator = RatingAggregator(db_session)
    general = aggregator.comment_stats("general")
    everywhere = aggregator.comment_stats()

    assert (general.total, general.approved, general.rejected, general.pending) == (5, 3, 1, 1)
    assert general.avg_final_rating == 3.5
    assert everywhere.total == 6
    assert everywhere.approved == 4
    assert everywhere.avg_final_rating == 2.67


def test_comment_stats_without_final_ratings_has_no_average(db_session, alice) -> None:
    make_comment(db_session, alice, status=COMMENT_STATUS_APPROVED, ai_suggested_rating=4)

    stats = RatingAggregator(db_session).comment_stats("general")

    assert stats.approved == 1
    assert stats.avg_final_rating is None


def test_user_rating_stats_empty(db_session, alice) -> None:
    stats = RatingAggregator(db_session).user_rating_stats(alice.id)

    assert stats.total_ratings == 0
    assert stats.avg_rating is None
    assert stats.histogram == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}


def test_user_rating_stats_histogram_and_average(db_session, alice, bob, carol) -> None:
    ledger = UserRatingLedger(db_session)
    ledger.rate(bob.id, alice.id, 5)
    ledger.rate(carol.id, alice.id, 4)
    ledger.rate(alice.id, bob.id, 1)

    stats = RatingAggregator(db_session).user_rating_stats(alice.id)

    assert stats.total_ratings == 2
    assert stats.avg_rating == 4.5
    assert stats.histogram == {1: 0, 2: 0, 3: 0, 4: 1, 5: 1}
    assert sum(stats.histogram.values()) == stats.total_ratings


def test_user_rating_stats_reflect_rerating(db_session, alice, bob) -> None:
    ledger = UserRatingLedger(db_session)
    aggregator = RatingAggregator(db_session)
    ledger.rate(bob.id, alice.id, 3)
    ledger.rate(bob.id, alice.id, 5)

    stats = aggregator.user_rating_stats(alice.id)

    assert stats.total_ratings == 1
    assert stats.avg_rating == 5.0
    assert stats.histogram[5] == 1
    assert stats.histogram[3] == 0


def test_author_comment_counts(db_session, alice, bob) -> None:
    make_comment(db_session, alice, status=COMMENT_STATUS_APPROVED)
    make_comment(db_session, alice, status=COMMENT_STATUS_REJECTED)
    make_comment(db_session, bob, status=COMMENT_STATUS_APPROVED)

    counts = RatingAggregator(db_session).author_comment_counts(alice.id)

    assert counts.total == 2
    assert counts.approved == 1
