"""Unit tests for ContentCounters."""

from scripthub.domain.model import ContentCounters, CounterDelta


class TestApply:
    """Tests for applying deltas."""

    def test_apply_adds_each_field(self):
        counters = ContentCounters(rating=1, vote_count=3, flag_weight=-2)

        result = counters.apply(CounterDelta(rating=2, vote_count=0, flag_weight=1))

        assert result == ContentCounters(rating=3, vote_count=3, flag_weight=-1)

    def test_vote_count_is_floored_at_zero(self):
        """A stale retraction never drives the count negative."""
        counters = ContentCounters(rating=0, vote_count=0, flag_weight=0)

        result = counters.apply(CounterDelta(rating=-1, vote_count=-1, flag_weight=1))

        assert result.vote_count == 0
        assert result.rating == -1


class TestInconsistencies:
    """Tests for the read-time consistency check."""

    def test_consistent_counters(self):
        assert ContentCounters(rating=1, vote_count=3, flag_weight=-5).inconsistencies() == []
        assert ContentCounters().inconsistencies() == []

    def test_rating_beyond_vote_count(self):
        problems = ContentCounters(rating=3, vote_count=1).inconsistencies()

        assert len(problems) == 1
        assert "exceeds" in problems[0]

    def test_parity_mismatch(self):
        problems = ContentCounters(rating=1, vote_count=2).inconsistencies()

        assert len(problems) == 1
        assert "parity" in problems[0]

    def test_negative_vote_count(self):
        problems = ContentCounters(rating=0, vote_count=-2).inconsistencies()

        assert any("negative" in p for p in problems)

    def test_flag_weight_is_unconstrained(self):
        """Flag weight is an accumulator and may take any value."""
        assert ContentCounters(flag_weight=-40).inconsistencies() == []
