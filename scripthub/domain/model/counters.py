"""Reputation counters attached to a script."""

from scripthub.domain.value.common import ValueObject


class CounterDelta(ValueObject):
    """Change to apply to a script's counters."""

    rating: int = 0
    vote_count: int = 0
    flag_weight: int = 0

    @property
    def is_zero(self) -> bool:
        return self.rating == 0 and self.vote_count == 0 and self.flag_weight == 0


class ContentCounters(ValueObject):
    """Rating, vote count and flag weight of a script.

    ``rating`` and ``vote_count`` are derived from the vote ledger.
    ``flag_weight`` is a running accumulator and can go negative.
    """

    rating: int = 0
    vote_count: int = 0
    flag_weight: int = 0

    def apply(self, delta: CounterDelta) -> "ContentCounters":
        """Return counters with ``delta`` applied.

        The vote count is floored at zero.
        """
        return ContentCounters(
            rating=self.rating + delta.rating,
            vote_count=max(self.vote_count + delta.vote_count, 0),
            flag_weight=self.flag_weight + delta.flag_weight,
        )

    def inconsistencies(self) -> list[str]:
        """List the ways these counters contradict any possible vote ledger.

        Every active vote contributes one to ``vote_count`` and +1 or -1 to
        ``rating``, so the rating is bounded by the count and shares its
        parity.
        """
        problems = []
        if self.vote_count < 0:
            problems.append(f"vote_count {self.vote_count} is negative")
        if abs(self.rating) > self.vote_count:
            problems.append(
                f"rating {self.rating} exceeds vote_count {self.vote_count}"
            )
        elif (self.rating - self.vote_count) % 2 != 0:
            problems.append(
                f"rating {self.rating} and vote_count {self.vote_count} differ in parity"
            )
        return problems
