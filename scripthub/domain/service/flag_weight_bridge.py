"""Flag weight bridge.

Flag weight is a running accumulator of abuse pressure on a script. It moves
for two reasons: explicit flags and unflags, and votes. An active up-vote is
evidence against abuse and holds the weight one lower for as long as it
exists; down-votes and retracted votes carry no weight.
"""

from scripthub.domain.model import CounterDelta
from scripthub.domain.value import LedgerAction, Outcome, Rejection, VoteState
from scripthub.domain.value.common import ValueObject

from .base import Service


class FlagTransition(ValueObject):
    """Result of applying a flag or unflag request to a user's flag state."""

    outcome: Outcome
    ledger_action: LedgerAction
    flagged: bool
    delta: CounterDelta = CounterDelta()
    reason: Rejection | None = None

    @property
    def accepted(self) -> bool:
        return self.outcome is Outcome.ACCEPTED


class FlagWeightBridge(Service):
    """Translates vote and flag changes into flag weight deltas."""

    UP_VOTE_WEIGHT = -1
    FLAG_WEIGHT = 1

    def contribution(self, state: VoteState) -> int:
        """Flag weight held by a single vote state."""
        return self.UP_VOTE_WEIGHT if state is VoteState.UP else 0

    def coupling_delta(self, old: VoteState, new: VoteState) -> int:
        """Flag weight change caused by a vote moving from ``old`` to ``new``.

        Depends only on whether an up-vote appeared or disappeared:
        new up-vote -1, retracted up-vote +1, flip down->up -1,
        flip up->down +1, anything involving only down-votes 0.
        """
        return self.contribution(new) - self.contribution(old)

    def explicit_delta(self, flagging: bool) -> int:
        """Flag weight change of an explicit flag (+1) or unflag (-1)."""
        return self.FLAG_WEIGHT if flagging else -self.FLAG_WEIGHT

    def apply_flag(
        self, flagged: bool, want_flagged: bool, is_author: bool
    ) -> FlagTransition:
        """Compute the transition for a flag or unflag request.

        Args:
            flagged: Whether the user currently has a flag on the script
            want_flagged: True to flag, False to unflag
            is_author: Whether the user wrote the script

        Returns:
            The flag transition; rejected transitions carry no delta
        """
        if is_author:
            return self._reject(flagged, Rejection.AUTHOR)
        if want_flagged and flagged:
            return self._reject(flagged, Rejection.ALREADY_FLAGGED)
        if not want_flagged and not flagged:
            return self._reject(flagged, Rejection.NOT_FLAGGED)

        return FlagTransition(
            outcome=Outcome.ACCEPTED,
            ledger_action=LedgerAction.CREATE if want_flagged else LedgerAction.DELETE,
            flagged=want_flagged,
            delta=CounterDelta(flag_weight=self.explicit_delta(want_flagged)),
        )

    @staticmethod
    def _reject(flagged: bool, reason: Rejection) -> FlagTransition:
        return FlagTransition(
            outcome=Outcome.REJECTED,
            ledger_action=LedgerAction.NONE,
            flagged=flagged,
            reason=reason,
        )
