"""Voting engine.

Pure state machine over a user's vote on a script. Given the current vote
state and the requested action it decides the ledger mutation and the
counter deltas; it never touches storage.
"""

from scripthub.domain.model import CounterDelta
from scripthub.domain.value import (
    LedgerAction,
    Outcome,
    Rejection,
    VoteDirection,
    VoteState,
)
from scripthub.domain.value.common import ValueObject

from .base import Service
from .flag_weight_bridge import FlagWeightBridge

# Contribution of a single vote state to a script's rating
_RATING = {VoteState.NO_VOTE: 0, VoteState.UP: 1, VoteState.DOWN: -1}

_REQUESTED_STATE = {
    VoteDirection.UP: VoteState.UP,
    VoteDirection.DOWN: VoteState.DOWN,
    VoteDirection.UNVOTE: VoteState.NO_VOTE,
}


class VoteTransition(ValueObject):
    """Result of applying a vote request to a user's vote state."""

    outcome: Outcome
    old_state: VoteState
    new_state: VoteState
    ledger_action: LedgerAction
    delta: CounterDelta = CounterDelta()
    reason: Rejection | None = None

    @property
    def accepted(self) -> bool:
        return self.outcome is Outcome.ACCEPTED


class VotingEngine(Service):
    """Domain service applying the vote state machine."""

    def __init__(self, flag_weight_bridge: FlagWeightBridge) -> None:
        """Initialize voting engine.

        Args:
            flag_weight_bridge: Supplies the flag weight coupling of votes
        """
        self.flag_weight_bridge = flag_weight_bridge

    def apply_vote(
        self, current: VoteState, requested: VoteDirection, is_author: bool
    ) -> VoteTransition:
        """Compute the transition for a vote request.

        Rules:
        - author, or unvote without a vote: rejected
        - same direction as the current vote: rejected (re-voting is idempotent)
        - no vote -> up/down: create, rating +/-1, vote count +1
        - up/down -> unvote: delete, rating -/+1, vote count -1
        - up <-> down: update in place, rating +/-2, vote count unchanged

        Args:
            current: The user's current vote state
            requested: Requested vote action
            is_author: Whether the user wrote the script

        Returns:
            The vote transition; rejected transitions carry no delta
        """
        if is_author:
            return self._reject(current, Rejection.AUTHOR)

        new = _REQUESTED_STATE[requested]
        if new is VoteState.NO_VOTE and not current.has_vote:
            return self._reject(current, Rejection.NO_VOTE_TO_RETRACT)
        if new is current:
            return self._reject(current, Rejection.DUPLICATE_VOTE)

        if not current.has_vote:
            action = LedgerAction.CREATE
        elif not new.has_vote:
            action = LedgerAction.DELETE
        else:
            action = LedgerAction.UPDATE

        delta = CounterDelta(
            rating=_RATING[new] - _RATING[current],
            vote_count=int(new.has_vote) - int(current.has_vote),
            flag_weight=self.flag_weight_bridge.coupling_delta(current, new),
        )
        return VoteTransition(
            outcome=Outcome.ACCEPTED,
            old_state=current,
            new_state=new,
            ledger_action=action,
            delta=delta,
        )

    @staticmethod
    def _reject(current: VoteState, reason: Rejection) -> VoteTransition:
        return VoteTransition(
            outcome=Outcome.REJECTED,
            old_state=current,
            new_state=current,
            ledger_action=LedgerAction.NONE,
            reason=reason,
        )
