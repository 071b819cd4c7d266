"""Moderation coordinator.

Runs a single vote or flag request end to end: load the user's ledger
entry, compute the transition, write the ledger, then apply the counter
delta. Both writes happen in the request's transaction, ledger first.

Ledger writes are compare-and-swap against the state read at the start of
the attempt. Losing the race to a concurrent request by the same user means
re-reading and recomputing; counter writes are atomic increments and cannot
lose updates from other users.
"""

import logfire

from scripthub.domain.error import (
    ConcurrencyConflictError,
    InconsistentCountersError,
    NotFoundError,
)
from scripthub.domain.model import ContentCounters, CounterDelta, Flag, Script, Vote
from scripthub.domain.repository import (
    FlagRepository,
    ScriptRepository,
    VoteRepository,
)
from scripthub.domain.value import (
    LedgerAction,
    Rejection,
    ScriptId,
    UserId,
    VoteDirection,
    VoteState,
)
from scripthub.domain.value.common import ValueObject

from .base import Service
from .flag_weight_bridge import FlagTransition, FlagWeightBridge
from .removal_policy import RemovalPolicy
from .storage import storage_errors
from .voting_engine import VoteTransition, VotingEngine

DEFAULT_MAX_ATTEMPTS = 3


class VoteResult(ValueObject):
    """Outcome of a vote request.

    ``counters`` is None only when the request was rejected before the
    script was read (anonymous user).
    """

    accepted: bool
    vote_state: VoteState
    counters: ContentCounters | None
    reason: Rejection | None = None


class FlagResult(ValueObject):
    """Outcome of a flag request.

    ``removable`` is only meaningful to moderators.
    """

    accepted: bool
    flagged: bool
    counters: ContentCounters | None
    removable: bool = False
    reason: Rejection | None = None


class ReconcileResult(ValueObject):
    """Counters before and after recomputing them from the vote ledger."""

    before: ContentCounters
    after: ContentCounters

    @property
    def changed(self) -> bool:
        return self.before != self.after


class ModerationCoordinator(Service):
    """Domain service orchestrating vote and flag requests."""

    def __init__(
        self,
        script_repository: ScriptRepository,
        vote_repository: VoteRepository,
        flag_repository: FlagRepository,
        voting_engine: VotingEngine,
        flag_weight_bridge: FlagWeightBridge,
        removal_policy: RemovalPolicy,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        """Initialize moderation coordinator.

        Args:
            script_repository: Script repository
            vote_repository: Vote ledger
            flag_repository: Flag ledger
            voting_engine: Vote state machine
            flag_weight_bridge: Flag weight rules
            removal_policy: Removal threshold policy
            max_attempts: Attempts before a same-user race is reported
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.script_repository = script_repository
        self.vote_repository = vote_repository
        self.flag_repository = flag_repository
        self.voting_engine = voting_engine
        self.flag_weight_bridge = flag_weight_bridge
        self.removal_policy = removal_policy
        self.max_attempts = max_attempts

    async def cast_vote(
        self, script_id: ScriptId, user_id: UserId | None, direction: VoteDirection
    ) -> VoteResult:
        """Cast, change or retract a user's vote on a script.

        Args:
            script_id: Script ID
            user_id: Acting user, None if anonymous
            direction: up, down or unvote

        Returns:
            Vote result with the script's counters after the request

        Raises:
            NotFoundError: If the script does not exist
            ConcurrencyConflictError: If the user's own concurrent requests
                kept changing the vote for max_attempts attempts
            InconsistentCountersError: If stored counters are corrupt
            StorageUnavailableError: If the database cannot be reached
        """
        with logfire.span(
            "moderation.cast_vote",
            script_id=str(script_id),
            user_id=str(user_id),
            direction=direction.value,
        ):
            if user_id is None:
                logfire.info("Anonymous vote rejected", script_id=str(script_id))
                return VoteResult(
                    accepted=False,
                    vote_state=VoteState.NO_VOTE,
                    counters=None,
                    reason=Rejection.AUTHENTICATION_REQUIRED,
                )

            with storage_errors("cast_vote"):
                for attempt in range(1, self.max_attempts + 1):
                    # Fresh script and ledger state on every attempt
                    script = await self._load_script(script_id)
                    is_author = script.is_authored_by(user_id)

                    vote = None
                    if not is_author:
                        vote = await self.vote_repository.find_by_script_and_user(
                            script_id, user_id
                        )
                    current = vote.state if vote else VoteState.NO_VOTE

                    transition = self.voting_engine.apply_vote(
                        current, direction, is_author=is_author
                    )
                    if not transition.accepted:
                        logfire.info(
                            "Vote rejected",
                            script_id=str(script_id),
                            user_id=str(user_id),
                            reason=transition.reason.value,
                        )
                        return VoteResult(
                            accepted=False,
                            vote_state=current,
                            counters=script.counters,
                            reason=transition.reason,
                        )

                    if not await self._write_vote(script_id, user_id, transition):
                        logfire.warn(
                            "Vote ledger changed concurrently, retrying",
                            script_id=str(script_id),
                            user_id=str(user_id),
                            attempt=attempt,
                        )
                        continue

                    updated = await self._apply_delta(script_id, transition.delta)
                    logfire.info(
                        "Vote applied",
                        script_id=str(script_id),
                        user_id=str(user_id),
                        old_state=transition.old_state.value,
                        new_state=transition.new_state.value,
                        rating=updated.rating,
                        vote_count=updated.vote_count,
                        flag_weight=updated.flag_weight,
                    )
                    return VoteResult(
                        accepted=True,
                        vote_state=transition.new_state,
                        counters=updated.counters,
                    )

            logfire.error(
                "Vote retries exhausted",
                script_id=str(script_id),
                user_id=str(user_id),
                attempts=self.max_attempts,
            )
            raise ConcurrencyConflictError(
                str(script_id), str(user_id), self.max_attempts
            )

    async def set_flag(
        self, script_id: ScriptId, user_id: UserId | None, want_flagged: bool
    ) -> FlagResult:
        """Flag or unflag a script for a user.

        Args:
            script_id: Script ID
            user_id: Acting user, None if anonymous
            want_flagged: True to flag, False to unflag

        Returns:
            Flag result with the script's counters and removability

        Raises:
            NotFoundError: If the script does not exist
            ConcurrencyConflictError: If the user's own concurrent requests
                kept changing the flag for max_attempts attempts
            InconsistentCountersError: If stored counters are corrupt
            StorageUnavailableError: If the database cannot be reached
        """
        with logfire.span(
            "moderation.set_flag",
            script_id=str(script_id),
            user_id=str(user_id),
            want_flagged=want_flagged,
        ):
            if user_id is None:
                logfire.info("Anonymous flag rejected", script_id=str(script_id))
                return FlagResult(
                    accepted=False,
                    flagged=False,
                    counters=None,
                    reason=Rejection.AUTHENTICATION_REQUIRED,
                )

            with storage_errors("set_flag"):
                for attempt in range(1, self.max_attempts + 1):
                    # Fresh script and ledger state on every attempt
                    script = await self._load_script(script_id)
                    is_author = script.is_authored_by(user_id)

                    flagged = False
                    if not is_author:
                        flagged = (
                            await self.flag_repository.find_by_script_and_user(
                                script_id, user_id
                            )
                            is not None
                        )

                    transition = self.flag_weight_bridge.apply_flag(
                        flagged, want_flagged, is_author=is_author
                    )
                    if not transition.accepted:
                        logfire.info(
                            "Flag rejected",
                            script_id=str(script_id),
                            user_id=str(user_id),
                            reason=transition.reason.value,
                        )
                        if is_author:
                            return FlagResult(
                                accepted=False,
                                flagged=False,
                                counters=script.counters,
                                reason=transition.reason,
                            )
                        return FlagResult(
                            accepted=False,
                            flagged=flagged,
                            counters=script.counters,
                            removable=await self.removal_policy.is_removable(script),
                            reason=transition.reason,
                        )

                    if not await self._write_flag(script_id, user_id, transition):
                        logfire.warn(
                            "Flag ledger changed concurrently, retrying",
                            script_id=str(script_id),
                            user_id=str(user_id),
                            attempt=attempt,
                        )
                        continue

                    updated = await self._apply_delta(script_id, transition.delta)
                    removable = await self.removal_policy.is_removable(updated)
                    logfire.info(
                        "Flag applied",
                        script_id=str(script_id),
                        user_id=str(user_id),
                        flagged=transition.flagged,
                        flag_weight=updated.flag_weight,
                        removable=removable,
                    )
                    return FlagResult(
                        accepted=True,
                        flagged=transition.flagged,
                        counters=updated.counters,
                        removable=removable,
                    )

            logfire.error(
                "Flag retries exhausted",
                script_id=str(script_id),
                user_id=str(user_id),
                attempts=self.max_attempts,
            )
            raise ConcurrencyConflictError(
                str(script_id), str(user_id), self.max_attempts
            )

    async def reconcile_counters(self, script_id: ScriptId) -> ReconcileResult:
        """Recompute rating and vote count from the vote ledger.

        Flag weight is an accumulator with no ledger to rebuild it from and
        is left untouched.

        Args:
            script_id: Script ID

        Returns:
            Counters before and after reconciliation

        Raises:
            NotFoundError: If the script does not exist
            StorageUnavailableError: If the database cannot be reached
        """
        with logfire.span("moderation.reconcile_counters", script_id=str(script_id)):
            with storage_errors("reconcile_counters"):
                script = await self.script_repository.lock_for_update(script_id)
                if script is None:
                    logfire.warn(
                        "Reconcile on non-existent script", script_id=str(script_id)
                    )
                    raise NotFoundError("Script", str(script_id))

                rating, vote_count = await self.vote_repository.tally(script_id)
                before = script.counters
                if (rating, vote_count) == (script.rating, script.vote_count):
                    logfire.info(
                        "Counters already consistent", script_id=str(script_id)
                    )
                    return ReconcileResult(before=before, after=before)

                updated = await self.script_repository.set_vote_counters(
                    script_id, rating, vote_count
                )
                if updated is None:
                    raise NotFoundError("Script", str(script_id))

                logfire.warn(
                    "Counters reconciled from vote ledger",
                    script_id=str(script_id),
                    rating_before=before.rating,
                    rating_after=updated.rating,
                    vote_count_before=before.vote_count,
                    vote_count_after=updated.vote_count,
                )
                return ReconcileResult(before=before, after=updated.counters)

    async def _load_script(self, script_id: ScriptId) -> Script:
        script = await self.script_repository.find_by_id(script_id)
        if script is None:
            logfire.warn("Moderation on non-existent script", script_id=str(script_id))
            raise NotFoundError("Script", str(script_id))

        problems = script.counters.inconsistencies()
        if problems:
            logfire.error(
                "Inconsistent counters detected",
                script_id=str(script_id),
                rating=script.rating,
                vote_count=script.vote_count,
                problems=problems,
            )
            raise InconsistentCountersError(str(script_id), problems)
        return script

    async def _apply_delta(self, script_id: ScriptId, delta: CounterDelta) -> Script:
        updated = await self.script_repository.apply_counter_delta(script_id, delta)
        if updated is None:
            # Script vanished after the ledger write; the transaction rolls back
            logfire.error("Script disappeared mid-request", script_id=str(script_id))
            raise NotFoundError("Script", str(script_id))
        return updated

    async def _write_vote(
        self, script_id: ScriptId, user_id: UserId, transition: VoteTransition
    ) -> bool:
        old_up = transition.old_state is VoteState.UP
        if transition.ledger_action is LedgerAction.CREATE:
            return await self.vote_repository.insert_if_absent(
                Vote(
                    script_id=script_id,
                    user_id=user_id,
                    is_upvote=transition.new_state is VoteState.UP,
                )
            )
        if transition.ledger_action is LedgerAction.UPDATE:
            return await self.vote_repository.update_direction(
                script_id,
                user_id,
                expected_is_upvote=old_up,
                is_upvote=transition.new_state is VoteState.UP,
            )
        if transition.ledger_action is LedgerAction.DELETE:
            return await self.vote_repository.delete_if_matches(
                script_id, user_id, expected_is_upvote=old_up
            )
        raise ValueError(f"No ledger write for {transition.ledger_action.value}")

    async def _write_flag(
        self, script_id: ScriptId, user_id: UserId, transition: FlagTransition
    ) -> bool:
        if transition.ledger_action is LedgerAction.CREATE:
            return await self.flag_repository.insert_if_absent(
                Flag(script_id=script_id, user_id=user_id)
            )
        if transition.ledger_action is LedgerAction.DELETE:
            return await self.flag_repository.delete_by_script_and_user(
                script_id, user_id
            )
        raise ValueError(f"No ledger write for {transition.ledger_action.value}")
