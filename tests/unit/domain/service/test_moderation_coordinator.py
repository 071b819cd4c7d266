"""Unit tests for ModerationCoordinator."""

import asyncio
import itertools
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from scripthub.adapter.policy import MockThresholdPolicy
from scripthub.domain.error import (
    ConcurrencyConflictError,
    InconsistentCountersError,
    NotFoundError,
    StorageUnavailableError,
)
from scripthub.domain.model import ContentCounters, CounterDelta, Flag, Vote
from scripthub.domain.repository import (
    FlagRepository,
    ScriptRepository,
    UserRepository,
    VoteRepository,
)
from scripthub.domain.service import (
    FlagWeightBridge,
    ModerationCoordinator,
    RemovalPolicy,
    VotingEngine,
)
from scripthub.domain.value import Rejection, ScriptId, UserId, VoteDirection, VoteState
from scripthub.persistence.repository.inmemory import (
    InMemoryFlagRepository,
    InMemoryScriptRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from tests.conftest import make_script, make_user
from tests.harness import create_env_fixture

# Unit test fixture - in-memory repositories, threshold fixed at 2
unit_env = create_env_fixture()


async def _seed(env, **counters):
    """Store an author, a voter and a script; return (script, author, voter)."""
    users = await env.get(UserRepository)
    author = make_user("author")
    voter = make_user("voter")
    await users.save(author)
    await users.save(voter)
    script = make_script(author, **counters)
    await (await env.get(ScriptRepository)).save(script)
    return script, author, voter


def _counters(rating: int, vote_count: int, flag_weight: int) -> ContentCounters:
    return ContentCounters(rating=rating, vote_count=vote_count, flag_weight=flag_weight)


def _build_coordinator(
    script_repository: ScriptRepository | None = None,
    vote_repository: VoteRepository | None = None,
    flag_repository: FlagRepository | None = None,
    max_attempts: int = 3,
) -> ModerationCoordinator:
    bridge = FlagWeightBridge()
    return ModerationCoordinator(
        script_repository=script_repository or InMemoryScriptRepository(),
        vote_repository=vote_repository or InMemoryVoteRepository(),
        flag_repository=flag_repository or InMemoryFlagRepository(),
        voting_engine=VotingEngine(flag_weight_bridge=bridge),
        flag_weight_bridge=bridge,
        removal_policy=RemovalPolicy(
            threshold_policy=MockThresholdPolicy(),
            user_repository=InMemoryUserRepository(),
        ),
        max_attempts=max_attempts,
    )


class TestCastVote:
    """Tests for cast_vote."""

    @pytest.mark.asyncio
    async def test_scenario_a_up_flip_unvote(self, unit_env):
        """Up, flip to down, then retract returns every counter to zero."""
        # Arrange
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env)

        # Act & Assert
        up = await coordinator.cast_vote(script.id, voter.id, VoteDirection.UP)
        assert up.accepted
        assert up.vote_state == VoteState.UP
        assert up.counters == _counters(1, 1, -1)

        down = await coordinator.cast_vote(script.id, voter.id, VoteDirection.DOWN)
        assert down.accepted
        assert down.vote_state == VoteState.DOWN
        assert down.counters == _counters(-1, 1, 0)

        unvote = await coordinator.cast_vote(script.id, voter.id, VoteDirection.UNVOTE)
        assert unvote.accepted
        assert unvote.vote_state == VoteState.NO_VOTE
        assert unvote.counters == _counters(0, 0, 0)

        vote_repo = await unit_env.get(VoteRepository)
        assert await vote_repo.find_by_script_and_user(script.id, voter.id) is None

    @pytest.mark.asyncio
    async def test_scenario_b_concurrent_up_votes(self, unit_env):
        """Two users voting up at once both count."""
        # Arrange
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, first = await _seed(unit_env)
        second = make_user("second")
        await (await unit_env.get(UserRepository)).save(second)

        # Act
        await asyncio.gather(
            coordinator.cast_vote(script.id, first.id, VoteDirection.UP),
            coordinator.cast_vote(script.id, second.id, VoteDirection.UP),
        )

        # Assert
        stored = await (await unit_env.get(ScriptRepository)).find_by_id(script.id)
        assert stored.counters == _counters(2, 2, -2)

    @pytest.mark.asyncio
    async def test_repeated_vote_is_idempotent(self, unit_env):
        # Arrange
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env)
        first = await coordinator.cast_vote(script.id, voter.id, VoteDirection.UP)

        # Act
        second = await coordinator.cast_vote(script.id, voter.id, VoteDirection.UP)

        # Assert
        assert not second.accepted
        assert second.reason == Rejection.DUPLICATE_VOTE
        assert second.vote_state == VoteState.UP
        assert second.counters == first.counters

    @pytest.mark.asyncio
    async def test_flip_back_restores_state(self, unit_env):
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env)

        first = await coordinator.cast_vote(script.id, voter.id, VoteDirection.UP)
        await coordinator.cast_vote(script.id, voter.id, VoteDirection.DOWN)
        back = await coordinator.cast_vote(script.id, voter.id, VoteDirection.UP)

        assert back.counters == first.counters

    @pytest.mark.asyncio
    @pytest.mark.parametrize("direction", list(VoteDirection))
    async def test_author_cannot_vote(self, unit_env, direction):
        """The author's votes never touch counters or the ledger."""
        # Arrange
        coordinator = await unit_env.get(ModerationCoordinator)
        script, author, _ = await _seed(unit_env)

        # Act
        result = await coordinator.cast_vote(script.id, author.id, direction)

        # Assert
        assert not result.accepted
        assert result.reason == Rejection.AUTHOR
        assert result.counters == _counters(0, 0, 0)
        vote_repo = await unit_env.get(VoteRepository)
        assert await vote_repo.find_by_script(script.id) == []

    @pytest.mark.asyncio
    async def test_anonymous_vote_is_rejected(self, unit_env):
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, _ = await _seed(unit_env)

        result = await coordinator.cast_vote(script.id, None, VoteDirection.UP)

        assert not result.accepted
        assert result.reason == Rejection.AUTHENTICATION_REQUIRED
        assert result.counters is None

    @pytest.mark.asyncio
    async def test_unvote_without_vote_is_rejected(self, unit_env):
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env)

        result = await coordinator.cast_vote(script.id, voter.id, VoteDirection.UNVOTE)

        assert not result.accepted
        assert result.reason == Rejection.NO_VOTE_TO_RETRACT
        assert result.counters == _counters(0, 0, 0)

    @pytest.mark.asyncio
    async def test_missing_script_raises_not_found(self, unit_env):
        coordinator = await unit_env.get(ModerationCoordinator)

        with pytest.raises(NotFoundError):
            await coordinator.cast_vote(
                ScriptId(uuid4()), UserId(uuid4()), VoteDirection.UP
            )

    @pytest.mark.asyncio
    async def test_inconsistent_counters_are_not_trusted(self, unit_env):
        # Arrange - rating cannot exceed the number of votes
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env, rating=3, vote_count=1)

        # Act & Assert
        with pytest.raises(InconsistentCountersError):
            await coordinator.cast_vote(script.id, voter.id, VoteDirection.UP)
        vote_repo = await unit_env.get(VoteRepository)
        assert await vote_repo.find_by_script(script.id) == []


class _RacingVoteRepository(InMemoryVoteRepository):
    """Vote ledger where the user's own parallel request wins the first insert.

    The parallel request's down-vote lands, with its counter delta, between
    this request's read and its insert.
    """

    def __init__(self, script_repository: InMemoryScriptRepository) -> None:
        super().__init__()
        self.script_repository = script_repository
        self.raced = False

    async def insert_if_absent(self, vote: Vote) -> bool:
        if not self.raced:
            self.raced = True
            await super().insert_if_absent(vote.model_copy(update={"is_upvote": False}))
            await self.script_repository.apply_counter_delta(
                vote.script_id, CounterDelta(rating=-1, vote_count=1)
            )
            return False
        return await super().insert_if_absent(vote)


class _AlwaysLosingVoteRepository(InMemoryVoteRepository):
    def __init__(self) -> None:
        super().__init__()
        self.attempts = 0

    async def insert_if_absent(self, vote: Vote) -> bool:
        self.attempts += 1
        return False


class _RacingFlagRepository(InMemoryFlagRepository):
    """Flag ledger where the user's own parallel flag request lands first."""

    def __init__(self, script_repository: InMemoryScriptRepository) -> None:
        super().__init__()
        self.script_repository = script_repository
        self.raced = False

    async def insert_if_absent(self, flag: Flag) -> bool:
        if not self.raced:
            self.raced = True
            await super().insert_if_absent(flag)
            await self.script_repository.apply_counter_delta(
                flag.script_id, CounterDelta(flag_weight=1)
            )
            return False
        return await super().insert_if_absent(flag)


class _AlwaysLosingFlagRepository(InMemoryFlagRepository):
    def __init__(self) -> None:
        super().__init__()
        self.attempts = 0

    async def insert_if_absent(self, flag: Flag) -> bool:
        self.attempts += 1
        return False


class _UnreachableScriptRepository(InMemoryScriptRepository):
    async def find_by_id(self, script_id):
        raise OperationalError("SELECT scripts", {}, ConnectionRefusedError())


class TestConcurrency:
    """Tests for compare-and-swap retries and storage failures."""

    @pytest.mark.asyncio
    async def test_lost_race_is_retried_against_fresh_state(self):
        # Arrange
        scripts = InMemoryScriptRepository()
        votes = _RacingVoteRepository(scripts)
        coordinator = _build_coordinator(scripts, votes)
        script = make_script(make_user("author"))
        await scripts.save(script)
        voter = UserId(uuid4())

        # Act - the retry sees the parallel down-vote and flips it
        result = await coordinator.cast_vote(script.id, voter, VoteDirection.UP)

        # Assert
        assert result.accepted
        assert result.vote_state == VoteState.UP
        assert result.counters == _counters(1, 1, -1)
        stored = await votes.find_by_script_and_user(script.id, voter)
        assert stored.is_upvote

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise_conflict(self):
        # Arrange
        scripts = InMemoryScriptRepository()
        votes = _AlwaysLosingVoteRepository()
        coordinator = _build_coordinator(scripts, votes, max_attempts=3)
        script = make_script(make_user("author"))
        await scripts.save(script)

        # Act & Assert
        with pytest.raises(ConcurrencyConflictError) as exc_info:
            await coordinator.cast_vote(script.id, UserId(uuid4()), VoteDirection.UP)
        assert exc_info.value.attempts == 3
        assert votes.attempts == 3
        assert (await scripts.find_by_id(script.id)).counters == _counters(0, 0, 0)

    @pytest.mark.asyncio
    async def test_storage_failure_is_surfaced(self):
        coordinator = _build_coordinator(_UnreachableScriptRepository())

        with pytest.raises(StorageUnavailableError):
            await coordinator.cast_vote(
                ScriptId(uuid4()), UserId(uuid4()), VoteDirection.UP
            )

    def test_max_attempts_must_be_positive(self):
        with pytest.raises(ValueError):
            _build_coordinator(max_attempts=0)

    @pytest.mark.asyncio
    async def test_lost_flag_race_is_retried_against_fresh_state(self):
        # Arrange
        scripts = InMemoryScriptRepository()
        flags = _RacingFlagRepository(scripts)
        coordinator = _build_coordinator(scripts, flag_repository=flags)
        script = make_script(make_user("author"))
        await scripts.save(script)
        flagger = UserId(uuid4())

        # Act - the retry finds the parallel flag already in place
        result = await coordinator.set_flag(script.id, flagger, True)

        # Assert - counted once, reported with the fresh counters
        assert not result.accepted
        assert result.reason == Rejection.ALREADY_FLAGGED
        assert result.flagged
        assert result.counters == _counters(0, 0, 1)
        assert (await scripts.find_by_id(script.id)).flag_weight == 1

    @pytest.mark.asyncio
    async def test_exhausted_flag_retries_raise_conflict(self):
        # Arrange
        scripts = InMemoryScriptRepository()
        flags = _AlwaysLosingFlagRepository()
        coordinator = _build_coordinator(scripts, flag_repository=flags, max_attempts=2)
        script = make_script(make_user("author"))
        await scripts.save(script)

        # Act & Assert
        with pytest.raises(ConcurrencyConflictError) as exc_info:
            await coordinator.set_flag(script.id, UserId(uuid4()), True)
        assert exc_info.value.attempts == 2
        assert flags.attempts == 2
        assert (await scripts.find_by_id(script.id)).flag_weight == 0

    @pytest.mark.asyncio
    async def test_flag_storage_failure_is_surfaced(self):
        coordinator = _build_coordinator(_UnreachableScriptRepository())

        with pytest.raises(StorageUnavailableError):
            await coordinator.set_flag(ScriptId(uuid4()), UserId(uuid4()), True)


class TestSetFlag:
    """Tests for set_flag."""

    @pytest.mark.asyncio
    async def test_scenario_c_flag_then_unflag(self, unit_env):
        """Flag adds one, crosses the threshold, unflag takes it back."""
        # Arrange - threshold is 2
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env, flag_weight=1)

        # Act & Assert
        flagged = await coordinator.set_flag(script.id, voter.id, True)
        assert flagged.accepted
        assert flagged.flagged
        assert flagged.counters.flag_weight == 2
        assert flagged.removable

        unflagged = await coordinator.set_flag(script.id, voter.id, False)
        assert unflagged.accepted
        assert not unflagged.flagged
        assert unflagged.counters.flag_weight == 1
        assert not unflagged.removable

        flag_repo = await unit_env.get(FlagRepository)
        assert await flag_repo.find_by_script_and_user(script.id, voter.id) is None

    @pytest.mark.asyncio
    async def test_flag_below_threshold_is_not_removable(self, unit_env):
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env)

        result = await coordinator.set_flag(script.id, voter.id, True)

        assert result.accepted
        assert result.counters.flag_weight == 1
        assert not result.removable

    @pytest.mark.asyncio
    async def test_double_flag_is_rejected(self, unit_env):
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env)
        await coordinator.set_flag(script.id, voter.id, True)

        result = await coordinator.set_flag(script.id, voter.id, True)

        assert not result.accepted
        assert result.reason == Rejection.ALREADY_FLAGGED
        assert result.flagged
        assert result.counters.flag_weight == 1

    @pytest.mark.asyncio
    async def test_unflag_without_flag_is_rejected(self, unit_env):
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env)

        result = await coordinator.set_flag(script.id, voter.id, False)

        assert not result.accepted
        assert result.reason == Rejection.NOT_FLAGGED
        assert result.counters.flag_weight == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("want_flagged", [True, False])
    async def test_author_cannot_flag(self, unit_env, want_flagged):
        # Arrange
        coordinator = await unit_env.get(ModerationCoordinator)
        script, author, _ = await _seed(unit_env, flag_weight=5)

        # Act
        result = await coordinator.set_flag(script.id, author.id, want_flagged)

        # Assert - the threshold is never evaluated for the author
        assert not result.accepted
        assert result.reason == Rejection.AUTHOR
        assert not result.removable
        assert result.counters.flag_weight == 5

    @pytest.mark.asyncio
    async def test_anonymous_flag_is_rejected(self, unit_env):
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, _ = await _seed(unit_env)

        result = await coordinator.set_flag(script.id, None, True)

        assert not result.accepted
        assert result.reason == Rejection.AUTHENTICATION_REQUIRED

    @pytest.mark.asyncio
    async def test_up_vote_offsets_flag(self, unit_env):
        """An up-vote and a flag by the same user cancel out."""
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env)

        await coordinator.cast_vote(script.id, voter.id, VoteDirection.UP)
        result = await coordinator.set_flag(script.id, voter.id, True)

        assert result.counters == _counters(1, 1, 0)

    @pytest.mark.asyncio
    async def test_missing_script_raises_not_found(self, unit_env):
        coordinator = await unit_env.get(ModerationCoordinator)
        flag_repo = await unit_env.get(FlagRepository)
        script_id, user_id = ScriptId(uuid4()), UserId(uuid4())

        with pytest.raises(NotFoundError):
            await coordinator.set_flag(script_id, user_id, True)
        assert await flag_repo.find_by_script_and_user(script_id, user_id) is None


class TestVoteFlagCoupling:
    """Flag weight tracks the up-vote for every sequence of vote requests."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "directions", list(itertools.product(VoteDirection, repeat=3))
    )
    async def test_flag_weight_follows_final_vote(self, unit_env, directions):
        # Arrange
        coordinator = await unit_env.get(ModerationCoordinator)
        vote_repo = await unit_env.get(VoteRepository)
        script, _, voter = await _seed(unit_env)

        # Act - rejected requests are part of the sequence too
        for direction in directions:
            await coordinator.cast_vote(script.id, voter.id, direction)

        # Assert
        stored = await (await unit_env.get(ScriptRepository)).find_by_id(script.id)
        vote = await vote_repo.find_by_script_and_user(script.id, voter.id)
        final = vote.state if vote else VoteState.NO_VOTE
        assert stored.flag_weight == (-1 if final is VoteState.UP else 0)
        assert (stored.rating, stored.vote_count) == await vote_repo.tally(script.id)


class TestReconcileCounters:
    """Tests for reconcile_counters."""

    @pytest.mark.asyncio
    async def test_drifted_counters_are_rebuilt_from_votes(self, unit_env):
        # Arrange - one up-vote in the ledger, counters claim three votes
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env, rating=3, vote_count=3, flag_weight=4)
        vote_repo = await unit_env.get(VoteRepository)
        await vote_repo.insert_if_absent(
            Vote(script_id=script.id, user_id=voter.id, is_upvote=True)
        )

        # Act
        result = await coordinator.reconcile_counters(script.id)

        # Assert - flag weight has no ledger and is left alone
        assert result.changed
        assert result.before == _counters(3, 3, 4)
        assert result.after == _counters(1, 1, 4)

    @pytest.mark.asyncio
    async def test_consistent_counters_are_left_alone(self, unit_env):
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _, voter = await _seed(unit_env)
        await coordinator.cast_vote(script.id, voter.id, VoteDirection.DOWN)

        result = await coordinator.reconcile_counters(script.id)

        assert not result.changed
        assert result.after == _counters(-1, 1, 0)

    @pytest.mark.asyncio
    async def test_missing_script_raises_not_found(self, unit_env):
        coordinator = await unit_env.get(ModerationCoordinator)

        with pytest.raises(NotFoundError):
            await coordinator.reconcile_counters(ScriptId(uuid4()))
