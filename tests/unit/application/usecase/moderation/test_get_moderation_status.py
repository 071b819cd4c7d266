"""Unit tests for GetModerationStatusUseCase."""

from uuid import uuid4

import pytest

from scripthub.application.usecase.moderation import (
    GetModerationStatusRequest,
    GetModerationStatusUseCase,
)
from scripthub.domain.error import NotFoundError
from scripthub.domain.repository import ScriptRepository, UserRepository
from scripthub.domain.service import ModerationCoordinator
from scripthub.domain.value import UserRole, VoteDirection
from tests.conftest import make_script, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(env, **counters):
    users = await env.get(UserRepository)
    author = make_user("author")
    await users.save(author)
    script = make_script(author, **counters)
    await (await env.get(ScriptRepository)).save(script)
    return script, author


class TestGetModerationStatusUseCase:
    """Tests for GetModerationStatusUseCase."""

    @pytest.mark.asyncio
    async def test_anonymous_sees_counters_only(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetModerationStatusUseCase)
        script, _ = await _seed(unit_env, rating=1, vote_count=1, flag_weight=-1)

        # Act
        response = await use_case.execute(
            GetModerationStatusRequest(script_id=str(script.id))
        )

        # Assert
        assert response.rating == 1
        assert response.vote_count == 1
        assert response.flag_weight == -1
        assert not response.voteable
        assert not response.can_flag
        assert response.removable is None
        assert response.threshold is None

    @pytest.mark.asyncio
    async def test_author_cannot_vote_or_flag(self, unit_env):
        use_case = await unit_env.get(GetModerationStatusUseCase)
        script, author = await _seed(unit_env)

        response = await use_case.execute(
            GetModerationStatusRequest(script_id=str(script.id), user_id=str(author.id))
        )

        assert not response.voteable
        assert not response.can_flag

    @pytest.mark.asyncio
    async def test_voter_sees_own_vote_and_flag(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetModerationStatusUseCase)
        coordinator = await unit_env.get(ModerationCoordinator)
        script, _ = await _seed(unit_env)
        voter = make_user("voter")
        await (await unit_env.get(UserRepository)).save(voter)
        await coordinator.cast_vote(script.id, voter.id, VoteDirection.DOWN)
        await coordinator.set_flag(script.id, voter.id, True)

        # Act
        response = await use_case.execute(
            GetModerationStatusRequest(script_id=str(script.id), user_id=str(voter.id))
        )

        # Assert - ordinary users get no removal details
        assert response.voteable
        assert response.voted_down
        assert not response.voted_up
        assert response.can_flag
        assert response.flagged
        assert response.removable is None

    @pytest.mark.asyncio
    async def test_moderator_sees_threshold(self, unit_env):
        # Arrange - mock threshold is 2
        use_case = await unit_env.get(GetModerationStatusUseCase)
        script, _ = await _seed(unit_env, flag_weight=2)
        moderator = make_user("mod", role=UserRole.MODERATOR)
        await (await unit_env.get(UserRepository)).save(moderator)

        # Act
        response = await use_case.execute(
            GetModerationStatusRequest(
                script_id=str(script.id), user_id=str(moderator.id)
            )
        )

        # Assert
        assert response.threshold == 2
        assert response.removable

    @pytest.mark.asyncio
    async def test_unknown_script_raises(self, unit_env):
        use_case = await unit_env.get(GetModerationStatusUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetModerationStatusRequest(script_id=str(uuid4())))
