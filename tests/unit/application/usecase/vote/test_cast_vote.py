"""Unit tests for CastVoteUseCase."""

from uuid import uuid4

import pytest

from scripthub.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from scripthub.domain.error import NotFoundError
from scripthub.domain.repository import ScriptRepository
from scripthub.domain.value import Rejection, VoteDirection, VoteState
from tests.conftest import make_script, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_up_vote_returns_counters(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        script = make_script(make_user("author"))
        await (await unit_env.get(ScriptRepository)).save(script)

        # Act
        response = await use_case.execute(
            CastVoteRequest(
                script_id=str(script.id),
                user_id=str(uuid4()),
                direction=VoteDirection.UP,
            )
        )

        # Assert
        assert response.accepted
        assert response.reason is None
        assert response.vote_state == VoteState.UP
        assert (response.rating, response.vote_count, response.flag_weight) == (1, 1, -1)

    @pytest.mark.asyncio
    async def test_anonymous_response_has_no_counters(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        script = make_script(make_user("author"))
        await (await unit_env.get(ScriptRepository)).save(script)

        response = await use_case.execute(
            CastVoteRequest(script_id=str(script.id), direction=VoteDirection.DOWN)
        )

        assert not response.accepted
        assert response.reason == Rejection.AUTHENTICATION_REQUIRED
        assert response.rating is None
        assert response.vote_count is None

    @pytest.mark.asyncio
    async def test_unknown_script_raises(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CastVoteRequest(
                    script_id=str(uuid4()),
                    user_id=str(uuid4()),
                    direction=VoteDirection.UP,
                )
            )
