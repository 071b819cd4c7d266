"""Get moderation status use case."""

from uuid import UUID

from pydantic import BaseModel

from scripthub.application.usecase.base import BaseUseCase
from scripthub.domain.error import NotFoundError
from scripthub.domain.repository import (
    FlagRepository,
    ScriptRepository,
    UserRepository,
    VoteRepository,
)
from scripthub.domain.service import RemovalPolicy
from scripthub.domain.value import ScriptId, UserId, VoteState


class GetModerationStatusRequest(BaseModel):
    """Get moderation status request."""

    script_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetModerationStatusResponse(BaseModel):
    """Voting, flagging and removal state of a script as seen by one user.

    ``removable`` and ``threshold`` are only filled in for moderators.
    """

    script_id: str
    is_lib: bool
    rating: int
    vote_count: int
    flag_weight: int
    voteable: bool
    voted_up: bool
    voted_down: bool
    can_flag: bool
    flagged: bool
    removable: bool | None = None
    threshold: int | None = None


class GetModerationStatusUseCase(BaseUseCase):
    """Use case for rendering the voting/flagging panel of a script."""

    def __init__(
        self,
        script_repository: ScriptRepository,
        vote_repository: VoteRepository,
        flag_repository: FlagRepository,
        user_repository: UserRepository,
        removal_policy: RemovalPolicy,
    ) -> None:
        self.script_repository = script_repository
        self.vote_repository = vote_repository
        self.flag_repository = flag_repository
        self.user_repository = user_repository
        self.removal_policy = removal_policy

    async def execute(
        self, request: GetModerationStatusRequest
    ) -> GetModerationStatusResponse:
        """Execute get moderation status flow.

        Anonymous users and the author can neither vote nor flag, and the
        removal threshold is never computed for them.

        Raises:
            NotFoundError: If the script does not exist
        """
        script_id = ScriptId(UUID(request.script_id))
        script = await self.script_repository.find_by_id(script_id)
        if script is None:
            raise NotFoundError("Script", request.script_id)

        response = GetModerationStatusResponse(
            script_id=request.script_id,
            is_lib=script.is_lib,
            rating=script.rating,
            vote_count=script.vote_count,
            flag_weight=script.flag_weight,
            voteable=False,
            voted_up=False,
            voted_down=False,
            can_flag=False,
            flagged=False,
        )

        if not request.user_id:
            return response

        user_id = UserId(UUID(request.user_id))
        if script.is_authored_by(user_id):
            return response

        vote = await self.vote_repository.find_by_script_and_user(script_id, user_id)
        state = vote.state if vote else VoteState.NO_VOTE
        flag = await self.flag_repository.find_by_script_and_user(script_id, user_id)

        response.voteable = True
        response.voted_up = state is VoteState.UP
        response.voted_down = state is VoteState.DOWN
        response.can_flag = True
        response.flagged = flag is not None

        user = await self.user_repository.find_by_id(user_id)
        if user is not None and user.role.can_moderate:
            assessment = await self.removal_policy.assess(script)
            response.removable = assessment.removable
            response.threshold = assessment.threshold

        return response
