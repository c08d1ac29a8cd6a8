"""CreateProfile Use Case

Opens a credit profile the first time a user participates.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.profile_repository import ProfileRepository
from src.domain.profile import Profile
from .dtos import CreateProfileCommandDTO, ProfileResponseDTO

logger = logging.getLogger(__name__)


class CreateProfile:
    """
    Use Case: Get or create the profile of a user

    Business Rules:
    1. One profile per user; an existing profile is returned unchanged
    2. New profiles start with zero current and earned credits
    """

    def __init__(self, uow: UnitOfWork, profile_repo: ProfileRepository):
        self.uow = uow
        self.profile_repo = profile_repo

    async def execute(self, command: CreateProfileCommandDTO) -> Result[ProfileResponseDTO]:
        try:
            profile = await self.profile_repo.get_by_user_id(command.user_id)
            if profile:
                return Return.ok(self._to_response_dto(profile))

            profile = await self.profile_repo.create(
                Profile(
                    user_id=command.user_id,
                    display_name=command.display_name,
                    current_credits=0,
                    earned_credits=0,
                )
            )
            await self.uow.commit()

            logger.info(f"Created profile {profile.id} for user {command.user_id}")
            return Return.ok(self._to_response_dto(profile))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Creating profile for user {command.user_id} failed: {e}")
            return Return.err(
                Error(
                    code="CREATE_PROFILE_FAILED",
                    message=f"Failed to create profile for user {command.user_id}",
                    reason=str(e),
                )
            )

    def _to_response_dto(self, profile: Profile) -> ProfileResponseDTO:
        return ProfileResponseDTO(
            profile_id=profile.id,
            user_id=profile.user_id,
            display_name=profile.display_name,
            current_credits=profile.current_credits,
            earned_credits=profile.earned_credits,
            created_at=profile.created_at,
        )
