"""Get Balance Use Case

Retrieves a profile's current and lifetime credits.
"""

from libs.result import Result, Return, Error
from src.app.repositories.profile_repository import ProfileRepository
from .dtos import BalanceResponseDTO


class GetBalance:
    """
    Get Balance Use Case

    Read-only operation; may observe a slightly stale balance while a
    concurrent mutation is in flight.
    """

    def __init__(self, profile_repo: ProfileRepository):
        self.profile_repo = profile_repo

    async def execute(self, profile_id: int) -> Result[BalanceResponseDTO]:
        """
        Errors:
            PROFILE_NOT_FOUND: No profile with this ID
        """
        profile = await self.profile_repo.get_by_id(profile_id)

        if not profile:
            return Return.err(
                Error(
                    code="PROFILE_NOT_FOUND",
                    message=f"Profile {profile_id} not found",
                )
            )

        return Return.ok(
            BalanceResponseDTO(
                profile_id=profile.id,
                current_credits=profile.current_credits,
                earned_credits=profile.earned_credits,
                last_updated=profile.updated_at,
            )
        )
