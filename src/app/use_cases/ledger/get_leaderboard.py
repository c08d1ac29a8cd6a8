"""Get Leaderboard Use Case

Ranks profiles by lifetime earned credits.
"""

from typing import Optional
from libs.result import Result, Return, Error
from config import ApplicationConfig
from src.app.repositories.profile_repository import ProfileRepository
from .dtos import LeaderboardEntryDTO, LeaderboardResponseDTO


class GetLeaderboard:
    """
    Use case: Top profiles by earned_credits

    Ties on earned_credits are ordered by profile id so repeated reads of an
    unchanged ledger return the same ranking.
    """

    def __init__(self, profile_repo: ProfileRepository, max_size: Optional[int] = None):
        self.profile_repo = profile_repo
        if max_size is None:
            max_size = ApplicationConfig.LEADERBOARD_MAX_SIZE
        self.max_size = max_size

    async def execute(self, limit: Optional[int] = None) -> Result[LeaderboardResponseDTO]:
        if limit is None:
            limit = ApplicationConfig.LEADERBOARD_DEFAULT_SIZE

        if limit < 1:
            return Return.err(
                Error(
                    code="INVALID_LIMIT",
                    message=f"Leaderboard size must be at least 1, got {limit}",
                )
            )

        limit = min(limit, self.max_size)
        profiles = await self.profile_repo.get_top_by_earned_credits(limit)

        entries = [
            LeaderboardEntryDTO(
                rank=position,
                profile_id=profile.id,
                display_name=profile.display_name,
                earned_credits=profile.earned_credits,
                current_credits=profile.current_credits,
            )
            for position, profile in enumerate(profiles, start=1)
        ]

        return Return.ok(LeaderboardResponseDTO(entries=entries, limit=limit))
