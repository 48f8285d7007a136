"""Free-tier quota checks."""

from pydantic import BaseModel

from clipkeeper.config import settings
from clipkeeper.exceptions import UserNotFoundError
from clipkeeper.repository import LinkRepository


class QuotaStatus(BaseModel):
    """Current link usage for a user."""

    is_premium: bool
    link_count: int
    limit: int | None  # None for premium users
    remaining: int | None


class QuotaService:
    """Service deciding whether a user may save another link."""

    def __init__(self, repository: LinkRepository, limit: int | None = None):
        self.repository = repository
        self.limit = limit if limit is not None else settings.free_tier_link_limit

    def check_quota(self, user_id: int) -> bool:
        """
        Check whether the user may add a link.

        Premium users are always allowed; free users are denied once they
        hold ``limit`` links.

        Args:
            user_id: User ID

        Returns:
            True if a new link is allowed

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = self.repository.get_user_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        if user.is_premium:
            return True

        return self.repository.get_link_count(user_id) < self.limit

    def usage(self, user_id: int) -> QuotaStatus:
        user = self.repository.get_user_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        link_count = self.repository.get_link_count(user_id)
        if user.is_premium:
            return QuotaStatus(
                is_premium=True, link_count=link_count, limit=None, remaining=None
            )

        return QuotaStatus(
            is_premium=False,
            link_count=link_count,
            limit=self.limit,
            remaining=max(self.limit - link_count, 0),
        )
