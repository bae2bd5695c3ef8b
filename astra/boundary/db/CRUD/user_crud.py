"""
User CRUD operations.

Dependencies: sqlalchemy, astra.boundary.db.models
System role: Team membership lookup for the request gate
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from astra.boundary.db.models.user_model import UserModel


class UserCRUD:
    """Read operations on the users table."""

    def __init__(self) -> None:
        self.model = UserModel

    async def get_team_id(self, session: AsyncSession, user_id: UUID) -> UUID | None:
        """
        Get the team a user belongs to.

        Args:
            session: Async database session
            user_id: User UUID

        Returns:
            UUID | None: Team id, or None when the user is unknown or teamless
        """
        stmt = select(self.model.team_id).where(self.model.id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


user_crud = UserCRUD()
