"""
User CRUD operations.

Provides Create, Read, Update, Delete operations for UserModel
with email lookup.

Dependencies: sqlalchemy, flowshare.boundary.db.models
System role: User persistence operations
"""

from sqlalchemy.ext.asyncio import AsyncSession

from flowshare.boundary.db.models.user_model import UserModel
from flowshare.boundary.db.CRUD.base_crud import BaseCRUD


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(
        self,
        session: AsyncSession,
        email: str,
    ) -> UserModel | None:
        """
        Retrieve the user registered with an email.

        Args:
            session: Async database session
            email: Email, compared lower-cased

        Returns:
            UserModel if found, None otherwise
        """
        users = await self.get_by_field(session, "email", email.strip().lower(), limit=1)
        return users[0] if users else None


user_crud = UserCRUD()
