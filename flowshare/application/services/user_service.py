"""
User service.

Registers authenticated identities as accounts and resolves share
targets by email.

Dependencies: sqlalchemy, flowshare.boundary.db.CRUD, flowshare.models
System role: User account use cases and user lookup
"""

import logging
from datetime import timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from flowshare.application.services.store_errors import guard_store
from flowshare.boundary.db.CRUD.user_crud import user_crud
from flowshare.boundary.db.base import utc_now
from flowshare.boundary.db.models.user_model import UserModel
from flowshare.core.exceptions import UserNotFoundError, ValidationError
from flowshare.core.roles import Role
from flowshare.models.user import UserDocument

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def to_user(model: UserModel) -> UserDocument:
    created_at = model.created_at or utc_now()
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return UserDocument(
        id=model.id,
        email=model.email,
        role=Role(model.role),
        display_name=model.display_name,
        created_at=created_at,
    )


class UserService:
    """User account service."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize user service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def register_user(
        self,
        user_id: str,
        email: str,
        role: Role = Role.EDITOR,
        display_name: str | None = None,
    ) -> UserDocument:
        """
        Create the account for an authenticated identity.

        Args:
            user_id: Identity provider user id
            email: Account email, stored lower-cased
            role: Account role (fixed afterwards)
            display_name: Optional display name

        Returns:
            UserDocument: Created account

        Raises:
            ValidationError: If the id or the email is already registered,
                including a registration that loses a concurrent race
            StorageError: If the store fails
        """
        email = normalize_email(email)
        if not user_id or not user_id.strip():
            raise ValidationError("User id is required", field="user_id")
        if not email:
            raise ValidationError("Email is required", field="email")

        async with guard_store(self.db, "create", user_id=user_id):
            if await user_crud.exists(self.db, user_id):
                raise ValidationError("User is already registered", field="user_id")
            if await user_crud.get_by_email(self.db, email) is not None:
                raise ValidationError("Email is already registered", field="email")

            try:
                user = await user_crud.create(
                    self.db,
                    id=user_id,
                    email=email,
                    role=Role(role),
                    display_name=display_name,
                )
                await self.db.commit()
            except IntegrityError as exc:
                # a concurrent registration took the id or email first
                await self.db.rollback()
                logger.warning(
                    "User registration conflict",
                    extra={"user_id": user_id, "error_type": type(exc).__name__},
                )
                raise ValidationError(
                    "User or email is already registered", field="email"
                ) from exc

        logger.info(
            "User registered",
            extra={"user_id": user_id, "role": Role(role).value},
        )
        return to_user(user)

    async def get_user(self, user_id: str) -> UserDocument | None:
        """Fetch an account by id, None if it was never registered."""
        async with guard_store(self.db, "get", user_id=user_id):
            user = await user_crud.get_by_id(self.db, user_id)
        return to_user(user) if user is not None else None

    async def find_by_email(self, email: str) -> UserDocument | None:
        """
        Look up an account by email, ignoring case and surrounding spaces.

        Args:
            email: Email to look up

        Returns:
            UserDocument if registered, None otherwise
        """
        email = normalize_email(email)
        if not email:
            return None
        async with guard_store(self.db, "query", email=email):
            user = await user_crud.get_by_email(self.db, email)
        return to_user(user) if user is not None else None

    async def update_display_name(
        self,
        user_id: str,
        display_name: str | None,
    ) -> UserDocument:
        """
        Change the display name of an account.

        Raises:
            UserNotFoundError: If the account does not exist
        """
        async with guard_store(self.db, "update", user_id=user_id):
            user = await user_crud.update_by_id(
                self.db,
                user_id,
                display_name=display_name,
                updated_at=utc_now(),
            )
            if user is None:
                await self.db.rollback()
            else:
                await self.db.commit()

        if user is None:
            raise UserNotFoundError("User not found", user_id=user_id)

        logger.info("User profile updated", extra={"user_id": user_id})
        return to_user(user)
