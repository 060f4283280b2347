"""
User ORM model.

Account record created at registration. The primary key is the
identity provider's user id.

Dependencies: sqlalchemy, flowshare.boundary.db.base
System role: User persistence (the "users" collection)
"""

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from flowshare.boundary.db.base import Base, TimestampMixin
from flowshare.core.roles import Role


class UserModel(Base, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: Identity provider user id
        email: Lower-cased account email (unique, used for share lookups)
        role: Account role, fixed for the account lifetime
        display_name: Optional display name (the only mutable field)
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(128),
        primary_key=True,
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
    )

    role: Mapped[Role] = mapped_column(
        Enum(Role, values_callable=lambda e: [m.value for m in e], name="user_role"),
        nullable=False,
        default=Role.EDITOR,
    )

    display_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
    )
