"""
Diagram ORM model.

Stores a diagram document: metadata, the full node and edge lists and
the access map, each graph part kept as a JSON document column.

Dependencies: sqlalchemy, flowshare.boundary.db.base
System role: Diagram persistence (the "diagrams" collection)
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from flowshare.boundary.db.base import Base, DocumentIdMixin, TimestampMixin


class DiagramModel(Base, DocumentIdMixin, TimestampMixin):
    """
    Diagram ORM model.

    No foreign keys: owner and access entries reference identity-provider
    user ids that may not be registered in the users table.

    Attributes:
        id: Generated document id (immutable)
        title: Diagram title (255 char limit)
        description: Optional description (up to 4096 chars)
        owner_id: User id of the owner, always resolves to editor
        owner_email: Owner email at creation time
        nodes: JSON list of node documents
        edges: JSON list of edge documents
        access: JSON map user_id -> {role, email, added_at}
        created_at: Creation timestamp (UTC)
        updated_at: Last content/metadata/access change (UTC)
    """

    __tablename__ = "diagrams"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Diagram title"
    )

    description: Mapped[str | None] = mapped_column(
        String(4096),
        nullable=True,
        default=None,
        doc="Diagram description"
    )

    owner_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        index=True,
        doc="Owner user id"
    )

    owner_email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        doc="Owner email"
    )

    nodes: Mapped[list | None] = mapped_column(
        JSON,
        nullable=True,
        default=list,
        doc="Node documents"
    )

    edges: Mapped[list | None] = mapped_column(
        JSON,
        nullable=True,
        default=list,
        doc="Edge documents"
    )

    access: Mapped[dict | None] = mapped_column(
        JSON,
        nullable=True,
        default=dict,
        doc="Access map keyed by user id"
    )
