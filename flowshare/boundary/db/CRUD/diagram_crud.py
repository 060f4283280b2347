"""
Diagram CRUD operations.

Provides Create, Read, Update, Delete operations for DiagramModel
with ownership and sharing queries.

Dependencies: sqlalchemy, flowshare.boundary.db.models
System role: Diagram persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flowshare.boundary.db.models.diagram_model import DiagramModel
from flowshare.boundary.db.CRUD.base_crud import BaseCRUD


class DiagramCRUD(BaseCRUD[DiagramModel]):
    """
    CRUD operations for DiagramModel.

    Extends BaseCRUD with owner and access-map queries.
    """

    def __init__(self) -> None:
        """Initialize DiagramCRUD with DiagramModel."""
        super().__init__(DiagramModel)

    async def get_by_owner(
        self,
        session: AsyncSession,
        owner_id: str,
    ) -> Sequence[DiagramModel]:
        """
        Retrieve all diagrams owned by a user.

        Args:
            session: Async database session
            owner_id: Owner user id

        Returns:
            Sequence of DiagramModels, oldest first
        """
        return await self.get_by_field(session, "owner_id", owner_id)

    async def get_shared_with(
        self,
        session: AsyncSession,
        user_id: str,
    ) -> list[DiagramModel]:
        """
        Retrieve diagrams listing a user in their access map, excluding owned ones.

        The access map is a JSON document, so membership is checked
        after loading rather than in SQL.

        Args:
            session: Async database session
            user_id: User id to look for

        Returns:
            list of DiagramModels, oldest first
        """
        stmt = (
            select(DiagramModel)
            .where(DiagramModel.owner_id != user_id)
            .order_by(DiagramModel.created_at)
        )
        result = await session.execute(stmt)
        return [
            diagram
            for diagram in result.scalars().all()
            if diagram.access and user_id in diagram.access
        ]


diagram_crud = DiagramCRUD()
