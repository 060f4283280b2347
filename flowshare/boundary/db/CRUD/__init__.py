"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from flowshare.boundary.db.CRUD import diagram_crud, user_crud

    # Use singleton instances
    diagram = await diagram_crud.get_by_id(db, diagram_id)

    # Or instantiate classes directly for custom behavior
    from flowshare.boundary.db.CRUD import DiagramCRUD
    custom_crud = DiagramCRUD()
"""

from flowshare.boundary.db.CRUD.base_crud import BaseCRUD
from flowshare.boundary.db.CRUD.diagram_crud import DiagramCRUD, diagram_crud
from flowshare.boundary.db.CRUD.user_crud import UserCRUD, user_crud

__all__ = [
    "BaseCRUD",
    "DiagramCRUD",
    "diagram_crud",
    "UserCRUD",
    "user_crud",
]
