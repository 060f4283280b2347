"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, DocumentIdMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - DiagramModel, UserModel: Stored documents
  - diagram_crud, user_crud: CRUD operation singletons

Dependencies: sqlalchemy, flowshare.configs
System role: Document store adapter for diagrams and user accounts.
"""

from flowshare.boundary.db.base import Base, DocumentIdMixin, TimestampMixin
from flowshare.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from flowshare.boundary.db.models import DiagramModel, UserModel
from flowshare.boundary.db.CRUD import (
    BaseCRUD,
    DiagramCRUD,
    UserCRUD,
    diagram_crud,
    user_crud,
)

__all__ = [
    # Base classes
    "Base",
    "DocumentIdMixin",
    "TimestampMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "DiagramModel",
    "UserModel",
    # CRUD classes
    "BaseCRUD",
    "DiagramCRUD",
    "UserCRUD",
    # CRUD singletons
    "diagram_crud",
    "user_crud",
]
