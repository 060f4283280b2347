"""
Database models package.

Exports:
  - DiagramModel: Diagram document ORM model
  - UserModel: User account ORM model

Dependencies: sqlalchemy, flowshare.boundary.db.base
System role: Database model definitions for domain entities
"""

from flowshare.boundary.db.models.diagram_model import DiagramModel
from flowshare.boundary.db.models.user_model import UserModel

__all__ = [
    "DiagramModel",
    "UserModel",
]
