"""
Diagram role resolution.

Maps a (diagram, user) pair to the user's effective permission tier.
The owner is always an editor; everyone else gets whatever the
diagram's access map says, or no role at all.

Dependencies: None (pure domain layer)
System role: Permission source of truth for every gated operation
"""

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flowshare.models.diagram import Diagram


class Role(str, enum.Enum):
    """
    Permission tiers on a diagram (and account tiers on a user).

    EDITOR: Full mutation and sharing rights
    VIEWER: Read-only
    """

    EDITOR = "editor"
    VIEWER = "viewer"


def resolve_role(diagram: "Diagram", user_id: str) -> Role | None:
    """
    Resolve the effective role of a user on a diagram.

    The owner resolves to EDITOR regardless of any entry stored for
    them in the access map.

    Args:
        diagram: Diagram whose access map is consulted
        user_id: Opaque user identifier from the identity provider

    Returns:
        Role | None: Effective role, None when the user has no access
    """
    if user_id == diagram.owner_id:
        return Role.EDITOR
    entry = diagram.access.get(user_id)
    return entry.role if entry is not None else None


def can_edit(role: Role | None) -> bool:
    """Whether a resolved role allows mutations."""
    return role == Role.EDITOR
