"""
Diagram editor configuration settings.

Defaults applied by the edit buffer when it creates nodes and edges:
node color palette, default label, spawn window and connection style.

Dependencies: pydantic, pydantic_settings
System role: Editing behaviour configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from flowshare.configs.base import BaseSettings


DEFAULT_NODE_PALETTE = [
    "#6366f1",
    "#8b5cf6",
    "#06b6d4",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#ec4899",
]


class EditorSettings(BaseSettings):
    """Node and edge defaults for the edit buffer."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EDITOR_",
        case_sensitive=False,
        extra="ignore",
    )

    node_palette: list[str] = Field(
        default_factory=lambda: list(DEFAULT_NODE_PALETTE),
        description="Colors a new node may be given, first one is the default",
    )
    default_node_label: str = Field(default="New Node", description="Label of freshly added nodes")
    node_type: str = Field(default="default", description="Node type understood by the editing surface")

    spawn_origin_x: float = Field(default=250.0, description="Left edge of the new-node spawn window")
    spawn_origin_y: float = Field(default=100.0, description="Top edge of the new-node spawn window")
    spawn_offset: float = Field(
        default=200.0,
        ge=0,
        description="Width and height of the window new nodes are randomly placed in",
    )

    edge_type: str = Field(default="smoothstep", description="Edge type for new connections")
    edge_animated: bool = Field(default=True, description="Animate new connections")
    edge_stroke: str = Field(default="var(--accent-primary)", description="Stroke color of new connections")
    edge_stroke_width: float = Field(default=2, description="Stroke width of new connections")

    @property
    def default_color(self) -> str:
        """First palette entry, used when the caller does not pick a color."""
        return self.node_palette[0]

    @property
    def edge_style(self) -> dict:
        """Style payload attached to every new connection."""
        return {"stroke": self.edge_stroke, "strokeWidth": self.edge_stroke_width}
