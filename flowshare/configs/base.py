"""
Shared settings base.

Every FlowShare settings class reads the process environment and an
optional ``.env`` file in the working directory. Unknown keys are
ignored so one ``.env`` can serve the API, the database and the editor.

Dependencies: pydantic_settings
System role: Common parent of the FlowShare configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Environment-backed settings with the fields every service shares."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment name reported in startup logs",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for configure_logging",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser editor",
    )
