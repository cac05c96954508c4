"""Configuration management for the MCP Version Server."""


from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # MCP Server Configuration
    mcp_server_name: str = Field(
        default="mcp-version-server",
        description="MCP server name reported in serverInfo"
    )
    mcp_server_version: str = Field(default="1.0.0", description="MCP server version")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="text",
        description="Log format (json or text)",
        pattern="^(json|text)$"
    )
    log_file_path: str = Field(
        default="",
        description="Log file path (empty disables file logging)"
    )
    log_rotation_size: str = Field(default="10MB", description="Log rotation size")
    log_retention_days: int = Field(default=7, description="Log retention in days")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


# Global settings instance
settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings
