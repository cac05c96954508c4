"""Pydantic models for the captured handshake and the derived capability table."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OutputFormat(str, Enum):
    """Rendering formats accepted by get_client_capabilities."""

    MARKDOWN = "markdown"
    JSON = "json"

    @classmethod
    def parse(cls, raw: Any) -> "OutputFormat":
        """Parse a raw argument, falling back to markdown for anything unknown."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        return cls.MARKDOWN


class PeerIdentity(BaseModel):
    """Client name and version from the initialize request, kept as sent."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str | None = None
    version: str | None = None

    def as_sent(self) -> dict[str, Any]:
        """The identity exactly as the client declared it."""
        return self.model_dump(mode="json", exclude_unset=True)


class ConnectionState(BaseModel):
    """Everything captured from one initialize request.

    Replaced as a whole on every handshake, so readers never see a mix of
    two handshakes.
    """

    model_config = ConfigDict(frozen=True)

    protocol_version: str
    capabilities: dict[str, Any] = Field(default_factory=dict)
    client_info: PeerIdentity


class CapabilityStatus(BaseModel):
    """One row of the capability table."""

    name: str
    enabled: bool
    description: str
    details: str | None = None
