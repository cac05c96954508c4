"""Data models for the MCP Version Server."""

from .connection import CapabilityStatus, ConnectionState, OutputFormat, PeerIdentity

__all__ = [
    "CapabilityStatus",
    "ConnectionState",
    "OutputFormat",
    "PeerIdentity",
]
