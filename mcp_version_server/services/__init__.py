"""Services for the MCP Version Server."""

from .capability_reporter import CapabilityReporter, derive_capability_statuses
from .handshake import HandshakeRecorder

__all__ = ["CapabilityReporter", "HandshakeRecorder", "derive_capability_statuses"]
