"""MCP tools for the MCP Version Server."""

from .client_capabilities import ClientCapabilitiesTool
from .dispatcher import ToolDispatcher, UnknownToolError
from .protocol_version import ProtocolVersionTool

__all__ = [
    "ClientCapabilitiesTool",
    "ProtocolVersionTool",
    "ToolDispatcher",
    "UnknownToolError",
]
