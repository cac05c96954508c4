"""Routes tool calls to the two reporting tools."""

from typing import Any

from mcp.types import TextContent, Tool

from ..logger import get_logger
from ..services import CapabilityReporter
from .client_capabilities import ClientCapabilitiesTool
from .protocol_version import ProtocolVersionTool

logger = get_logger(__name__)


class UnknownToolError(ValueError):
    """Raised when a call names a tool this server does not expose."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolDispatcher:
    """Fixed registry of the reporting tools."""

    def __init__(self, reporter: CapabilityReporter):
        self.tools = {
            tool.name: tool
            for tool in (ProtocolVersionTool(reporter), ClientCapabilitiesTool(reporter))
        }

    def list_tools(self) -> list[Tool]:
        """Tool definitions in registration order."""
        return [Tool(**tool.get_tool_definition()) for tool in self.tools.values()]

    def dispatch(self, name: str, arguments: dict[str, Any] | None = None) -> list[TextContent]:
        """Execute a tool by name.

        Raises:
            UnknownToolError: If no tool is registered under ``name``
        """
        tool = self.tools.get(name)
        if tool is None:
            logger.error(f"Unknown tool: {name}", extra={"tool": name})
            raise UnknownToolError(name)
        return tool.execute(arguments or {})
