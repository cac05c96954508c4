"""get_protocol_version MCP tool implementation."""

import json
from typing import Any

from mcp.types import TextContent

from ..logger import get_logger
from ..services import CapabilityReporter

logger = get_logger(__name__)


class ProtocolVersionTool:
    """MCP tool reporting the protocol version the client declared."""

    name = "get_protocol_version"

    def __init__(self, reporter: CapabilityReporter):
        self.reporter = reporter

    def execute(self, arguments: dict[str, Any] | None = None) -> list[TextContent]:
        """Return the client's protocol version as a JSON text block."""
        result = self.reporter.describe_protocol_version()
        logger.debug(
            f"Client protocol version: {result['clientProtocolVersion']}",
            extra={"tool": self.name}
        )
        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    def get_tool_definition(self) -> dict[str, Any]:
        """Get MCP tool definition for the protocol version query."""
        return {
            "name": self.name,
            "description": "Returns the MCP protocol version being used by the client",
            "inputSchema": {
                "type": "object",
                "properties": {},
                "required": [],
            }
        }
