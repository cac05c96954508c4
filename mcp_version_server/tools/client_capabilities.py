"""get_client_capabilities MCP tool implementation."""

from typing import Any

from mcp.types import TextContent

from ..logger import get_logger
from ..models import OutputFormat
from ..services import CapabilityReporter

logger = get_logger(__name__)


class ClientCapabilitiesTool:
    """MCP tool reporting the capabilities the client declared."""

    name = "get_client_capabilities"

    def __init__(self, reporter: CapabilityReporter):
        self.reporter = reporter

    def execute(self, arguments: dict[str, Any] | None = None) -> list[TextContent]:
        """
        Render the client's capabilities.

        Args:
            arguments: Tool arguments; ``format`` is "markdown" (default) or "json".
                Any other value is treated as markdown.

        Returns:
            A single text block
        """
        raw_format = (arguments or {}).get("format")
        output_format = OutputFormat.parse(raw_format)
        if raw_format is not None and raw_format != output_format.value:
            logger.debug(
                f"Unrecognized format {raw_format!r}, using {output_format.value}",
                extra={"tool": self.name}
            )

        text = self.reporter.describe_capabilities(output_format)
        return [TextContent(type="text", text=text)]

    def get_tool_definition(self) -> dict[str, Any]:
        """Get MCP tool definition for the capabilities query."""
        return {
            "name": self.name,
            "description": (
                "Returns the capabilities the connected client declared during initialization, "
                "as a markdown table or as raw JSON"
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "format": {
                        "type": "string",
                        "description": "Output format",
                        "enum": [OutputFormat.MARKDOWN.value, OutputFormat.JSON.value],
                        "default": OutputFormat.MARKDOWN.value,
                    }
                },
                "required": [],
            }
        }
