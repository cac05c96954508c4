"""Sample client: launches the server over stdio and prints both reports."""

import asyncio
import os
import sys
from typing import Any

from mcp import ClientSession, StdioServerParameters, types
from mcp.client.stdio import stdio_client
from mcp.shared.context import RequestContext

from .logger import get_logger

logger = get_logger(__name__)

CLIENT_INFO = types.Implementation(name="version-client", version="1.0.0")


# The callbacks exist so the session declares sampling, roots and elicitation
# support during initialize; the server never actually calls them.
async def decline_sampling(
    context: RequestContext[ClientSession, Any], params: types.CreateMessageRequestParams
) -> types.ErrorData:
    return types.ErrorData(code=types.INVALID_REQUEST, message="Sampling is not available")


async def list_no_roots(context: RequestContext[ClientSession, Any]) -> types.ListRootsResult:
    return types.ListRootsResult(roots=[])


async def decline_elicitation(
    context: RequestContext[ClientSession, Any], params: types.ElicitRequestParams
) -> types.ElicitResult:
    return types.ElicitResult(action="decline")


def server_parameters() -> StdioServerParameters:
    """Run the server module with the current interpreter."""
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "mcp_version_server.server"],
        env=dict(os.environ),
    )


def first_text(result: types.CallToolResult) -> str:
    """Extract the first text block from a tool result."""
    for block in result.content:
        if isinstance(block, types.TextContent):
            return block.text
    if result.structuredContent:
        return str(result.structuredContent)
    return result.model_dump_json(indent=2)


async def main() -> None:
    """Connect, query both tools and print the results."""
    async with stdio_client(server_parameters()) as (read_stream, write_stream):
        async with ClientSession(
            read_stream,
            write_stream,
            sampling_callback=decline_sampling,
            list_roots_callback=list_no_roots,
            elicitation_callback=decline_elicitation,
            client_info=CLIENT_INFO,
        ) as session:
            init_result = await session.initialize()
            logger.info(
                f"Connected to {init_result.serverInfo.name} v{init_result.serverInfo.version} "
                f"(protocol {init_result.protocolVersion})"
            )

            print("=== Client Capabilities (Markdown) ===\n")
            capabilities = await session.call_tool("get_client_capabilities", {"format": "markdown"})
            print(first_text(capabilities))

            print("\n=== Protocol Version ===\n")
            version = await session.call_tool("get_protocol_version", {})
            print(first_text(version))


def run() -> None:
    """Synchronous entry point for the script."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
