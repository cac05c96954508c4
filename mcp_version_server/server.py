"""Main MCP server implementation for the MCP Version Server."""

import asyncio
from contextlib import AsyncExitStack
from typing import Any

import anyio
from mcp import types
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.session import InitializationState, ServerSession
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .config import get_settings
from .logger import get_logger, log_performance, setup_logging
from .services import CapabilityReporter, HandshakeRecorder
from .tools import ToolDispatcher

logger = get_logger(__name__)


class HandshakeServerSession(ServerSession):
    """ServerSession that answers initialize through a HandshakeRecorder.

    Both tools are read-only and report "unknown" until a handshake arrives,
    so requests are served before initialize and without the initialized
    notification.
    """

    def __init__(self, *args: Any, recorder: HandshakeRecorder, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.recorder = recorder
        self._initialization_state = InitializationState.Initialized

    async def _received_request(self, responder) -> None:
        request = responder.request.root
        if not isinstance(request, types.InitializeRequest):
            await super()._received_request(responder)
            return

        params = request.params
        result = self.recorder.on_initialize(
            params.protocolVersion,
            params.capabilities,
            params.clientInfo,
        )
        self._client_params = params
        with responder:
            await responder.respond(types.ServerResult(result))
        self._initialization_state = InitializationState.Initialized


class RecordingServer(Server):
    """Lowlevel Server whose sessions record the initialize handshake.

    ``run`` follows the SDK's ``Server.run`` and differs only in building
    ``session_class`` instead of ``ServerSession``.
    """

    session_class = HandshakeServerSession

    def __init__(self, name: str, recorder: HandshakeRecorder, **kwargs: Any) -> None:
        super().__init__(name, **kwargs)
        self.recorder = recorder

    async def run(
        self,
        read_stream,
        write_stream,
        initialization_options: InitializationOptions,
        raise_exceptions: bool = False,
        stateless: bool = False,
    ) -> None:
        async with AsyncExitStack() as stack:
            lifespan_context = await stack.enter_async_context(self.lifespan(self))
            session = await stack.enter_async_context(
                self.session_class(
                    read_stream,
                    write_stream,
                    initialization_options,
                    stateless=stateless,
                    recorder=self.recorder,
                )
            )

            # Task support only exists on SDK releases with experimental handlers
            experimental_handlers = getattr(self, "_experimental_handlers", None)
            task_support = getattr(experimental_handlers, "task_support", None)
            if task_support is not None:
                task_support.configure_session(session)
                await stack.enter_async_context(task_support.run())

            async with anyio.create_task_group() as tg:
                try:
                    async for message in session.incoming_messages:
                        logger.debug(f"Received message: {message}")
                        tg.start_soon(
                            self._handle_message,
                            message,
                            session,
                            lifespan_context,
                            raise_exceptions,
                        )
                finally:
                    # In-flight handlers end with the session
                    tg.cancel_scope.cancel()


class VersionMCPServer:
    """MCP server reporting the client's negotiated protocol version and capabilities."""

    def __init__(self) -> None:
        self.settings = get_settings()

        self.recorder = HandshakeRecorder(
            server_name=self.settings.mcp_server_name,
            server_version=self.settings.mcp_server_version,
        )
        self.reporter = CapabilityReporter(self.recorder)
        self.dispatcher = ToolDispatcher(self.reporter)

        self.server: RecordingServer = RecordingServer(
            name=self.settings.mcp_server_name,
            version=self.settings.mcp_server_version,
            recorder=self.recorder,
        )

        # Register handlers
        self._register_handlers()

        logger.info(
            f"Initialized {self.settings.mcp_server_name} v{self.settings.mcp_server_version}"
        )

    def _register_handlers(self) -> None:
        """Register MCP server handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available tools."""
            tools = self.dispatcher.list_tools()
            logger.debug(f"Listed {len(tools)} tools")
            return tools

        # Schema validation off: an unrecognized format falls back to markdown
        @self.server.call_tool(validate_input=False)
        @log_performance
        async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
            """Execute a tool with given arguments."""
            logger.info(
                f"Calling tool: {name}",
                extra={"tool": name, "arguments": arguments}
            )
            # UnknownToolError propagates; the SDK turns it into an error result
            return self.dispatcher.dispatch(name, arguments or {})

    async def run(self) -> None:
        """Run the MCP server over stdio."""
        logger.info(f"Starting {self.settings.mcp_server_name}...")

        try:
            async with stdio_server() as (read_stream, write_stream):
                logger.info("MCP server started successfully")
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options()
                )

        except KeyboardInterrupt:
            logger.info("Server interrupted by user")
        except Exception as e:
            logger.error(f"Server error: {str(e)}")
            raise
        finally:
            logger.info("Server stopped")


async def main() -> None:
    """Main entry point."""
    setup_logging()

    server = VersionMCPServer()
    await server.run()


def run() -> None:
    """Synchronous entry point for the script."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
