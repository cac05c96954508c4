"""Records what the client declared during the initialize handshake."""

import copy
from typing import Any

from mcp.types import (
    LATEST_PROTOCOL_VERSION,
    ClientCapabilities,
    Implementation,
    InitializeResult,
    ServerCapabilities,
    ToolsCapability,
)

from ..config import get_settings
from ..logger import get_logger
from ..models import ConnectionState, PeerIdentity

logger = get_logger(__name__)


def _as_dict(value: Any) -> dict[str, Any]:
    """Normalise an SDK model or mapping into a plain JSON-ready dict."""
    if value is None:
        return {}
    if isinstance(value, dict):
        return copy.deepcopy(value)
    return value.model_dump(mode="json", by_alias=True, exclude_none=True)


class HandshakeRecorder:
    """Holds the ConnectionState for one server process.

    The state is None until the first initialize request. Each handshake
    builds a new ConnectionState and swaps it in with a single assignment.
    """

    def __init__(self, server_name: str | None = None, server_version: str | None = None) -> None:
        settings = get_settings()
        self.server_name = server_name or settings.mcp_server_name
        self.server_version = server_version or settings.mcp_server_version
        self._state: ConnectionState | None = None

    @property
    def state(self) -> ConnectionState | None:
        """Current captured state, or None before any handshake."""
        return self._state

    def on_initialize(
        self,
        protocol_version: str,
        capabilities: ClientCapabilities | dict[str, Any] | None,
        client_info: Implementation | dict[str, Any] | None,
    ) -> InitializeResult:
        """Capture the client's declaration and return the server's own.

        A repeated handshake replaces the previous state entirely.

        Args:
            protocol_version: Version the client asked for
            capabilities: Client capability set
            client_info: Client name and version

        Returns:
            InitializeResult advertising the latest protocol version and tool support
        """
        identity = _as_dict(client_info)

        state = ConnectionState(
            protocol_version=protocol_version,
            capabilities=_as_dict(capabilities),
            client_info=PeerIdentity(**identity),
        )
        if self._state is not None:
            logger.warning(
                "Repeated initialize request, replacing captured state",
                extra={"previous_client": self._state.client_info.name}
            )
        self._state = state

        logger.info(
            f"Client {state.client_info.name} v{state.client_info.version} initialized "
            f"with protocol {protocol_version}",
            extra={"capabilities": sorted(state.capabilities)}
        )

        return InitializeResult(
            protocolVersion=LATEST_PROTOCOL_VERSION,
            capabilities=ServerCapabilities(tools=ToolsCapability(listChanged=False)),
            serverInfo=Implementation(name=self.server_name, version=self.server_version),
        )

    def reset(self) -> None:
        """Forget the captured handshake."""
        self._state = None
