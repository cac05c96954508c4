"""Formats the captured handshake for the reporting tools."""

import json
from typing import Any

from mcp.types import LATEST_PROTOCOL_VERSION

from ..logger import get_logger
from ..models import CapabilityStatus, OutputFormat
from .handshake import HandshakeRecorder

logger = get_logger(__name__)

UNKNOWN_VERSION = "unknown"

NO_HANDSHAKE_MESSAGE = (
    "Client capabilities are unavailable: no initialization handshake has been received yet."
)

CAPABILITY_DESCRIPTIONS = {
    "Roots": "Exposes filesystem roots to the server",
    "Sampling": "Fulfils LLM sampling requests from the server",
    "Elicitation": "Collects additional input from the user on request",
    "Experimental": "Non-standard experimental features",
}


def _flag(payload: Any, key: str) -> bool:
    """A sub-feature is set when declared with a truthy value.

    Objects and arrays count as set even when empty, as they do on the wire;
    null, false, 0 and "" do not.
    """
    if not isinstance(payload, dict) or key not in payload:
        return False
    value = payload[key]
    return isinstance(value, (dict, list)) or bool(value)


def _cell(value: Any) -> str:
    """Make a value safe to place inside one markdown table cell or header line."""
    text = " ".join(str(value).split())
    return text.replace("|", "\\|")


def _join(parts: list[str]) -> str | None:
    return ", ".join(parts) if parts else None


def derive_capability_statuses(capabilities: dict[str, Any]) -> list[CapabilityStatus]:
    """Build the capability table rows in the order Roots, Sampling, Elicitation, Experimental.

    Presence of a capability key is what enables it, whatever its payload,
    except for experimental which only counts when it declares at least one flag.
    """
    roots = capabilities.get("roots")
    sampling = capabilities.get("sampling")
    elicitation = capabilities.get("elicitation")
    experimental = capabilities.get("experimental")

    sampling_details = []
    if _flag(sampling, "context"):
        sampling_details.append("context inclusion")
    if _flag(sampling, "tools"):
        sampling_details.append("tool use")

    elicitation_details = []
    if _flag(elicitation, "form"):
        elicitation_details.append("form mode")
    if _flag(elicitation, "url"):
        elicitation_details.append("URL mode")

    experimental_enabled = isinstance(experimental, dict) and len(experimental) > 0

    return [
        CapabilityStatus(
            name="Roots",
            enabled=roots is not None,
            description=CAPABILITY_DESCRIPTIONS["Roots"],
            details="listChanged notifications supported" if _flag(roots, "listChanged") else None,
        ),
        CapabilityStatus(
            name="Sampling",
            enabled=sampling is not None,
            description=CAPABILITY_DESCRIPTIONS["Sampling"],
            details=_join(sampling_details),
        ),
        CapabilityStatus(
            name="Elicitation",
            enabled=elicitation is not None,
            description=CAPABILITY_DESCRIPTIONS["Elicitation"],
            details=_join(elicitation_details),
        ),
        CapabilityStatus(
            name="Experimental",
            enabled=experimental_enabled,
            description=CAPABILITY_DESCRIPTIONS["Experimental"],
            details=_join(list(experimental)) if experimental_enabled else None,
        ),
    ]


class CapabilityReporter:
    """Read-only view over a HandshakeRecorder's state."""

    def __init__(self, recorder: HandshakeRecorder) -> None:
        self.recorder = recorder

    def describe_protocol_version(self) -> dict[str, str]:
        """Report the protocol version the client declared."""
        state = self.recorder.state
        client_version = state.protocol_version if state else UNKNOWN_VERSION
        return {
            "clientProtocolVersion": client_version,
            "serverLatestProtocolVersion": LATEST_PROTOCOL_VERSION,
            "message": f"MCP Protocol Version: {client_version}",
        }

    def describe_capabilities(self, format: OutputFormat = OutputFormat.MARKDOWN) -> str:
        """Render the client's capabilities.

        Args:
            format: markdown for the derived table, json for the raw declaration

        Returns:
            Rendered text
        """
        if format is OutputFormat.JSON:
            return self._render_json()
        return self._render_markdown()

    def _render_json(self) -> str:
        state = self.recorder.state
        if state is None:
            payload = {
                "clientInfo": None,
                "capabilities": None,
                "protocolVersion": UNKNOWN_VERSION,
            }
        else:
            payload = {
                "clientInfo": state.client_info.as_sent(),
                "capabilities": state.capabilities,
                "protocolVersion": state.protocol_version,
            }
        return json.dumps(payload, indent=2)

    def _render_markdown(self) -> str:
        state = self.recorder.state
        if state is None:
            logger.debug("Capabilities requested before initialization")
            return NO_HANDSHAKE_MESSAGE

        lines = [
            "## Client Capabilities",
            "",
            f"**Client Name:** {_cell(state.client_info.name or 'Unknown')}",
            f"**Client Version:** {_cell(state.client_info.version or 'Unknown')}",
            f"**Protocol Version:** {_cell(state.protocol_version)}",
            "",
            "| Capability | Status | Description | Details |",
            "|------------|--------|-------------|---------|",
        ]
        for status in derive_capability_statuses(state.capabilities):
            lines.append(
                f"| {status.name} | {'Enabled' if status.enabled else 'Disabled'} "
                f"| {status.description} | {_cell(status.details or '-')} |"
            )
        return "\n".join(lines)
