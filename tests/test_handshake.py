"""Tests for the handshake recorder."""

from mcp.types import (
    LATEST_PROTOCOL_VERSION,
    ClientCapabilities,
    Implementation,
    RootsCapability,
    SamplingCapability,
)

from mcp_version_server.services import HandshakeRecorder


def test_state_is_empty_before_handshake(recorder):
    """No state is captured until initialize arrives."""
    assert recorder.state is None


def test_on_initialize_captures_peer_declaration(recorder, initialize, full_capabilities):
    """Test that version, capabilities and identity are captured together."""
    initialize(full_capabilities, protocol_version="2024-11-05")

    state = recorder.state
    assert state.protocol_version == "2024-11-05"
    assert state.capabilities == full_capabilities
    assert state.client_info.name == "test-client"
    assert state.client_info.version == "1.0.0"


def test_on_initialize_returns_server_declaration(initialize, full_capabilities):
    """The response advertises the latest version and tool support only."""
    result = initialize(full_capabilities, protocol_version="2024-11-05")

    assert result.protocolVersion == LATEST_PROTOCOL_VERSION
    assert result.serverInfo.name == "test-version-server"
    assert result.serverInfo.version == "9.9.9"
    assert result.capabilities.tools is not None
    assert result.capabilities.resources is None
    assert result.capabilities.prompts is None


def test_repeated_initialize_replaces_state(recorder, initialize):
    """Last write wins and nothing is merged from the earlier handshake."""
    initialize({"roots": {"listChanged": True}}, protocol_version="2024-11-05")
    initialize(
        {"sampling": {}},
        protocol_version="2025-06-18",
        info={"name": "second-client", "version": "2.0.0"},
    )

    state = recorder.state
    assert state.protocol_version == "2025-06-18"
    assert state.capabilities == {"sampling": {}}
    assert state.client_info.name == "second-client"


def test_unknown_fields_are_kept(recorder, initialize):
    """Unrecognised capability keys are carried, not rejected."""
    capabilities = {"roots": {}, "vendorFeature": {"enabled": True}}

    initialize(capabilities)

    assert recorder.state.capabilities["vendorFeature"] == {"enabled": True}


def test_captured_capabilities_are_a_copy(recorder, initialize):
    """Mutating the caller's dict afterwards does not change the captured state."""
    capabilities = {"roots": {"listChanged": True}}
    initialize(capabilities)

    capabilities["roots"]["listChanged"] = False
    capabilities["sampling"] = {}

    assert recorder.state.capabilities == {"roots": {"listChanged": True}}


def test_on_initialize_accepts_sdk_models(recorder):
    """SDK models are normalised to plain dicts without null fields."""
    recorder.on_initialize(
        "2025-06-18",
        ClientCapabilities(roots=RootsCapability(listChanged=True), sampling=SamplingCapability()),
        Implementation(name="sdk-client", version="0.3.0"),
    )

    state = recorder.state
    assert state.capabilities == {"roots": {"listChanged": True}, "sampling": {}}
    assert state.client_info.name == "sdk-client"
    assert state.client_info.version == "0.3.0"


def test_missing_identity_fields_are_recorded_as_sent(recorder):
    """A client without identity fields is recorded without invented values."""
    recorder.on_initialize("2025-06-18", {}, {})

    assert recorder.state.client_info.name is None
    assert recorder.state.client_info.version is None
    assert recorder.state.client_info.as_sent() == {}


def test_identity_extra_fields_are_kept(recorder):
    """Additional identity fields survive the capture."""
    recorder.on_initialize("2025-06-18", {}, {"name": "c", "version": "1", "title": "Client C"})

    assert recorder.state.client_info.as_sent() == {"name": "c", "version": "1", "title": "Client C"}


def test_reset_clears_state(recorder, initialize):
    """Test reset returns to the pre-handshake state."""
    initialize({})
    recorder.reset()

    assert recorder.state is None


def test_server_identity_defaults_from_settings():
    """Without explicit values the recorder uses the configured server identity."""
    recorder = HandshakeRecorder()

    assert recorder.server_name == "mcp-version-server"
    assert recorder.server_version == "1.0.0"
