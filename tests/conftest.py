"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock, patch

import pytest

from mcp_version_server.services import CapabilityReporter, HandshakeRecorder
from mcp_version_server.tools import ToolDispatcher


@pytest.fixture
def mock_settings():
    """Mock settings for testing."""
    with patch("mcp_version_server.server.get_settings") as mock:
        settings = MagicMock()
        settings.mcp_server_name = "test-version-server"
        settings.mcp_server_version = "9.9.9"
        settings.log_level = "INFO"
        settings.log_format = "text"
        settings.log_file_path = ""
        mock.return_value = settings
        yield settings


@pytest.fixture
def recorder():
    """Recorder with no handshake yet."""
    return HandshakeRecorder(server_name="test-version-server", server_version="9.9.9")


@pytest.fixture
def reporter(recorder):
    """Reporter reading from the recorder fixture."""
    return CapabilityReporter(recorder)


@pytest.fixture
def dispatcher(reporter):
    """Dispatcher wired to the reporter fixture."""
    return ToolDispatcher(reporter)


@pytest.fixture
def client_info():
    """Client identity sent with initialize."""
    return {"name": "test-client", "version": "1.0.0"}


@pytest.fixture
def full_capabilities():
    """Capabilities declaring every sub-feature except experimental."""
    return {
        "sampling": {"context": {}, "tools": {}},
        "roots": {"listChanged": True},
        "elicitation": {"form": {}, "url": {}},
    }


@pytest.fixture
def initialize(recorder, client_info):
    """Factory performing a handshake on the recorder fixture."""
    def _initialize(capabilities, protocol_version="2025-06-18", info=None):
        return recorder.on_initialize(protocol_version, capabilities, info or client_info)
    return _initialize
