"""MCP server that reports the protocol version and capabilities a client negotiated."""

__version__ = "1.0.0"
