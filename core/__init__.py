# =============================================================================
# core/__init__.py
# =============================================================================
# This package holds everything that talks to the Recurse Center API:
# settings, the data models, and the one-call HTTP adapter.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or knows what an MCP "tool" is.
#   recurse_request() is just an async function that returns a RemoteResult.
#   The MCP wiring lives in tools/.
# =============================================================================
