# =============================================================================
# main.py  —  Entry Point for the Recurse Center MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env into the environment (RECURSE_PAT, optional overrides)
#   2. Resolves settings, exiting immediately if RECURSE_PAT is missing
#   3. Serves the FastMCP tool server (tools/mcp_server.py) over SSE
#
# THE SSE TRANSPORT:
#   GET  /sse         → opens a session; the server streams messages back
#   POST /messages/   → the client posts its JSON-RPC messages here, tagged
#                       with the session_id it got from /sse
#
#   Sessions are tracked per session_id by the transport, so any number of
#   clients can be connected at once and each one is torn down on its own
#   when its stream closes.  A new client never knocks an existing one off.
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

from core.config import ConfigurationError, get_settings

SSE_PATH = "/sse"


def main() -> None:
    """Load configuration and serve MCP over SSE until interrupted."""

    # =========================================================================
    # Step 1: Configuration
    # =========================================================================
    # load_dotenv() must run BEFORE get_settings(), which reads os.environ
    # once and caches the result for the life of the process.
    # =========================================================================
    load_dotenv()
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        logging.basicConfig(stream=sys.stderr)
        logging.error(str(exc))
        sys.exit(1)

    # =========================================================================
    # Step 2: Serve
    # =========================================================================
    # Imported here so the logging setup in tools/mcp_server.py only kicks
    # in once we know we're actually going to serve.
    # =========================================================================
    from tools.mcp_server import mcp

    logging.info(
        "Recurse Center MCP server running on %s:%s (SSE at %s)",
        settings.host, settings.port, SSE_PATH,
    )
    mcp.run(transport="sse", host=settings.host, port=settings.port, path=SSE_PATH)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
