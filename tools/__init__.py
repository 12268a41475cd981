# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool definitions.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP and the Recurse REST API.
#   Each tool:
#     1. Declares its parameters (types, bounds, enums) in its signature
#     2. Maps them onto one method + path + params
#     3. Calls core/recurse_api.py
#     4. Turns the result into a single text reply block
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build HTTP requests or handle auth (that's core/)
#   - They do NOT retry, cache or paginate
#   - They do NOT raise on remote failures; every call ends in a reply
# =============================================================================
