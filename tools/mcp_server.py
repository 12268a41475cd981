# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL Recurse tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines every MCP tool a client can call.  Each tool is a thin wrapper
#   around ONE Recurse API call made by core/recurse_api.py.  It picks the
#   method and path, forwards the arguments, and turns the result into an
#   MCP reply.
#
# HOW IT WORKS (the flow):
#   1. The client sends tools/call with a tool name + arguments
#   2. FastMCP looks the tool up and validates the arguments against the
#      function signature below (types, bounds, enums, required-ness)
#   3. If validation fails, the client gets an error reply and NO remote
#      call is made
#   4. Otherwise the function calls recurse_request(), and
#   5. format_reply() wraps the outcome in a single text content block
#
# SCHEMA-AS-DATA:
#   The parameter schema lives in the signatures: Annotated[..., Field(...)]
#   carries the type, the bounds (ge/le), the allowed values (Literal) and
#   the description.  FastMCP builds BOTH the validator and the tools/list
#   JSON schema from it.
#
#   Optional parameters default to None and are dropped before the call,
#   so the remote API never sees "notes": null when the caller said nothing.
#
# TOOL NAMING:
#   Names are kebab-case ("search-profiles"), one tool per API operation.
#
# RUNNING THIS SERVER:
#   python main.py   serves over SSE on port 9000 (see main.py)
# =============================================================================

import json
import logging
import sys
from typing import Annotated, Any, Literal, Optional

from fastmcp import FastMCP
from mcp.types import TextContent
from pydantic import Field

from core.recurse_api import encode_path_segment, recurse_request

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR so the same module can also be served over stdio
# without log lines corrupting the MCP JSON stream on STDOUT.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response payloads
#     - YELLOW for intermediate status (remote outcome)
#     - RED for remote failures, logged at ERROR level
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Remote failures
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_error(message: str) -> None:
    """Log a remote failure in RED at ERROR level."""
    logging.error(f"{_RED}  ✗ {message}{_RESET}")


def _log_response(tool_name: str, reply: list[TextContent], payload: Any = None) -> list[TextContent]:
    """Log the reply (compact JSON when there's a payload) in GREEN, then return it."""
    if payload is not None:
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    else:
        text = reply[0].text
    logging.info(f"{_GREEN}  ← {tool_name} response: {text}{_RESET}")
    return reply


# =============================================================================
# Reply formatting
# =============================================================================
# MCP replies are a list of content blocks.  Every tool here answers with
# exactly ONE text block: either the pretty-printed payload, or a one-line
# failure message.  The payload is pretty-printed with indent=2.
# =============================================================================
def format_reply(data: Any, error_message: Optional[str] = None) -> list[TextContent]:
    """Wrap a payload (or an error message) in an MCP reply envelope."""
    if error_message is not None:
        return [TextContent(type="text", text=error_message)]
    return [TextContent(type="text", text=json.dumps(data, indent=2, ensure_ascii=False))]


def _drop_unset(**params: Any) -> dict[str, Any]:
    """Keep only the arguments the caller actually supplied."""
    return {key: value for key, value in params.items() if value is not None}


async def _call_recurse(
    tool_name: str,
    error_message: str,
    endpoint: str,
    method: str = "GET",
    params: Optional[dict[str, Any]] = None,
) -> list[TextContent]:
    """The shared tool template: one remote call, one reply block."""
    result = await recurse_request(endpoint, method, params)
    if not result.ok:
        failure = result.failure
        _log_error(f"{method} {endpoint} failed ({failure.reason.value}): {failure.message}")
        return _log_response(tool_name, format_reply(None, error_message))
    # An empty 2xx body carries no data, so it gets the failure text too.
    if result.data is None:
        _log_error(f"{method} {endpoint} returned an empty body")
        return _log_response(tool_name, format_reply(None, error_message))
    return _log_response(tool_name, format_reply(result.data), result.data)


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
# "recurse-center" is the server identity clients see during initialize.
mcp = FastMCP(
    "recurse-center",
    instructions=(
        "Tools for the Recurse Center API: search and look up community "
        "profiles, batches and locations, and read or edit hub visits."
    ),
)


# =============================================================================
# PROFILES
# =============================================================================
@mcp.tool(name="search-profiles")
async def search_profiles(
    query: Annotated[Optional[str], Field(description="Search by name, skills, profile questions")] = None,
    batch_id: Annotated[Optional[int], Field(description="Filter to people who have a stint for this batch ID")] = None,
    location_id: Annotated[Optional[int], Field(description="Filter to people who live near this location")] = None,
    role: Annotated[
        Optional[Literal["recurser", "resident", "facilitator", "faculty"]],
        Field(description="Filter by role type"),
    ] = None,
    scope: Annotated[
        Optional[Literal["current", "overlap"]],
        Field(description="Narrow search to current RC members or those who overlapped with you"),
    ] = None,
    limit: Annotated[
        Optional[int],
        Field(ge=1, le=50, description="Limit number of results (default: 20, max: 50)"),
    ] = None,
    offset: Annotated[Optional[int], Field(description="Offset for pagination")] = None,
) -> list[TextContent]:
    """Search for Recurse Center community members"""
    params = _drop_unset(
        query=query, batch_id=batch_id, location_id=location_id,
        role=role, scope=scope, limit=limit, offset=offset,
    )
    _log_request("search-profiles", **params)
    return await _call_recurse("search-profiles", "Failed to search profiles", "/profiles", "GET", params)


# The identifier is free-form text (an email, usually), so it is
# percent-encoded before it goes anywhere near the URL.
@mcp.tool(name="get-profile")
async def get_profile(
    identifier: Annotated[str, Field(description="Person ID or email address")],
) -> list[TextContent]:
    """Get a Recurse Center community member's profile by ID or email"""
    _log_request("get-profile", identifier=identifier)
    return await _call_recurse(
        "get-profile",
        f"Failed to get profile for {identifier}",
        f"/profiles/{encode_path_segment(identifier)}",
    )


@mcp.tool(name="get-my-profile")
async def get_my_profile() -> list[TextContent]:
    """Get the current user's Recurse Center profile"""
    _log_request("get-my-profile")
    return await _call_recurse("get-my-profile", "Failed to get your profile", "/profiles/me")


# =============================================================================
# BATCHES
# =============================================================================
@mcp.tool(name="list-batches")
async def list_batches() -> list[TextContent]:
    """List all Recurse Center batches"""
    _log_request("list-batches")
    return await _call_recurse("list-batches", "Failed to list batches", "/batches")


@mcp.tool(name="get-batch")
async def get_batch(
    batch_id: Annotated[int, Field(description="Batch ID to retrieve")],
) -> list[TextContent]:
    """Get information about a specific Recurse Center batch"""
    _log_request("get-batch", batch_id=batch_id)
    return await _call_recurse(
        "get-batch",
        f"Failed to get batch with ID {batch_id}",
        f"/batches/{batch_id}",
    )


# =============================================================================
# LOCATIONS
# =============================================================================
@mcp.tool(name="search-locations")
async def search_locations(
    query: Annotated[str, Field(description="Search location by name")],
    limit: Annotated[
        Optional[int],
        Field(ge=1, le=50, description="Number of results to return (default: 10, max: 50)"),
    ] = None,
) -> list[TextContent]:
    """Search for locations in the Recurse Center directory"""
    params = _drop_unset(query=query, limit=limit)
    _log_request("search-locations", **params)
    return await _call_recurse("search-locations", "Failed to search locations", "/locations", "GET", params)


# =============================================================================
# HUB VISITS
# =============================================================================
# A hub visit is keyed by (person_id, date).  The date is a caller-supplied
# string, so like get-profile's identifier it is path-encoded; for a
# well-formed YYYY-MM-DD that changes nothing.
# =============================================================================
def _hub_visit_path(person_id: int, date: str) -> str:
    return f"/hub_visits/{person_id}/{encode_path_segment(date)}"


@mcp.tool(name="get-hub-visits")
async def get_hub_visits(
    date: Annotated[Optional[str], Field(description="Only show visits on this date (YYYY-MM-DD)")] = None,
    start_date: Annotated[Optional[str], Field(description="Start date for range (YYYY-MM-DD)")] = None,
    end_date: Annotated[Optional[str], Field(description="End date for range (YYYY-MM-DD)")] = None,
    person_id: Annotated[Optional[int], Field(description="Filter to a specific person")] = None,
    page: Annotated[Optional[int], Field(description="Page number (defaults to 1)")] = None,
    per_page: Annotated[
        Optional[int],
        Field(le=200, description="Results per page (defaults to 100, max 200)"),
    ] = None,
) -> list[TextContent]:
    """Get Recurse Center hub visits"""
    params = _drop_unset(
        date=date, start_date=start_date, end_date=end_date,
        person_id=person_id, page=page, per_page=per_page,
    )
    _log_request("get-hub-visits", **params)
    return await _call_recurse("get-hub-visits", "Failed to get hub visits", "/hub_visits", "GET", params)


# PATCH with only the fields that were given: an empty body means
# "create the visit if it doesn't exist, change nothing otherwise".
@mcp.tool(name="update-hub-visit")
async def update_hub_visit(
    person_id: Annotated[int, Field(description="Person ID")],
    date: Annotated[str, Field(description="Visit date (YYYY-MM-DD)")],
    notes: Annotated[Optional[str], Field(description="Notes for the visit")] = None,
    app_data: Annotated[Optional[str], Field(description="JSON string of application-specific data")] = None,
) -> list[TextContent]:
    """Create or update a hub visit for a person on a specific date"""
    params = _drop_unset(notes=notes, app_data=app_data)
    _log_request("update-hub-visit", person_id=person_id, date=date, **params)
    return await _call_recurse(
        "update-hub-visit",
        f"Failed to update hub visit for person {person_id} on {date}",
        _hub_visit_path(person_id, date),
        "PATCH",
        params,
    )


# NOTE: this tool reports success no matter what the API said.  The real
# outcome goes to the log, at error level when the delete failed.
@mcp.tool(name="delete-hub-visit")
async def delete_hub_visit(
    person_id: Annotated[int, Field(description="Person ID")],
    date: Annotated[str, Field(description="Visit date (YYYY-MM-DD)")],
) -> list[TextContent]:
    """Delete a hub visit for a person on a specific date"""
    _log_request("delete-hub-visit", person_id=person_id, date=date)

    endpoint = _hub_visit_path(person_id, date)
    result = await recurse_request(endpoint, "DELETE")
    if result.ok:
        _log_status("Hub visit deleted")
    else:
        _log_error(f"DELETE {endpoint} failed ({result.failure.reason.value}): {result.failure.message}")

    return _log_response("delete-hub-visit", format_reply(None, "Hub visit deleted successfully"))


@mcp.tool(name="update-hub-visit-notes")
async def update_hub_visit_notes(
    person_id: Annotated[int, Field(description="Person ID")],
    date: Annotated[str, Field(description="Visit date (YYYY-MM-DD)")],
    notes: Annotated[str, Field(description="New notes content (empty string to remove)")],
) -> list[TextContent]:
    """Replace or remove notes for a hub visit"""
    _log_request("update-hub-visit-notes", person_id=person_id, date=date, notes=notes)
    return await _call_recurse(
        "update-hub-visit-notes",
        f"Failed to update hub visit notes for person {person_id} on {date}",
        f"{_hub_visit_path(person_id, date)}/notes",
        "PATCH",
        {"notes": notes},
    )


# =============================================================================
# Standalone entry point
# =============================================================================
# `python -m tools.mcp_server` serves over stdio (handy for desktop MCP
# clients that spawn the server themselves).  The networked SSE server is
# started from main.py.
# =============================================================================
if __name__ == "__main__":
    from dotenv import load_dotenv

    from core.config import ConfigurationError, get_settings

    load_dotenv()
    try:
        get_settings()
    except ConfigurationError as exc:
        logging.error(str(exc))
        sys.exit(1)
    mcp.run()
