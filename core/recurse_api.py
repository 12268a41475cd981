# =============================================================================
# core/recurse_api.py  —  Recurse Center API Adapter (one call in, one out)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends ONE authenticated HTTP request to the Recurse Center API and hands
#   back a RemoteResult: either the parsed JSON payload, or a typed failure.
#
# THE CONTRACT (important for the tool layer):
#   recurse_request() NEVER raises for remote problems.  Network errors,
#   non-2xx statuses and garbage bodies all come back as
#   RemoteResult(failure=RemoteFailure(...)).  The caller only has to check
#   result.ok; there is no try/except in any tool.
#
# NOT DONE HERE:
#   - No retries or backoff.
#   - No timeout override.  httpx's default applies.
#   - No state between calls.  A fresh AsyncClient per request.
#
# REDIRECTS:
#   Followed.  Only the final response's status decides success.
#
# PARAMETER PLACEMENT:
#   GET    → params become the query string
#   other  → params become the JSON body ({} if there are none)
# =============================================================================

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from core.config import get_settings
from core.models import FailureReason, RemoteFailure, RemoteRequest, RemoteResult

logger = logging.getLogger(__name__)

# encodeURIComponent leaves these unescaped on top of quote()'s "_.-~".
_URI_COMPONENT_SAFE = "!*'()"


def encode_path_segment(value: Any) -> str:
    """Percent-encode a caller-supplied value for use as ONE path segment.

    Slashes are encoded too, so "a/b" can never reach a different resource.

        >>> encode_path_segment("a b@example.com")
        'a%20b%40example.com'
    """
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


async def recurse_request(
    endpoint: str,
    method: str = "GET",
    params: Optional[dict[str, Any]] = None,
) -> RemoteResult:
    """Make an authenticated request to the Recurse API.

    Args:
        endpoint: Path below the API base, e.g. "/profiles/me".  Any
            free-form segments must already be encode_path_segment()-ed.
        method: "GET", "POST", "PATCH" or "DELETE".
        params: Query (GET) or JSON body (everything else) parameters.

    Returns:
        RemoteResult with .data on success, .failure otherwise.
    """
    request = RemoteRequest(method=method.upper(), endpoint=endpoint, params=dict(params or {}))
    settings = get_settings()
    url = f"{settings.api_base}{request.endpoint}"
    headers = {"Authorization": f"Bearer {settings.token}"}

    logger.info("Making Recurse API request: %s %s", request.method, url)

    try:
        async with httpx.AsyncClient(follow_redirects=True) as client:
            if request.sends_body:
                response = await client.request(
                    request.method, url, headers=headers, json=request.params
                )
            else:
                response = await client.request(
                    request.method, url, headers=headers, params=request.params
                )
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        body = exc.response.text
        logger.error(
            "Recurse API request failed: %s %s -> %s %s", request.method, url, status, body
        )
        return RemoteResult(failure=RemoteFailure(
            reason=FailureReason.from_status(status),
            message=f"HTTP {status}",
            status_code=status,
            body=body,
        ))
    except httpx.HTTPError as exc:
        logger.error("Error making Recurse API request to %s %s: %s", request.method, url, exc)
        return RemoteResult(failure=RemoteFailure(
            reason=FailureReason.NETWORK,
            message=str(exc) or exc.__class__.__name__,
        ))

    # A 204 (or any empty 2xx) is a success with nothing to parse.  Tools that
    # expect a payload treat data=None as "no data".
    if not response.content:
        logger.info("Recurse API response: %s (empty body)", response.status_code)
        return RemoteResult(data=None)

    try:
        data = response.json()
    except ValueError as exc:
        logger.error(
            "Recurse API returned a non-JSON body: %s %s -> %s %s",
            request.method, url, response.status_code, response.text,
        )
        return RemoteResult(failure=RemoteFailure(
            reason=FailureReason.INVALID_RESPONSE,
            message=str(exc),
            status_code=response.status_code,
            body=response.text,
        ))

    logger.debug("Recurse API response: %r", data)
    return RemoteResult(data=data)
