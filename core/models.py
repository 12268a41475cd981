# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the gateway)
# =============================================================================
#
# These dataclasses describe what flows between the tool layer and the
# Recurse API adapter.  They carry almost no behavior beyond a couple of
# convenience properties.
#
# FAILURES ARE TYPED:
#   A failed call still produces no data, but RemoteFailure records whether
#   the person didn't exist, the token was rejected or the network was down.
#   The user sees a one-line message; the logs and tests see the reason.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


# -----------------------------------------------------------------------------
# RemoteRequest: one outbound call, fully described
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RemoteRequest:
    """A single HTTP call against the Recurse API."""

    method: str                        # "GET", "POST", "PATCH" or "DELETE"
    endpoint: str                      # "/profiles/me", already path-encoded
    params: dict[str, Any] = field(default_factory=dict)
    # GET → query string; everything else → JSON body.

    @property
    def sends_body(self) -> bool:
        return self.method != "GET"


# -----------------------------------------------------------------------------
# FailureReason: why a remote call produced no data
# -----------------------------------------------------------------------------
class FailureReason(str, Enum):
    UNAUTHORIZED = "unauthorized"          # 401 / 403
    NOT_FOUND = "not_found"                # 404
    HTTP_ERROR = "http_error"              # any other non-2xx
    NETWORK = "network"                    # never got a response
    INVALID_RESPONSE = "invalid_response"  # 2xx, but the body isn't JSON

    @classmethod
    def from_status(cls, status_code: int) -> "FailureReason":
        if status_code in (401, 403):
            return cls.UNAUTHORIZED
        if status_code == 404:
            return cls.NOT_FOUND
        return cls.HTTP_ERROR


@dataclass(frozen=True)
class RemoteFailure:
    """Diagnostic detail for a failed remote call."""

    reason: FailureReason
    message: str
    status_code: Optional[int] = None  # None for NETWORK failures
    body: Optional[str] = None         # Raw response text, if any


# -----------------------------------------------------------------------------
# RemoteResult: the adapter's two-outcome return value
# -----------------------------------------------------------------------------
# Exactly one of the two shapes:
#   RemoteResult(data=...)          → success (data may be None for a 204)
#   RemoteResult(failure=...)       → no data, with a reason attached
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RemoteResult:
    """Outcome of a Recurse API call: parsed data, or a typed failure."""

    data: Any = None
    failure: Optional[RemoteFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None
