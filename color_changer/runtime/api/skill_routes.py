"""HTTP routes for interacting with the Color Changer runtime.

Exposes endpoints like:

- POST /skill/request                -> takes (sessionId, request) and returns
                                        the speech + directives for it
- GET  /skill/sessions/{session_id}  -> current session attributes
- GET  /skill/healthz                -> liveness probe
"""

import logging

from fastapi import APIRouter, HTTPException
from typing import Optional

from ..models.api_models import SkillRequest, SkillResponse
from ..models.session_models import Session
from ..store.session_store import SessionStore
from ..agents.request_router import RequestRouter


logger = logging.getLogger(__name__)

# Router for all skill-related endpoints
router = APIRouter()


# Module-level references, to be initialized by the server.
_SESSION_STORE: Optional[SessionStore] = None
_REQUEST_ROUTER: Optional[RequestRouter] = None


def init_routes(session_store: SessionStore, request_router: RequestRouter) -> None:
    """Initialize module-level references used by the route handlers."""
    global _SESSION_STORE, _REQUEST_ROUTER
    _SESSION_STORE = session_store
    _REQUEST_ROUTER = request_router


def _require_session_store() -> SessionStore:
    if _SESSION_STORE is None:
        raise HTTPException(
            status_code=500,
            detail="SessionStore is not configured on the server.",
        )
    return _SESSION_STORE


def _require_request_router() -> RequestRouter:
    if _REQUEST_ROUTER is None:
        raise HTTPException(
            status_code=500,
            detail="RequestRouter is not configured on the server.",
        )
    return _REQUEST_ROUTER


@router.post(
    "/request",
    response_model=SkillResponse,
    response_model_exclude_none=True,
)
def handle_request(request: SkillRequest) -> SkillResponse:
    """Handle a single platform request within a session.

    Delegates to RequestRouter, which loads the session, runs the state
    machine operation for the request and persists the result. The router
    never raises, so every request gets a speakable response.
    """
    request_router = _require_request_router()
    return request_router.handle(request.session_id, request.request)


@router.get("/sessions/{session_id}", response_model=Session)
def get_session(session_id: str) -> Session:
    """Return the stored attributes of a live session (debugging aid)."""
    session_store = _require_session_store()
    session = session_store.get_session(session_id)
    if session is None:
        logger.warning("[SKILL] HTTP 404 for session_id=%s", session_id)
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# --------------------------------------------------------
# Endpoint: GET /healthz
# --------------------------------------------------------
@router.get("/healthz")
def health_check():
    """
    Simple health check endpoint for uptime monitoring.
    """
    return {"status": "ok"}
