"""
FastAPI application entry point for the Color Changer runtime.

Responsibilities:
- configure logging from settings
- construct shared singletons (SessionStore, log store, SessionStateMachine, RequestRouter)
- include skill routes under /skill

Start it with:

    uvicorn color_changer.runtime.api.server:app --reload
"""

import logging

from fastapi import FastAPI

from color_changer.configs.settings import settings
from color_changer.runtime.agents.request_router import RequestRouter
from color_changer.runtime.agents.state_machine import SessionStateMachine
from color_changer.runtime.store.log_store import ConsoleLogStore, LogStore
from color_changer.runtime.store.session_store import SessionStore
from . import skill_routes


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def create_app(
    session_store: SessionStore = None,
    state_machine: SessionStateMachine = None,
    log_store=None,
) -> FastAPI:
    """Build the app; anything not passed in is created from settings."""
    if session_store is None:
        # In-memory, with file backing only when a data dir is configured.
        data_dir = settings.session_data_dir
        session_store = SessionStore(data_dir=str(data_dir) if data_dir else None)

    if log_store is None:
        if settings.log_dir is not None:
            log_store = LogStore(log_dir=str(settings.log_dir))
        else:
            log_store = ConsoleLogStore()

    if state_machine is None:
        state_machine = SessionStateMachine()

    request_router = RequestRouter(
        session_store=session_store,
        state_machine=state_machine,
        log_store=log_store,
    )

    app = FastAPI(title="Color Changer Skill Runtime")

    # Initialize the router module with our shared objects, then include it.
    skill_routes.init_routes(
        session_store=session_store,
        request_router=request_router,
    )
    app.include_router(skill_routes.router, prefix="/skill")
    return app


app = create_app()
