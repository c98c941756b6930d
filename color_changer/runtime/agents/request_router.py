"""RequestRouter implementation.

Responsible for:
- loading (or creating) the Session a request belongs to
- rejecting hardware reports from anything but the active watcher
- picking exactly one SessionStateMachine operation for
  (session mode, request) from explicit enum-keyed tables
- turning recoverable errors into neutral or re-prompt responses and
  unexpected ones into an apologetic response
- persisting (or discarding) the session and logging each exchange

Operations run against a copy of the stored session; the copy replaces
the stored one only when the operation returns normally, so a failed
request never leaves a half-updated session behind.
"""

import logging
from typing import Callable, Dict, Optional, Tuple

from color_changer.exceptions.exceptions import (
    InvalidTransitionError,
    StaleEventError,
    UserInputError,
)

from ..models.api_models import SkillResponse
from ..models.request_models import (
    InputHandlerEventRequest,
    IntentRequest,
    LaunchRequest,
    SessionEndedRequest,
)
from ..models.session_models import Session, SessionMode
from ..store.session_store import SessionStore
from . import input_handlers
from .state_machine import SessionStateMachine


logger = logging.getLogger(__name__)

YES_INTENT = "AMAZON.YesIntent"
NO_INTENT = "AMAZON.NoIntent"
HELP_INTENT = "AMAZON.HelpIntent"
STOP_INTENT = "AMAZON.StopIntent"
CANCEL_INTENT = "AMAZON.CancelIntent"
COLOR_INTENT = "colorIntent"

Handler = Callable[..., SkillResponse]


class RequestRouter:
    """Dispatches inbound requests to the SessionStateMachine.

    Parameters
    ----------
    session_store:
        Store used to load, save and discard Session objects.
    state_machine:
        The operations to dispatch to.
    log_store:
        Optional sink with a log_event(event_type, payload) method; every
        inbound request and outbound response is recorded there.
    """

    def __init__(
        self,
        session_store: SessionStore,
        state_machine: SessionStateMachine,
        log_store: Optional[object] = None,
    ) -> None:
        self.session_store = session_store
        self.state_machine = state_machine
        self.log_store = log_store

        sm = state_machine

        # Hardware events the active watcher can report, per mode
        self._hardware_handlers: Dict[SessionMode, Dict[str, Handler]] = {
            SessionMode.ROLL_CALL: {
                input_handlers.FIRST_BUTTON_CHECKED_IN: sm.handle_first_check_in,
                input_handlers.SECOND_BUTTON_CHECKED_IN: sm.handle_second_check_in,
                input_handlers.TIMEOUT: sm.handle_roll_call_timeout,
            },
            SessionMode.PLAY: {
                input_handlers.BUTTON_DOWN_EVENT: sm.handle_button_down,
                input_handlers.TIMEOUT: sm.handle_play_timeout,
            },
        }

        # Yes / No while a confirmation question is pending
        self._confirmation_handlers: Dict[Tuple[SessionMode, str], Handler] = {
            (SessionMode.ROLL_CALL, YES_INTENT): sm.restart_roll_call,
            (SessionMode.ROLL_CALL, NO_INTENT): sm.handle_stop,
            (SessionMode.EXIT, YES_INTENT): sm.handle_exit_yes,
            (SessionMode.EXIT, NO_INTENT): sm.handle_exit_no,
        }

        # Intents with the same meaning in every mode
        self._global_intent_handlers: Dict[str, Handler] = {
            HELP_INTENT: sm.handle_help,
            STOP_INTENT: sm.handle_stop,
            CANCEL_INTENT: sm.handle_stop,
        }

        self._mode_intent_handlers: Dict[Tuple[SessionMode, str], Handler] = {
            (SessionMode.PLAY, COLOR_INTENT): sm.handle_color_choice,
        }

    # ------------------------------------------------------------------
    # Public API used by the HTTP routes and the CLI
    # ------------------------------------------------------------------

    def handle(self, session_id: str, request) -> SkillResponse:
        """Handle a single platform request within the given session.

        Never raises: unexpected errors are logged with a traceback and
        answered with an apologetic response that keeps the session open.
        """
        self._log_event(
            "request_received",
            {
                "session_id": session_id,
                "request": request.model_dump(by_alias=True, mode="json"),
            },
        )

        try:
            response = self._dispatch(session_id, request)
        except UserInputError as exc:
            # Rejected by the store, e.g. an id that is not a safe file name
            logger.warning("[ROUTER] %s", exc)
            response = self.state_machine.handle_default(None, request)
        except Exception:
            logger.exception(
                "[ROUTER] Unexpected error for session_id=%s request_type=%s",
                session_id,
                getattr(request, "type", None),
            )
            response = self.state_machine.handle_error()

        self._log_event(
            "response_ready",
            {
                "session_id": session_id,
                "response": response.model_dump(
                    by_alias=True, exclude_none=True, mode="json"
                ),
            },
        )
        return response

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _dispatch(self, session_id: str, request) -> SkillResponse:
        stored = self.session_store.get_session(session_id)

        if isinstance(request, SessionEndedRequest):
            logger.info(
                "[ROUTER] Session ended session_id=%s reason=%s",
                session_id,
                request.reason,
            )
            self.session_store.delete_session(session_id)
            return self.state_machine.handle_session_ended(stored)

        if stored is None and isinstance(request, InputHandlerEventRequest):
            # A watcher from a session we no longer know about
            logger.info(
                "[ROUTER] Input event for unknown session_id=%s ignored", session_id
            )
            return self.state_machine.ignore()

        if isinstance(request, LaunchRequest) or stored is None:
            # A new session always begins with roll call
            session = self.session_store.create_session(session_id)
            response = self.state_machine.start_session(session, request.request_id)
            self.session_store.save_session(session)
            return response

        session = stored.model_copy(deep=True)
        try:
            if isinstance(request, InputHandlerEventRequest):
                response = self._route_input_handler_event(session, request)
            elif isinstance(request, IntentRequest):
                response = self._route_intent(session, request)
            else:
                response = self.state_machine.handle_default(session, request)
        except StaleEventError as exc:
            logger.info("[ROUTER] %s", exc)
            return self.state_machine.ignore()
        except InvalidTransitionError as exc:
            logger.info("[ROUTER] session_id=%s %s", session_id, exc)
            return self.state_machine.ignore()
        except UserInputError as exc:
            logger.warning("[ROUTER] session_id=%s %s", session_id, exc)
            return self.state_machine.handle_default(stored, request)

        if response.session_ended:
            self.session_store.delete_session(session_id)
        else:
            self.session_store.save_session(session)
        return response

    def _route_input_handler_event(
        self, session: Session, request: InputHandlerEventRequest
    ) -> SkillResponse:
        if request.originating_request_id != session.active_watcher_id:
            raise StaleEventError(request.originating_request_id, session.active_watcher_id)

        handlers = self._hardware_handlers.get(session.mode, {})
        # One event per report: the first one this mode cares about wins
        for event in request.events:
            handler = handlers.get(event.name)
            if handler is not None:
                logger.info(
                    "[ROUTER] %s event %s session_id=%s",
                    session.mode.value,
                    event.name,
                    session.session_id,
                )
                return handler(session, event)

        logger.info(
            "[ROUTER] No %s event in report %s",
            session.mode.value,
            [event.name for event in request.events],
        )
        return self.state_machine.ignore()

    def _route_intent(self, session: Session, request: IntentRequest) -> SkillResponse:
        name = request.intent.name
        logger.info(
            "[ROUTER] %s intent %s (expecting exit = %s)",
            session.mode.value,
            name,
            session.awaiting_exit_confirmation,
        )

        if name in (YES_INTENT, NO_INTENT):
            handler = None
            if session.awaiting_exit_confirmation:
                handler = self._confirmation_handlers.get((session.mode, name))
            if handler is None:
                handler = self.state_machine.handle_help
            return handler(session, request)

        handler = self._global_intent_handlers.get(name) or self._mode_intent_handlers.get(
            (session.mode, name)
        )
        if handler is None:
            return self.state_machine.handle_default(session, request)
        return handler(session, request)

    def _log_event(self, event_type: str, payload: dict) -> None:
        if self.log_store is None:
            return
        try:
            self.log_store.log_event(event_type=event_type, payload=payload)
        except OSError:
            # Logging failures should not affect main flow.
            logger.warning("[ROUTER] Could not write %s event", event_type, exc_info=True)
