"""SessionStateMachine implementation.

Owns every transition of a Color Changer session:

    ROLL_CALL ──second button──▶ PLAY ──timeout──▶ EXIT
        ▲  │                       ▲                 │
        │  └─timeout, "yes"─┘      └──────"no"───────┘
        └─ any mode: stop / confirmed exit / session end → terminated

Each operation takes the current Session (mutated in place) plus the
request or hardware event that triggered it, and returns the SkillResponse
for that request. Operations whose precondition does not hold raise
InvalidTransitionError before touching the session; malformed hardware
events raise UserInputError. Choosing which operation to run, and checking
that a hardware report comes from the active watcher, is the job of the
RequestRouter.
"""

import logging
from typing import Optional

from color_changer.configs import skill_constants as content
from color_changer.configs.settings import (
    DEFAULT_PLAY_TIMEOUT_MS,
    DEFAULT_ROLL_CALL_RETRY_TIMEOUT_MS,
    DEFAULT_ROLL_CALL_TIMEOUT_MS,
    settings,
)
from color_changer.core.animations import basic_animations
from color_changer.core.directives import gadget_directives
from color_changer.exceptions.exceptions import InvalidTransitionError, UserInputError

from ..models.api_models import SkillResponse
from ..models.request_models import InputHandlerEvent, IntentRequest
from ..models.session_models import MAX_DEVICES, Session, SessionMode
from . import input_handlers
from .response_builder import ResponseBuilder


logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Welcome to the Color Changer skill. "
    "This skill provides a brief introduction to the core functionality that "
    "every Echo Button skill should have. "
    "We'll cover roll call, starting and stopping the Input Handler, button "
    "events and Input Handler timeout events. "
    "Let's get started with roll call. "
    "Roll call wakes up the buttons to make sure they're connected and ready for play. "
    "Ok. Press the first button and wait for confirmation before pressing the second button."
)

RESTART_INSTRUCTIONS = (
    "Ok. Press the first button, wait for confirmation, then press the second button."
)

COLOR_PROMPT = "Please pick a color: green, red, or blue"


def _usable_timeout(label: str, timeout, default: int) -> int:
    """Return `timeout` if it is a positive int, else `default` with a warning."""
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        logger.warning(
            "[TIMEOUT] Unusable %s timeout %r, using %s ms", label, timeout, default
        )
        return default
    return timeout


class SessionStateMachine:
    """Mode transitions and response building for one skill.

    Parameters
    ----------
    roll_call_timeout_ms:
        Watcher timeout for the first roll call of a session.
    roll_call_retry_timeout_ms:
        Shorter timeout used when the user asks for more time.
    play_timeout_ms:
        Watcher timeout once a color has been chosen.

    Any value left as None is read from settings.
    """

    def __init__(
        self,
        roll_call_timeout_ms: Optional[int] = None,
        roll_call_retry_timeout_ms: Optional[int] = None,
        play_timeout_ms: Optional[int] = None,
    ) -> None:
        self.roll_call_timeout_ms = (
            roll_call_timeout_ms
            if roll_call_timeout_ms is not None
            else settings.roll_call_timeout_ms
        )
        self.roll_call_retry_timeout_ms = (
            roll_call_retry_timeout_ms
            if roll_call_retry_timeout_ms is not None
            else settings.roll_call_retry_timeout_ms
        )
        self.play_timeout_ms = (
            play_timeout_ms if play_timeout_ms is not None else settings.play_timeout_ms
        )

    # ------------------------------------------------------------------
    # Roll call
    # ------------------------------------------------------------------

    def start_session(
        self,
        session: Session,
        request_id: str,
        speech: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> SkillResponse:
        """Enter roll call: reset the session and start the roll-call watcher.

        The id of the request being answered becomes the watcher id, since
        the platform tags every later report with it.
        """
        timeout = _usable_timeout(
            "roll call",
            timeout_ms if timeout_ms is not None else self.roll_call_timeout_ms,
            DEFAULT_ROLL_CALL_TIMEOUT_MS,
        )

        logger.info(
            "[ROLLCALL] Starting roll call session_id=%s timeout=%s",
            session.session_id,
            timeout,
        )

        response = ResponseBuilder()
        response.speak((speech or WELCOME_MESSAGE) + content.WAITING_AUDIO)
        response.add_directive(
            gadget_directives.start_input_handler(
                timeout=timeout,
                proxies=content.PROXIES,
                recognizers=input_handlers.roll_call_recognizers(),
                events=input_handlers.roll_call_events(),
            )
        )
        response.add_directive(
            gadget_directives.set_button_down_animation(
                animations=content.check_in_down_animation()
            )
        )
        response.add_directive(
            gadget_directives.set_button_up_animation(
                animations=content.check_in_up_animation()
            )
        )

        session.reset()
        session.active_watcher_id = request_id

        return response.build(open_microphone=False)

    def restart_roll_call(self, session: Session, request: IntentRequest) -> SkillResponse:
        """The user wants more time to press the buttons."""
        return self.start_session(
            session,
            request.request_id,
            speech=RESTART_INSTRUCTIONS,
            timeout_ms=_usable_timeout(
                "roll call retry",
                self.roll_call_retry_timeout_ms,
                DEFAULT_ROLL_CALL_RETRY_TIMEOUT_MS,
            ),
        )

    def handle_first_check_in(self, session: Session, event: InputHandlerEvent) -> SkillResponse:
        # A late first_button_checked_in after the second button already
        # checked in must not overwrite anything.
        if session.mode != SessionMode.ROLL_CALL or session.button_check_in_count != 0:
            raise InvalidTransitionError(
                "first_button_checked_in",
                f"button_check_in_count is {session.button_check_in_count}",
            )
        if not event.input_events:
            raise UserInputError("first_button_checked_in without input events")

        first_button_id = event.input_events[0].gadget_id
        logger.info(
            "[ROLLCALL] First button checked in session_id=%s gadget_id=%s",
            session.session_id,
            first_button_id,
        )

        response = ResponseBuilder()
        response.speak("hello, button 1" + content.WAITING_AUDIO)
        response.add_directive(
            gadget_directives.set_idle_animation(
                animations=content.check_in_idle_animation(),
                target_gadgets=[first_button_id],
            )
        )

        session.registered_device_ids = [first_button_id]
        session.button_check_in_count = 1

        return response.build(open_microphone=False)

    def handle_second_check_in(self, session: Session, event: InputHandlerEvent) -> SkillResponse:
        count = session.button_check_in_count
        if session.mode != SessionMode.ROLL_CALL or count >= MAX_DEVICES:
            raise InvalidTransitionError(
                "second_button_checked_in",
                f"button_check_in_count is {count}",
            )

        reported = list(dict.fromkeys(event.gadget_ids))
        if count == 0:
            # Both buttons checked in within the same report
            if len(reported) < MAX_DEVICES:
                raise UserInputError(
                    f"second_button_checked_in needs two gadgets, got {reported}"
                )
            device_ids = reported[:MAX_DEVICES]
            speech = "hello buttons 1 and 2 <break time='1s'/> Awesome! "
        else:
            # First reported gadget that is not already registered wins
            newcomer = next(
                (g for g in reported if g not in session.registered_device_ids), None
            )
            if newcomer is None:
                raise UserInputError(
                    f"second_button_checked_in reported no new gadget: {reported}"
                )
            device_ids = session.registered_device_ids + [newcomer]
            speech = (
                "hello, button 2<break time='1s'/> Awesome. "
                "I've registered two buttons. "
            )

        speech += (
            "Now let's learn about button events. "
            "Please select one of the following colors: red, blue, or green."
        )
        logger.info(
            "[ROLLCALL] Roll call complete session_id=%s devices=%s",
            session.session_id,
            device_ids,
        )

        response = ResponseBuilder()
        response.speak(speech).listen(COLOR_PROMPT)
        response.add_directive(
            gadget_directives.set_idle_animation(
                animations=content.roll_call_complete_animation(),
                target_gadgets=device_ids,
            )
        )
        # Reset button press animations until the user chooses a color
        response.add_directive(
            gadget_directives.set_button_down_animation(
                animations=content.default_button_down_animation()
            )
        )
        response.add_directive(
            gadget_directives.set_button_up_animation(
                animations=content.default_button_up_animation()
            )
        )

        session.registered_device_ids = device_ids
        session.button_check_in_count = MAX_DEVICES
        session.mode = SessionMode.PLAY
        # second_button_checked_in ends the watcher on its own
        session.active_watcher_id = None

        return response.build(open_microphone=True)

    def handle_roll_call_timeout(
        self, session: Session, event: Optional[InputHandlerEvent] = None
    ) -> SkillResponse:
        if session.mode != SessionMode.ROLL_CALL or session.button_check_in_count >= MAX_DEVICES:
            raise InvalidTransitionError("timeout", "roll call already complete")

        logger.info(
            "[ROLLCALL] Roll call timed out session_id=%s checked_in=%s",
            session.session_id,
            session.button_check_in_count,
        )
        device_ids = list(session.registered_device_ids)

        response = ResponseBuilder()
        response.speak(
            "For this skill we need two buttons. "
            "Would you like more time to press the buttons?"
        ).listen("Say yes to go back and add buttons, or no to exit now.")
        self._reset_button_animations(
            response, device_ids, idle=content.roll_call_timeout_animation()
        )

        session.awaiting_exit_confirmation = True
        session.active_watcher_id = None

        return response.build(open_microphone=True)

    # ------------------------------------------------------------------
    # Play
    # ------------------------------------------------------------------

    def handle_color_choice(self, session: Session, request: IntentRequest) -> SkillResponse:
        if session.mode != SessionMode.PLAY:
            raise InvalidTransitionError("colorIntent", f"mode is {session.mode.value}")

        requested = request.intent.slot("color")
        color = requested.strip().lower() if requested else None
        logger.info("[PLAY] User color: %s", requested)

        if color not in content.COLORS_ALLOWED:
            return self.handle_help(session)

        device_ids = list(session.registered_device_ids)

        response = ResponseBuilder()
        response.add_directive(
            gadget_directives.start_input_handler(
                timeout=_usable_timeout(
                    "play", self.play_timeout_ms, DEFAULT_PLAY_TIMEOUT_MS
                ),
                recognizers=input_handlers.button_down_recognizers(),
                events=input_handlers.play_events(),
            )
        )
        # Idle breathing in a dimmed variant of the chosen color, plays now
        response.add_directive(
            gadget_directives.set_idle_animation(
                animations=basic_animations.breathe_animation(
                    30, content.BREATH_CUSTOM_COLORS[color], 450
                ),
                target_gadgets=device_ids,
            )
        )
        response.add_directive(
            gadget_directives.set_button_down_animation(
                animations=basic_animations.solid_animation(1, color, 2000),
                target_gadgets=device_ids,
            )
        )
        response.add_directive(
            gadget_directives.set_button_up_animation(
                animations=basic_animations.solid_animation(1, color, 200),
                target_gadgets=device_ids,
            )
        )
        response.speak(
            f"Ok. {color} it is. When you press a button, it will now turn {color}. "
            "Pressing the button will also interrupt me if I'm speaking or playing music. "
            "I'll keep talking so you can interrupt me. Go ahead and try it. "
            + content.WAITING_AUDIO
        )

        session.chosen_color = color
        session.active_watcher_id = request.request_id
        logger.info("[PLAY] Current input handler id: %s", session.active_watcher_id)

        return response.build(open_microphone=False)

    def handle_play_timeout(
        self, session: Session, event: Optional[InputHandlerEvent] = None
    ) -> SkillResponse:
        if session.mode != SessionMode.PLAY:
            raise InvalidTransitionError("timeout", f"mode is {session.mode.value}")

        logger.info("[PLAY] Input handler timed out session_id=%s", session.session_id)
        device_ids = list(session.registered_device_ids)

        response = ResponseBuilder()
        response.speak(
            "The input handler has timed out. "
            "That concludes our test, would you like to quit?"
        ).listen("Would you like to exit? Say Yes to exit, or No to keep going")
        self._reset_button_animations(
            response,
            device_ids,
            idle=basic_animations.fade_out_animation(
                1, session.chosen_color or "black", 2000
            ),
        )

        session.awaiting_exit_confirmation = True
        session.mode = SessionMode.EXIT
        session.active_watcher_id = None

        return response.build(open_microphone=True)

    def handle_button_down(self, session: Session, event: InputHandlerEvent) -> SkillResponse:
        if session.mode != SessionMode.PLAY:
            raise InvalidTransitionError("button_down_event", f"mode is {session.mode.value}")
        if not event.input_events:
            raise UserInputError("button_down_event without input events")

        button_id = event.input_events[0].gadget_id
        response = ResponseBuilder()

        if button_id not in session.registered_device_ids:
            # No directives go back for a gadget that was not registered
            logger.info(
                "[PLAY] Button event received for gadget %s that was not registered during roll call.",
                button_id,
            )
            response.speak(
                "Unregistered button. Only buttons registered during roll call are in play. "
                + content.WAITING_AUDIO
            )
        else:
            index = session.registered_device_ids.index(button_id)
            logger.info("[PLAY] Button %s pressed gadget_id=%s", index, button_id)
            response.speak(f"button {index + 1}. " + content.WAITING_AUDIO)

        return response.build(open_microphone=False)

    # ------------------------------------------------------------------
    # Exit
    # ------------------------------------------------------------------

    def handle_exit_yes(self, session: Session, request: Optional[IntentRequest] = None) -> SkillResponse:
        self._require_exit_confirmation(session, "AMAZON.YesIntent")
        logger.info("[EXIT] Exit confirmed session_id=%s", session.session_id)
        return self.handle_session_ended(session)

    def handle_exit_no(self, session: Session, request: Optional[IntentRequest] = None) -> SkillResponse:
        self._require_exit_confirmation(session, "AMAZON.NoIntent")
        logger.info("[EXIT] Exit declined session_id=%s", session.session_id)

        reprompt = "Pick a different color, red, blue, or green."
        response = ResponseBuilder()
        response.speak("Ok, let's keep going. " + reprompt).listen(reprompt)

        session.mode = SessionMode.PLAY
        session.awaiting_exit_confirmation = False

        return response.build(open_microphone=True)

    @staticmethod
    def _require_exit_confirmation(session: Session, operation: str) -> None:
        if session.mode != SessionMode.EXIT or not session.awaiting_exit_confirmation:
            raise InvalidTransitionError(operation, "not waiting for an exit confirmation")

    # ------------------------------------------------------------------
    # Handlers shared by every mode
    # ------------------------------------------------------------------

    def handle_help(self, session: Session, request: Optional[IntentRequest] = None) -> SkillResponse:
        response = ResponseBuilder()

        if session.active_watcher_id:
            # Stop the watcher so it doesn't interrupt the help prompt
            response.add_directive(
                gadget_directives.stop_input_handler(watcher_id=session.active_watcher_id)
            )
            # Reports still in flight from the stopped watcher are stale
            session.active_watcher_id = None

        if session.is_roll_call_complete:
            reprompt = (
                "Pick a color to test your buttons: red, blue, or green. "
                "Or say cancel or exit to quit. "
            )
            response.speak(
                "Now that you have registered two buttons, you can pick a color to "
                "show when the buttons are pressed. "
                "Select one of the following colors: red, blue, or green. "
                "If you do not wish to continue, you can say exit. " + reprompt
            ).listen(reprompt)
        else:
            reprompt = "You can say yes to continue, or no or exit to quit."
            response.speak(
                "You will need two Echo buttons to use this skill. "
                "Each of the two buttons you plan to use must be pressed for the "
                "skill to register them. "
                "Would you like to continue and register two Echo buttons? " + reprompt
            ).listen(reprompt)
            # Yes / No now answer "continue with roll call?"
            session.awaiting_exit_confirmation = True

        return response.build(open_microphone=True)

    def handle_stop(self, session: Session, request: Optional[IntentRequest] = None) -> SkillResponse:
        logger.info("[STOP] session_id=%s", session.session_id)
        return ResponseBuilder().speak("Good Bye!").end_session()

    def handle_default(self, session: Session, request=None) -> SkillResponse:
        reprompt = "Please say again, or say help if you're not sure what to do."
        return (
            ResponseBuilder()
            .speak("Sorry, I didn't get that. " + reprompt)
            .listen(reprompt)
            .build(open_microphone=True)
        )

    def handle_session_ended(self, session: Session, request=None) -> SkillResponse:
        return ResponseBuilder().end_session()

    def handle_error(self, session: Optional[Session] = None) -> SkillResponse:
        reprompt = "Please try again."
        return (
            ResponseBuilder()
            .speak("Sorry, something went wrong on my side. " + reprompt)
            .listen(reprompt)
            .build(open_microphone=True)
        )

    @staticmethod
    def ignore() -> SkillResponse:
        """Neutral answer: no speech, no directives, microphone closed."""
        return ResponseBuilder().build(open_microphone=False)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _reset_button_animations(response: ResponseBuilder, device_ids, idle) -> None:
        response.add_directive(
            gadget_directives.set_idle_animation(animations=idle, target_gadgets=device_ids)
        )
        response.add_directive(
            gadget_directives.set_button_down_animation(
                animations=content.default_button_down_animation(),
                target_gadgets=device_ids,
            )
        )
        response.add_directive(
            gadget_directives.set_button_up_animation(
                animations=content.default_button_up_animation(),
                target_gadgets=device_ids,
            )
        )
