"""Tests for the session state machine operations."""

import pytest

from color_changer.core.directives.models import (
    LightTrigger,
    SetLightDirective,
    StartInputHandlerDirective,
    StopInputHandlerDirective,
)
from color_changer.exceptions.exceptions import InvalidTransitionError, UserInputError
from color_changer.runtime.agents.state_machine import SessionStateMachine
from color_changer.runtime.models.session_models import Session, SessionMode


def _triggers(response):
    return [
        d.parameters.trigger_event
        for d in response.directives
        if isinstance(d, SetLightDirective)
    ]


@pytest.fixture
def session():
    return Session(session_id="session-1")


@pytest.fixture
def play_session():
    return Session(
        session_id="session-1",
        mode=SessionMode.PLAY,
        registered_device_ids=["dev1", "dev2"],
        button_check_in_count=2,
    )


class TestStartSession:
    """Test entering roll call"""

    def test_resets_and_starts_watcher(self, state_machine, req):
        session = Session(
            session_id="s",
            mode=SessionMode.EXIT,
            registered_device_ids=["old1", "old2"],
            button_check_in_count=2,
            chosen_color="red",
            awaiting_exit_confirmation=True,
        )
        response = state_machine.start_session(session, "req-1")

        assert session.mode == SessionMode.ROLL_CALL
        assert session.registered_device_ids == []
        assert session.button_check_in_count == 0
        assert session.chosen_color is None
        assert session.awaiting_exit_confirmation is False
        assert session.active_watcher_id == "req-1"

        start = response.directives[0]
        assert isinstance(start, StartInputHandlerDirective)
        assert start.timeout == 50000
        assert start.proxies == ["first_button", "second_button"]
        assert set(start.recognizers) == {
            "roll_call_first_button_recognizer",
            "roll_call_second_button_recognizer",
        }
        assert _triggers(response) == [LightTrigger.DOWN, LightTrigger.UP]
        assert response.should_end_session is None
        assert response.output_speech.startswith("Welcome to the Color Changer skill.")

    @pytest.mark.parametrize("timeout", [0, -5, "fast", True])
    def test_degenerate_timeout_falls_back(self, state_machine, session, timeout):
        response = state_machine.start_session(session, "req-1", timeout_ms=timeout)
        assert response.directives[0].timeout == 50000
        assert session.active_watcher_id == "req-1"

    def test_restart_uses_shorter_timeout(self, state_machine, session, req):
        response = state_machine.restart_roll_call(session, req.intent("AMAZON.YesIntent"))
        assert response.directives[0].timeout == 30000
        assert response.output_speech.startswith("Ok. Press the first button")

    def test_unusable_retry_timeout_falls_back(self, session, req):
        machine = SessionStateMachine(
            roll_call_timeout_ms=50000, roll_call_retry_timeout_ms=0, play_timeout_ms=30000
        )
        response = machine.restart_roll_call(session, req.intent("AMAZON.YesIntent"))
        assert response.directives[0].timeout == 30000


class TestRollCall:
    """Test button check-in handling"""

    def test_first_check_in(self, state_machine, session, req):
        response = state_machine.handle_first_check_in(
            session, req.event("first_button_checked_in", "dev1")
        )

        assert session.registered_device_ids == ["dev1"]
        assert session.button_check_in_count == 1
        assert session.mode == SessionMode.ROLL_CALL

        (idle,) = response.directives
        assert idle.parameters.trigger_event == LightTrigger.NONE
        assert idle.target_gadgets == ["dev1"]
        assert response.output_speech.startswith("hello, button 1")

    def test_first_check_in_twice_is_rejected_without_change(self, state_machine, session, req):
        state_machine.handle_first_check_in(session, req.event("first_button_checked_in", "dev1"))
        before = session.model_dump()

        with pytest.raises(InvalidTransitionError):
            state_machine.handle_first_check_in(
                session, req.event("first_button_checked_in", "dev9")
            )
        assert session.model_dump() == before

    def test_first_check_in_without_gadget(self, state_machine, session, req):
        with pytest.raises(UserInputError):
            state_machine.handle_first_check_in(session, req.event("first_button_checked_in"))
        assert session.button_check_in_count == 0

    def test_second_check_in_after_first(self, state_machine, session, req):
        session.active_watcher_id = "req-1"
        state_machine.handle_first_check_in(session, req.event("first_button_checked_in", "dev1"))
        response = state_machine.handle_second_check_in(
            session, req.event("second_button_checked_in", "dev1", "dev2")
        )

        assert session.registered_device_ids == ["dev1", "dev2"]
        assert session.button_check_in_count == 2
        assert session.mode == SessionMode.PLAY
        assert session.active_watcher_id is None
        assert response.microphone_open
        assert _triggers(response) == [LightTrigger.NONE, LightTrigger.DOWN, LightTrigger.UP]
        assert response.directives[0].target_gadgets == ["dev1", "dev2"]

    def test_second_check_in_prefers_first_unregistered_id(self, state_machine, session, req):
        session.registered_device_ids = ["dev2"]
        session.button_check_in_count = 1
        state_machine.handle_second_check_in(
            session, req.event("second_button_checked_in", "dev2", "dev3", "dev4")
        )
        assert session.registered_device_ids == ["dev2", "dev3"]

    def test_both_buttons_in_one_report(self, state_machine, session, req):
        response = state_machine.handle_second_check_in(
            session, req.event("second_button_checked_in", "dev1", "dev2")
        )
        assert session.registered_device_ids == ["dev1", "dev2"]
        assert session.mode == SessionMode.PLAY
        assert response.output_speech.startswith("hello buttons 1 and 2")

    def test_both_buttons_needs_two_distinct_ids(self, state_machine, session, req):
        with pytest.raises(UserInputError):
            state_machine.handle_second_check_in(
                session, req.event("second_button_checked_in", "dev1", "dev1")
            )
        assert session.registered_device_ids == []
        assert session.mode == SessionMode.ROLL_CALL

    def test_second_check_in_after_completion_is_rejected(self, state_machine, play_session, req):
        with pytest.raises(InvalidTransitionError):
            state_machine.handle_second_check_in(
                play_session, req.event("second_button_checked_in", "dev3", "dev4")
            )
        assert play_session.registered_device_ids == ["dev1", "dev2"]

    def test_roll_call_timeout(self, state_machine, session):
        session.registered_device_ids = ["dev1"]
        session.button_check_in_count = 1
        session.active_watcher_id = "req-1"

        response = state_machine.handle_roll_call_timeout(session)

        assert session.awaiting_exit_confirmation is True
        assert session.mode == SessionMode.ROLL_CALL
        assert session.active_watcher_id is None
        assert response.microphone_open
        assert "more time" in response.output_speech
        assert all(d.target_gadgets == ["dev1"] for d in response.directives)


class TestPlay:
    """Test color choice and button presses"""

    @pytest.mark.parametrize("timeout", [0, -1, "soon"])
    def test_unusable_play_timeout_falls_back(self, play_session, req, timeout):
        machine = SessionStateMachine(
            roll_call_timeout_ms=50000,
            roll_call_retry_timeout_ms=30000,
            play_timeout_ms=timeout,
        )
        response = machine.handle_color_choice(play_session, req.intent("colorIntent", color="red"))
        assert response.directives[0].timeout == 30000
        assert play_session.chosen_color == "red"

    def test_color_choice(self, state_machine, play_session, req):
        request = req.intent("colorIntent", color="blue")
        response = state_machine.handle_color_choice(play_session, request)

        assert play_session.chosen_color == "blue"
        assert play_session.active_watcher_id == request.request_id

        start, *lights = response.directives
        assert isinstance(start, StartInputHandlerDirective)
        assert start.timeout == 30000
        assert start.proxies is None
        assert list(start.recognizers) == ["button_down_recognizer"]

        assert [d.parameters.trigger_event for d in lights] == [
            LightTrigger.NONE,
            LightTrigger.DOWN,
            LightTrigger.UP,
        ]
        assert all(d.target_gadgets == ["dev1", "dev2"] for d in lights)

        idle, down, up = lights
        idle_colors = {s.color_hex for s in idle.parameters.animations[0].sequence}
        assert "184066" in idle_colors
        assert idle.parameters.animations[0].repeat_count == 30
        assert down.parameters.animations[0].sequence[0].duration_ms == 2000
        assert down.parameters.animations[0].sequence[0].color_hex == "0000ff"
        assert up.parameters.animations[0].sequence[0].duration_ms == 200
        assert response.should_end_session is None

    def test_color_is_case_insensitive(self, state_machine, play_session, req):
        state_machine.handle_color_choice(play_session, req.intent("colorIntent", color="Red"))
        assert play_session.chosen_color == "red"

    @pytest.mark.parametrize("slots", [{"color": "purple"}, {"color": None}, {}])
    def test_invalid_color_gives_help(self, state_machine, play_session, req, slots):
        response = state_machine.handle_color_choice(
            play_session, req.intent("colorIntent", **slots)
        )
        assert play_session.chosen_color is None
        assert play_session.active_watcher_id is None
        assert response.microphone_open
        assert "registered two buttons" in response.output_speech
        assert not any(isinstance(d, StartInputHandlerDirective) for d in response.directives)

    def test_color_choice_outside_play(self, state_machine, session, req):
        with pytest.raises(InvalidTransitionError):
            state_machine.handle_color_choice(session, req.intent("colorIntent", color="red"))

    def test_registered_button_down(self, state_machine, play_session, req):
        response = state_machine.handle_button_down(
            play_session, req.event("button_down_event", "dev2")
        )
        assert response.output_speech.startswith("button 2.")
        assert response.directives == []

    def test_unregistered_button_down_sends_no_directives(self, state_machine, play_session, req):
        response = state_machine.handle_button_down(
            play_session, req.event("button_down_event", "stranger")
        )
        assert response.output_speech.startswith("Unregistered button.")
        assert response.directives == []

    def test_play_timeout(self, state_machine, play_session):
        play_session.chosen_color = "green"
        play_session.active_watcher_id = "req-5"

        response = state_machine.handle_play_timeout(play_session)

        assert play_session.mode == SessionMode.EXIT
        assert play_session.awaiting_exit_confirmation is True
        assert play_session.active_watcher_id is None
        assert response.microphone_open
        fade = response.directives[0].parameters.animations[0].sequence
        assert [(s.duration_ms, s.color_hex) for s in fade] == [(2000, "00ff00"), (1, "000000")]


class TestExit:
    """Test exit confirmation"""

    @pytest.fixture
    def exit_session(self, play_session):
        play_session.mode = SessionMode.EXIT
        play_session.awaiting_exit_confirmation = True
        play_session.chosen_color = "red"
        return play_session

    def test_yes_ends_session(self, state_machine, exit_session):
        response = state_machine.handle_exit_yes(exit_session)
        assert response.session_ended

    def test_no_returns_to_play(self, state_machine, exit_session):
        response = state_machine.handle_exit_no(exit_session)
        assert exit_session.mode == SessionMode.PLAY
        assert exit_session.awaiting_exit_confirmation is False
        assert response.microphone_open
        assert response.reprompt == "Pick a different color, red, blue, or green."

    def test_no_without_pending_question(self, state_machine, play_session):
        with pytest.raises(InvalidTransitionError):
            state_machine.handle_exit_no(play_session)


class TestGlobalHandlers:
    """Test help / stop / default"""

    def test_help_during_roll_call_asks_to_continue(self, state_machine, session):
        session.active_watcher_id = "req-1"
        response = state_machine.handle_help(session)

        assert session.awaiting_exit_confirmation is True
        (stop,) = response.directives
        assert isinstance(stop, StopInputHandlerDirective)
        assert stop.originating_request_id == "req-1"
        assert session.active_watcher_id is None
        assert response.microphone_open

    def test_help_after_roll_call_keeps_flag(self, state_machine, play_session):
        response = state_machine.handle_help(play_session)
        assert play_session.awaiting_exit_confirmation is False
        assert response.directives == []

    def test_stop(self, state_machine, session):
        response = state_machine.handle_stop(session)
        assert response.output_speech == "Good Bye!"
        assert response.session_ended

    def test_default_reprompts(self, state_machine, session):
        before = session.model_dump()
        response = state_machine.handle_default(session)
        assert response.output_speech.startswith("Sorry, I didn't get that.")
        assert response.microphone_open
        assert session.model_dump() == before

    def test_ignore_is_neutral(self, state_machine):
        response = state_machine.ignore()
        assert response.output_speech is None
        assert response.directives == []
        assert response.should_end_session is None
