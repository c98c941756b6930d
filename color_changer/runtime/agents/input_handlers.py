"""
Recognizers and named events for the two timed watchers the skill starts.

Roll call
---------
The two buttons are unknown ahead of time, so the roll-call recognizers
refer to them through the proxies "first_button" / "second_button"; the
platform binds each proxy to the first distinct gadget that matches.

- first_button_checked_in   fires once when the first button goes down
- second_button_checked_in  fires once when a second button goes down
                            (fuzzy, so other actions in between are fine)
                            and ends the watcher
- timeout                   fires if the watcher expires first

Play
----
Both buttons are registered, so a single "any button down" recognizer is
enough; no proxies are needed.

- button_down_event  fires on every press, keeps the watcher running
- timeout            fires when the watcher expires
"""

from typing import Dict

from color_changer.configs.skill_constants import PROXIES
from color_changer.core.directives.models import (
    InputHandlerEventSpec,
    PatternEntry,
    Recognizer,
)


FIRST_BUTTON_CHECKED_IN = "first_button_checked_in"
SECOND_BUTTON_CHECKED_IN = "second_button_checked_in"
BUTTON_DOWN_EVENT = "button_down_event"
TIMEOUT = "timeout"

_FIRST, _SECOND = PROXIES


def roll_call_recognizers() -> Dict[str, Recognizer]:
    return {
        "roll_call_first_button_recognizer": Recognizer(
            fuzzy=False,
            anchor="end",
            pattern=[PatternEntry(gadget_ids=[_FIRST], action="down")],
        ),
        "roll_call_second_button_recognizer": Recognizer(
            fuzzy=True,
            anchor="end",
            pattern=[
                PatternEntry(gadget_ids=[_FIRST], action="down"),
                PatternEntry(gadget_ids=[_SECOND], action="down"),
            ],
        ),
    }


def roll_call_events() -> Dict[str, InputHandlerEventSpec]:
    return {
        FIRST_BUTTON_CHECKED_IN: InputHandlerEventSpec(
            meets=["roll_call_first_button_recognizer"],
            reports="matches",
            should_end_input_handler=False,
            maximum_invocations=1,
        ),
        SECOND_BUTTON_CHECKED_IN: InputHandlerEventSpec(
            meets=["roll_call_second_button_recognizer"],
            reports="matches",
            should_end_input_handler=True,
            maximum_invocations=1,
        ),
        TIMEOUT: InputHandlerEventSpec(
            meets=["timed out"],
            reports="history",
            should_end_input_handler=True,
        ),
    }


def button_down_recognizers() -> Dict[str, Recognizer]:
    return {
        "button_down_recognizer": Recognizer(
            fuzzy=False,
            anchor="end",
            pattern=[PatternEntry(action="down")],
        ),
    }


def play_events() -> Dict[str, InputHandlerEventSpec]:
    return {
        BUTTON_DOWN_EVENT: InputHandlerEventSpec(
            meets=["button_down_recognizer"],
            reports="matches",
            should_end_input_handler=False,
        ),
        TIMEOUT: InputHandlerEventSpec(
            meets=["timed out"],
            reports="history",
            should_end_input_handler=True,
        ),
    }
