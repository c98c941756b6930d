"""
core.directives.gadget_directives

Factory functions for the directives the skill adds to a response:

  - start_input_handler     → GameEngine.StartInputHandler
  - stop_input_handler      → GameEngine.StopInputHandler
  - set_button_down_animation / set_button_up_animation / set_idle_animation
                            → GadgetController.SetLight

Required parameters are checked up front: building a directive without
them raises ConfigurationError instead of returning a malformed directive.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from color_changer.core.animations.models import AnimationStep
from color_changer.core.directives.models import (
    InputHandlerEventSpec,
    LightTrigger,
    Recognizer,
    SetLightDirective,
    SetLightParameters,
    StartInputHandlerDirective,
    StopInputHandlerDirective,
)
from color_changer.exceptions.exceptions import ConfigurationError


def _required(name: str, value: Any) -> Any:
    if value is None or (isinstance(value, (str, Mapping, Sequence)) and not value):
        raise ConfigurationError(name)
    return value


def start_input_handler(
    *,
    timeout: Optional[int] = None,
    recognizers: Optional[Mapping[str, Recognizer]] = None,
    events: Optional[Mapping[str, InputHandlerEventSpec]] = None,
    proxies: Optional[Sequence[str]] = None,
    maximum_history_length: Optional[int] = None,
) -> StartInputHandlerDirective:
    """Return a StartInputHandler directive for a new timed watcher."""
    _required("timeout", timeout)
    _required("recognizers", recognizers)
    _required("events", events)

    return StartInputHandlerDirective(
        timeout=timeout,
        maximum_history_length=maximum_history_length,
        proxies=list(proxies) if proxies else None,
        recognizers=dict(recognizers),
        events=dict(events),
    )


def stop_input_handler(*, watcher_id: Optional[str] = None) -> StopInputHandlerDirective:
    """Return a StopInputHandler directive for the watcher started by `watcher_id`."""
    _required("watcher_id", watcher_id)
    return StopInputHandlerDirective(originating_request_id=watcher_id)


def _set_light(
    trigger: LightTrigger,
    animations: Optional[List[AnimationStep]],
    target_gadgets: Optional[Sequence[str]],
    trigger_event_time_ms: int,
) -> SetLightDirective:
    _required("animations", animations)
    return SetLightDirective(
        target_gadgets=list(target_gadgets or []),
        parameters=SetLightParameters(
            animations=list(animations),
            trigger_event=trigger,
            trigger_event_time_ms=trigger_event_time_ms,
        ),
    )


def set_button_down_animation(
    *,
    animations: Optional[List[AnimationStep]] = None,
    target_gadgets: Optional[Sequence[str]] = None,
    trigger_event_time_ms: int = 0,
) -> SetLightDirective:
    return _set_light(LightTrigger.DOWN, animations, target_gadgets, trigger_event_time_ms)


def set_button_up_animation(
    *,
    animations: Optional[List[AnimationStep]] = None,
    target_gadgets: Optional[Sequence[str]] = None,
    trigger_event_time_ms: int = 0,
) -> SetLightDirective:
    return _set_light(LightTrigger.UP, animations, target_gadgets, trigger_event_time_ms)


def set_idle_animation(
    *,
    animations: Optional[List[AnimationStep]] = None,
    target_gadgets: Optional[Sequence[str]] = None,
    trigger_event_time_ms: int = 0,
) -> SetLightDirective:
    """An idle animation plays immediately (trigger "none")."""
    return _set_light(LightTrigger.NONE, animations, target_gadgets, trigger_event_time_ms)


def directive_to_dict(directive) -> Dict[str, Any]:
    """Serialize any directive with wire names, dropping unset optionals."""
    return directive.model_dump(by_alias=True, exclude_none=True, mode="json")
