"""
Directive models returned to the voice platform.

These describe:
- the timed input watcher (StartInputHandler / StopInputHandler) with its
  recognizers and named events
- the SetLight directive that binds an animation to a button trigger

Field names are snake_case in Python and serialize to the platform's
camelCase wire names (model_dump(by_alias=True)).
"""

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from color_changer.core.animations.models import AnimationStep


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class LightTrigger(str, Enum):
    DOWN = "buttonDown"
    UP = "buttonUp"
    NONE = "none"


class PatternEntry(_WireModel):
    # None matches any gadget
    gadget_ids: Optional[List[str]] = Field(default=None, alias="gadgetIds")
    action: str


class Recognizer(_WireModel):
    type: str = "match"
    fuzzy: bool = False
    anchor: str = "end"
    pattern: List[PatternEntry]


class InputHandlerEventSpec(_WireModel):
    meets: List[str]
    reports: str = "matches"
    should_end_input_handler: bool = Field(alias="shouldEndInputHandler")
    maximum_invocations: Optional[int] = Field(default=None, alias="maximumInvocations")


class StartInputHandlerDirective(_WireModel):
    type: Literal["GameEngine.StartInputHandler"] = "GameEngine.StartInputHandler"
    timeout: int
    maximum_history_length: Optional[int] = Field(default=None, alias="maximumHistoryLength")
    proxies: Optional[List[str]] = None
    recognizers: Dict[str, Recognizer]
    events: Dict[str, InputHandlerEventSpec]


class StopInputHandlerDirective(_WireModel):
    type: Literal["GameEngine.StopInputHandler"] = "GameEngine.StopInputHandler"
    originating_request_id: str = Field(alias="originatingRequestId")


class SetLightParameters(_WireModel):
    animations: List[AnimationStep]
    trigger_event: LightTrigger = Field(alias="triggerEvent")
    trigger_event_time_ms: int = Field(default=0, alias="triggerEventTimeMs")


class SetLightDirective(_WireModel):
    type: Literal["GadgetController.SetLight"] = "GadgetController.SetLight"
    version: int = 1
    target_gadgets: List[str] = Field(default_factory=list, alias="targetGadgets")
    parameters: SetLightParameters


Directive = Annotated[
    Union[StartInputHandlerDirective, StopInputHandlerDirective, SetLightDirective],
    Field(discriminator="type"),
]
