"""
Inbound request models for the Color Changer runtime.

One request arrives per platform call. The `type` field selects the kind:

- LaunchRequest                 → the user opened the skill
- IntentRequest                 → a recognized voice intent with its slots
- GameEngine.InputHandlerEvent  → a hardware report from a timed watcher
- SessionEndedRequest           → the platform closed the session
"""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Intent(_WireModel):
    name: str
    # slot name -> spoken value (None when the slot was not filled)
    slots: Dict[str, Optional[str]] = Field(default_factory=dict)

    def slot(self, name: str) -> Optional[str]:
        return self.slots.get(name)


class InputEvent(_WireModel):
    """A single raw button action reported inside a watcher event."""
    gadget_id: str = Field(alias="gadgetId")
    action: str = "down"
    color: Optional[str] = None
    timestamp: Optional[str] = None


class InputHandlerEvent(_WireModel):
    """A named event fired by one of the watcher's recognizers (or its timeout)."""
    name: str
    input_events: List[InputEvent] = Field(default_factory=list, alias="inputEvents")

    @property
    def gadget_ids(self) -> List[str]:
        return [event.gadget_id for event in self.input_events]


class LaunchRequest(_WireModel):
    type: Literal["LaunchRequest"] = "LaunchRequest"
    request_id: str = Field(alias="requestId")


class IntentRequest(_WireModel):
    type: Literal["IntentRequest"] = "IntentRequest"
    request_id: str = Field(alias="requestId")
    intent: Intent


class InputHandlerEventRequest(_WireModel):
    type: Literal["GameEngine.InputHandlerEvent"] = "GameEngine.InputHandlerEvent"
    request_id: str = Field(alias="requestId")
    originating_request_id: str = Field(alias="originatingRequestId")
    events: List[InputHandlerEvent] = Field(default_factory=list)


class SessionEndedRequest(_WireModel):
    type: Literal["SessionEndedRequest"] = "SessionEndedRequest"
    request_id: str = Field(alias="requestId")
    reason: Optional[str] = None


InboundRequest = Annotated[
    Union[LaunchRequest, IntentRequest, InputHandlerEventRequest, SessionEndedRequest],
    Field(discriminator="type"),
]
