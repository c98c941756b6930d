"""
HTTP request/response models for the Color Changer runtime API.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from color_changer.core.directives.models import Directive
from .request_models import InboundRequest
from .session_models import is_safe_session_id


class SkillRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    request: InboundRequest

    @field_validator("session_id")
    @classmethod
    def _single_path_component(cls, value: str) -> str:
        # Session ids double as file names in the session store
        if not is_safe_session_id(value):
            raise ValueError("sessionId must be a single path component")
        return value


class SkillResponse(BaseModel):
    """
    Everything the skill returns for one request:

    - output_speech / reprompt: SSML text, either may be absent
    - should_end_session:
        False → microphone open, waiting for the user to speak
        None  → session stays open with the microphone closed
                (the platform keeps delivering button events)
        True  → the session is over
    - directives: ordered watcher and light directives
    """
    model_config = ConfigDict(populate_by_name=True)

    output_speech: Optional[str] = Field(default=None, alias="outputSpeech")
    reprompt: Optional[str] = None
    should_end_session: Optional[bool] = Field(default=None, alias="shouldEndSession")
    directives: List[Directive] = Field(default_factory=list)

    @property
    def microphone_open(self) -> bool:
        return self.should_end_session is False

    @property
    def session_ended(self) -> bool:
        return self.should_end_session is True
