"""ResponseBuilder: accumulates speech and directives for a single request."""

from typing import List, Optional

from ..models.api_models import SkillResponse


class ResponseBuilder:
    """Collects the parts of one SkillResponse.

    Handlers call speak()/listen()/add_directive() in any order and finish
    with exactly one of build() or end_session().
    """

    def __init__(self) -> None:
        self._speech: Optional[str] = None
        self._reprompt: Optional[str] = None
        self._directives: List = []

    def speak(self, speech: str) -> "ResponseBuilder":
        self._speech = speech
        return self

    def listen(self, reprompt: str) -> "ResponseBuilder":
        self._reprompt = reprompt
        return self

    def add_directive(self, directive) -> "ResponseBuilder":
        self._directives.append(directive)
        return self

    def build(self, open_microphone: bool = False) -> SkillResponse:
        """Finish a response that keeps the session going.

        With the microphone closed, should_end_session is left unset so the
        session stays open while a watcher waits for button presses.
        """
        return SkillResponse(
            output_speech=self._speech,
            reprompt=self._reprompt,
            should_end_session=False if open_microphone else None,
            directives=list(self._directives),
        )

    def end_session(self) -> SkillResponse:
        return SkillResponse(
            output_speech=self._speech,
            reprompt=None,
            should_end_session=True,
            directives=list(self._directives),
        )
