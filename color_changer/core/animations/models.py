from typing import List

from pydantic import BaseModel, ConfigDict, Field


class SequenceStep(BaseModel):
    """
    One timed color segment of a light animation.

    Serialized with the gadget wire names: durationMs, blend, color.
    """
    model_config = ConfigDict(populate_by_name=True)

    duration_ms: int = Field(alias="durationMs")
    blend: bool
    color_hex: str = Field(alias="color")


class AnimationStep(BaseModel):
    """
    A repeated sequence of color segments played on the target lights.

    Every button has a single light, so target_lights is always ["1"].
    """
    model_config = ConfigDict(populate_by_name=True)

    repeat_count: int = Field(alias="repeat")
    target_lights: List[str] = Field(default_factory=lambda: ["1"], alias="targetLights")
    sequence: List[SequenceStep]

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
