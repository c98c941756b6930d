"""
core.animations.basic_animations

Builders for the basic light animations a button can play.

Every builder is a pure function: the same arguments always produce an
equal list of AnimationStep objects, and a fresh list on every call so
callers may attach them to a directive without sharing state.

Colors go through resolve_color, so names ("red"), literal codes
("0xff0000", "#ff0000") and raw hex ("ff0000") are all accepted.
"""

from __future__ import annotations

from typing import List

from color_changer.core.animations.colors import resolve_color
from color_changer.core.animations.models import AnimationStep, SequenceStep


BLACK = "000000"


def _single(repeat_count: int, *steps: SequenceStep) -> List[AnimationStep]:
    return [AnimationStep(repeat_count=repeat_count, sequence=list(steps))]


def _step(duration_ms: int, color: str, blend: bool) -> SequenceStep:
    return SequenceStep(duration_ms=duration_ms, blend=blend, color_hex=color)


def solid_animation(cycles: int, color: str, duration: int) -> List[AnimationStep]:
    """Hold one color for `duration` ms, `cycles` times."""
    return _single(cycles, _step(duration, resolve_color(color), False))


def fade_animation(color: str, duration: int) -> List[AnimationStep]:
    """Blend from the current color to `color` once."""
    return _single(1, _step(duration, resolve_color(color), True))


def fade_in_animation(cycles: int, color: str, duration: int) -> List[AnimationStep]:
    """Start dark, then blend up to `color`."""
    return _single(
        cycles,
        _step(1, BLACK, True),
        _step(duration, resolve_color(color), True),
    )


def fade_out_animation(cycles: int, color: str, duration: int) -> List[AnimationStep]:
    """Blend to `color`, then drop to dark."""
    return _single(
        cycles,
        _step(duration, resolve_color(color), True),
        _step(1, BLACK, True),
    )


def cross_fade_animation(
    cycles: int,
    color_one: str,
    color_two: str,
    duration_one: int,
    duration_two: int,
) -> List[AnimationStep]:
    return _single(
        cycles,
        _step(duration_one, resolve_color(color_one), True),
        _step(duration_two, resolve_color(color_two), True),
    )


def breathe_animation(cycles: int, color: str, duration: int) -> List[AnimationStep]:
    """Slow swell into `color`, short hold, short release back to dark."""
    resolved = resolve_color(color)
    return _single(
        cycles,
        _step(1, BLACK, True),
        _step(duration, resolved, True),
        _step(300, resolved, True),
        _step(300, BLACK, True),
    )


def blink_animation(cycles: int, color: str) -> List[AnimationStep]:
    return _single(
        cycles,
        _step(500, resolve_color(color), False),
        _step(500, BLACK, False),
    )


def flip_animation(
    cycles: int,
    color_one: str,
    color_two: str,
    duration_one: int,
    duration_two: int,
) -> List[AnimationStep]:
    return _single(
        cycles,
        _step(duration_one, resolve_color(color_one), False),
        _step(duration_two, resolve_color(color_two), False),
    )


def pulse_animation(cycles: int, color_one: str, color_two: str) -> List[AnimationStep]:
    return _single(
        cycles,
        _step(500, resolve_color(color_one), True),
        _step(1000, resolve_color(color_two), True),
    )
