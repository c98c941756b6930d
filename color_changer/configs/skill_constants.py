"""
Static skill content: allowed colors, the dimmed breathe colors, the
waiting audio clip and the animations used to reset the buttons.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from color_changer.core.animations import basic_animations
from color_changer.core.animations.models import AnimationStep


# Ticking clock played whenever the skill is waiting for button presses
WAITING_AUDIO = (
    "<audio src='https://s3.amazonaws.com/ask-soundlibrary/foley/"
    "amzn_sfx_rhythmic_ticking_30s_01.mp3'/>"
)

COLORS_ALLOWED: Tuple[str, ...] = ("blue", "green", "red")

# Dim variant of each allowed color, used for the idle breathing animation
BREATH_CUSTOM_COLORS: Dict[str, str] = {
    "blue": "184066",
    "green": "184518",
    "red": "603018",
}

PROXIES: Tuple[str, str] = ("first_button", "second_button")


# ---------------------------------------------------------------------------
# Default button animations (close to what the buttons do on their own)
# ---------------------------------------------------------------------------


def default_button_down_animation() -> List[AnimationStep]:
    return basic_animations.fade_out_animation(1, "blue", 200)


def default_button_up_animation() -> List[AnimationStep]:
    return basic_animations.solid_animation(1, "black", 100)


# ---------------------------------------------------------------------------
# Roll call animations
# ---------------------------------------------------------------------------


def roll_call_complete_animation() -> List[AnimationStep]:
    return basic_animations.fade_in_animation(1, "green", 5000)


def check_in_idle_animation() -> List[AnimationStep]:
    return basic_animations.solid_animation(1, "green", 8000)


def check_in_down_animation() -> List[AnimationStep]:
    return basic_animations.solid_animation(1, "green", 1000)


def check_in_up_animation() -> List[AnimationStep]:
    return basic_animations.solid_animation(1, "white", 4000)


def roll_call_timeout_animation() -> List[AnimationStep]:
    return basic_animations.fade_animation("black", 1000)
