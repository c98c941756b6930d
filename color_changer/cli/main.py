#!/usr/bin/env python3
"""
Color Changer CLI

Small developer tools around the skill runtime.

Commands:

1) resolve-color
   - Print the hex code a color name (or literal code) resolves to.

2) animation
   - Print the JSON of one of the basic light animations.

3) replay
   - Feed a JSON file of recorded requests through a fresh in-memory
     runtime and print (or write) every response. The file holds a list
     of envelopes:
         [{"sessionId": "...", "request": {"type": "LaunchRequest", ...}}, ...]

4) serve
   - Run the HTTP runtime with uvicorn, equivalent to:
         uvicorn color_changer.runtime.api.server:app
"""

from __future__ import annotations

import argparse
import json
import os
from typing import Dict, List

from pydantic import TypeAdapter

from color_changer.core.animations import basic_animations
from color_changer.core.animations.colors import resolve_color
from color_changer.runtime.agents.request_router import RequestRouter
from color_changer.runtime.agents.state_machine import SessionStateMachine
from color_changer.runtime.models.api_models import SkillRequest
from color_changer.runtime.store.log_store import ConsoleLogStore
from color_changer.runtime.store.session_store import SessionStore


ANIMATIONS = {
    "solid": lambda a: basic_animations.solid_animation(a.cycles, a.color, a.duration),
    "fade": lambda a: basic_animations.fade_animation(a.color, a.duration),
    "fade-in": lambda a: basic_animations.fade_in_animation(a.cycles, a.color, a.duration),
    "fade-out": lambda a: basic_animations.fade_out_animation(a.cycles, a.color, a.duration),
    "cross-fade": lambda a: basic_animations.cross_fade_animation(
        a.cycles, a.color, a.color2, a.duration, a.duration2
    ),
    "breathe": lambda a: basic_animations.breathe_animation(a.cycles, a.color, a.duration),
    "blink": lambda a: basic_animations.blink_animation(a.cycles, a.color),
    "flip": lambda a: basic_animations.flip_animation(
        a.cycles, a.color, a.color2, a.duration, a.duration2
    ),
    "pulse": lambda a: basic_animations.pulse_animation(a.cycles, a.color, a.color2),
}


def _write_json(data, out_path: str) -> None:
    """Write JSON to a file with UTF-8 encoding and pretty formatting."""
    parent = os.path.dirname(out_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_resolve_color(name: str) -> str:
    resolved = resolve_color(name)
    print(resolved)
    return resolved


def cmd_animation(args: argparse.Namespace) -> List[Dict]:
    steps = [step.to_dict() for step in ANIMATIONS[args.kind](args)]
    print(json.dumps(steps, indent=2))
    return steps


def cmd_replay(src_path: str, out_path: str = None) -> List[Dict]:
    """
    Replay recorded requests in order against a fresh in-memory store and
    return the responses with wire names, dropping unset fields.
    """
    if not os.path.isfile(src_path):
        raise FileNotFoundError(f"Replay file not found: {src_path}")

    with open(src_path, "r", encoding="utf-8") as f:
        envelopes = TypeAdapter(List[SkillRequest]).validate_python(json.load(f))

    router = RequestRouter(
        session_store=SessionStore(),
        state_machine=SessionStateMachine(),
        log_store=ConsoleLogStore(),
    )

    print(f"[Color Changer] Replaying {len(envelopes)} requests from {src_path}")
    responses = []
    for envelope in envelopes:
        response = router.handle(envelope.session_id, envelope.request)
        responses.append(
            response.model_dump(by_alias=True, exclude_none=True, mode="json")
        )

    if out_path:
        _write_json(responses, out_path)
        print(f"[Color Changer] ✓ {len(responses)} responses written → {out_path}")
    else:
        print(json.dumps(responses, indent=2, ensure_ascii=False))
    return responses


def cmd_serve(host: str, port: int, reload: bool) -> None:
    # Lazy import so the other commands work without the server extras.
    import uvicorn

    uvicorn.run(
        "color_changer.runtime.api.server:app",
        host=host,
        port=port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Color Changer CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # resolve-color
    p_color = subparsers.add_parser(
        "resolve-color", help="Print the hex code for a color name or literal"
    )
    p_color.add_argument("name", help="Color name (e.g. 'light blue') or code ('0xAABBCC')")

    # animation
    p_anim = subparsers.add_parser("animation", help="Print a basic animation as JSON")
    p_anim.add_argument("kind", choices=sorted(ANIMATIONS))
    p_anim.add_argument("--color", required=True, help="Main color")
    p_anim.add_argument("--color2", default="black", help="Second color (cross-fade, flip, pulse)")
    p_anim.add_argument("--cycles", type=int, default=1, help="Repeat count")
    p_anim.add_argument("--duration", type=int, default=1000, help="Duration in ms")
    p_anim.add_argument("--duration2", type=int, default=1000, help="Second duration in ms")

    # replay
    p_replay = subparsers.add_parser(
        "replay", help="Replay a JSON file of recorded requests"
    )
    p_replay.add_argument("path", help="JSON file with a list of {sessionId, request} objects")
    p_replay.add_argument("--out", default=None, help="Write responses to this file")

    # serve
    p_serve = subparsers.add_parser("serve", help="Run the HTTP runtime with uvicorn")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.add_argument("--reload", action="store_true")

    return parser


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    command: str = args.command

    if command == "resolve-color":
        cmd_resolve_color(args.name)
    elif command == "animation":
        cmd_animation(args)
    elif command == "replay":
        cmd_replay(src_path=args.path, out_path=args.out)
    elif command == "serve":
        cmd_serve(host=args.host, port=args.port, reload=args.reload)
    else:
        parser.error(f"Unknown command: {command}")


if __name__ == "__main__":
    main()
