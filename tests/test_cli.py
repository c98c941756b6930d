"""Tests for the command line tools."""

import json

import pytest

from color_changer.cli.main import build_parser, cmd_animation, cmd_replay, main


def test_resolve_color(capsys):
    main(["resolve-color", "Purple"])
    assert capsys.readouterr().out.strip() == "4b0098"


def test_animation(capsys):
    args = build_parser().parse_args(
        ["animation", "blink", "--color", "red", "--cycles", "3"]
    )
    steps = cmd_animation(args)
    assert steps[0]["repeat"] == 3
    assert json.loads(capsys.readouterr().out) == steps


def test_replay_writes_responses(tmp_path):
    requests = [
        {"sessionId": "s1", "request": {"type": "LaunchRequest", "requestId": "r1"}},
        {
            "sessionId": "s1",
            "request": {
                "type": "GameEngine.InputHandlerEvent",
                "requestId": "r2",
                "originatingRequestId": "r1",
                "events": [
                    {
                        "name": "first_button_checked_in",
                        "inputEvents": [{"gadgetId": "dev1", "action": "down"}],
                    }
                ],
            },
        },
    ]
    src = tmp_path / "requests.json"
    src.write_text(json.dumps(requests), encoding="utf-8")
    out = tmp_path / "out" / "responses.json"

    responses = cmd_replay(str(src), str(out))

    assert len(responses) == 2
    assert responses[1]["outputSpeech"].startswith("hello, button 1")
    assert json.loads(out.read_text(encoding="utf-8")) == responses


def test_replay_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        cmd_replay(str(tmp_path / "nope.json"))
