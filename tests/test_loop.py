from __future__ import annotations

import io

import pytest

from config import AnimationConfig
from conftest import ScriptedDisplay
from pngn_loop import AnimationLoop, LoopState, run_animation
from pngn_scene import load_scene


def scene_from(text: str, settings: AnimationConfig | None = None):
    return load_scene([io.StringIO(text)], settings)


def test_falling_sprite_wraps_to_top() -> None:
    scene = scene_from("CANVAS 3 3\nSPRITE 1 1 0 0 1 0 1 1\nX\n")
    display = ScriptedDisplay([None, None, None, 'q'])
    ticks = run_animation(scene, display)

    assert ticks == 4
    assert display.paints == [
        ["X  ", "   ", "   "],
        ["   ", "X  ", "   "],
        ["   ", "   ", "X  "],
        ["X  ", "   ", "   "],
    ]


def test_later_sprite_wins_at_shared_cells() -> None:
    scene = scene_from(
        "CANVAS 2 3\n"
        "SPRITE 1 2 0 0 0 0 1 1\n"
        "AA\n"
        "SPRITE 1 2 0 1 0 0 1 1\n"
        "BB\n"
    )
    display = ScriptedDisplay()
    run_animation(scene, display)
    assert display.paints[0] == ["ABB", "   "]


def test_canvas_is_cleared_every_tick() -> None:
    scene = scene_from("CANVAS 1 4\nSPRITE 1 1 0 0 0 1 1 1\n*\n")
    display = ScriptedDisplay([None, None])
    run_animation(scene, display)
    assert display.paints == [["*   "], [" *  "], ["  * "]]


def test_quit_key_stops_loop_after_completed_tick() -> None:
    scene = scene_from("CANVAS 2 2\nSPRITE 1 1 0 0 0 1 1 1\nX\n")
    display = ScriptedDisplay(['a', None, 'q', None])
    loop = AnimationLoop(scene, display)
    loop.run()
    assert loop.state is LoopState.STOPPED
    assert loop.ticks == 3
    assert len(display.paints) == 3
    assert scene.sprites[0].col_pos == 1


def test_custom_quit_key() -> None:
    settings = AnimationConfig(quit_key='x')
    scene = scene_from("CANVAS 1 1\n")
    display = ScriptedDisplay(['q', 'x'])
    assert run_animation(scene, display, settings) == 2


def test_continuous_mode_waits_one_frame_period() -> None:
    settings = AnimationConfig()
    scene = scene_from("CANVAS 1 1\nFPS 20\n", settings)
    display = ScriptedDisplay()
    run_animation(scene, display, settings)
    assert display.timeouts == [pytest.approx(0.05)]


def test_single_step_mode_blocks_for_key() -> None:
    settings = AnimationConfig()
    scene = scene_from("CANVAS 1 1\nSINGLE-STEP\n", settings)
    display = ScriptedDisplay([None, 'q'])
    run_animation(scene, display, settings)
    assert display.timeouts == [None, None]


def test_tick_limit_stops_loop() -> None:
    settings = AnimationConfig(max_ticks=5)
    scene = scene_from("CANVAS 1 1\n")
    display = ScriptedDisplay([None] * 10)
    assert run_animation(scene, display, settings) == 5


def test_zero_tick_limit_runs_nothing() -> None:
    settings = AnimationConfig(max_ticks=0)
    display = ScriptedDisplay()
    assert run_animation(scene_from("CANVAS 1 1\n"), display, settings) == 0
    assert display.paints == []


def test_frameless_sprite_is_skipped() -> None:
    scene = scene_from("CANVAS 2 2\nSPRITE 1 1 0 0 1 1 0 1\n")
    display = ScriptedDisplay([None])
    run_animation(scene, display)
    assert display.paints == [["  ", "  "], ["  ", "  "]]
    assert (scene.sprites[0].row_pos, scene.sprites[0].col_pos) == (0, 0)


def test_degenerate_canvas_paints_without_crashing() -> None:
    scene = scene_from("CANVAS 0 0\nSPRITE 1 1 0 0 1 1 1 1\nX\n")
    display = ScriptedDisplay([None])
    assert run_animation(scene, display) == 2
    assert display.paints == [[], []]


def test_frame_animation_over_ticks() -> None:
    scene = scene_from("CANVAS 1 1\nSPRITE 1 1 0 0 0 0 3 3\na\nb\nc\n")
    display = ScriptedDisplay([None] * 3)
    run_animation(scene, display)
    assert [paint[0] for paint in display.paints] == ['a', 'b', 'c', 'a']
