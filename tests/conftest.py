from __future__ import annotations

from typing import List, Optional, Sequence

import pytest

from pngn_grid import Grid
from pngn_loop import DisplayDevice


class ScriptedDisplay(DisplayDevice):
    """Records every painted canvas and replays a fixed key sequence"""

    def __init__(self, keys: Sequence[Optional[str]] = ()):
        self.keys = list(keys)
        self.paints: List[List[str]] = []
        self.timeouts: List[Optional[float]] = []

    def paint(self, canvas: Grid) -> None:
        self.paints.append(canvas.to_lines())

    def read_key(self, timeout: Optional[float]) -> Optional[str]:
        self.timeouts.append(timeout)
        if self.keys:
            return self.keys.pop(0)
        return 'q'


@pytest.fixture()
def display() -> ScriptedDisplay:
    return ScriptedDisplay()


@pytest.fixture()
def write_scene(tmp_path):
    def _write(name: str, text: str):
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return path

    return _write
