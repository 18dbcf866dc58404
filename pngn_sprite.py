#!/usr/bin/env python3
"""
🐧 PNGN Sprite Animator - Sprites
=================================
Copyright (c) 2025 PNGN-Tec LLC

Moving, Animated Figures
========================
A sprite is a stack of equally sized character frames with a fractional
position, a fractional velocity and a fractional frame-rate accumulator.

Timestep Model
==============
Each tick the sprite moves by (v_speed, h_speed) characters and its
frame pointer advances by frame_rate frames. Both wrap:

    wrap(x, lo, hi) = lo + ((x - lo) mod (hi - lo))    -> always in [lo, hi)

Positions wrap at the canvas edges and the frame pointer wraps at the
frame count. The pointer stays real-valued so that, for example, a
4-frame sprite cycling every 8 ticks shows each frame for two ticks.
Only the integer part is used when drawing.

Wraparound is the only edge policy; sprites never bounce.

Definition Format
=================
    SPRITE <height> <width> <row> <col> <v_speed> <h_speed> <frames> <frames_per_cycle>
    <frame 0: exactly <height> lines>
    <frame 1: ...>
"""

import logging
import math
from typing import Iterable, Iterator, List, Optional

from pngn_errors import MalformedSprite
from pngn_grid import EMPTY, Grid

logger = logging.getLogger('pngn_sprite')


def wrap(number: float, low: float, high: float) -> float:
    """
    Wrap number into the half-open interval [low, high).

    Args:
        number: Value to wrap, may be negative or far outside the interval
        low: Inclusive lower bound
        high: Exclusive upper bound, must exceed low

    Returns:
        Equivalent value modulo (high - low) inside [low, high)

    Examples:
        >>> wrap(5.5, 0, 5)
        0.5
        >>> wrap(-1, 0, 5)
        4
    """
    span = high - low
    if span <= 0:
        raise ValueError(f"Cannot wrap into empty interval [{low}, {high})")
    result = low + (number - low) % span
    # (tiny negative) % span rounds up to span
    if result >= high:
        result = low
    return result


def _count(token: Optional[str], name: str) -> int:
    if token is None:
        raise MalformedSprite(f"Missing {name}")
    try:
        value = int(token)
    except ValueError:
        raise MalformedSprite(f"Invalid {name}: {token!r}") from None
    if value < 0:
        raise MalformedSprite(f"Negative {name}: {value}")
    return value


def _real(token: Optional[str], name: str) -> float:
    if token is None:
        raise MalformedSprite(f"Missing {name}")
    try:
        value = float(token)
    except ValueError:
        raise MalformedSprite(f"Invalid {name}: {token!r}") from None
    if not math.isfinite(value):
        raise MalformedSprite(f"Non-finite {name}: {token!r}")
    return value


class Sprite:
    """
    Figure with a position, a velocity and an animation cycle.

    Attributes:
        row_pos, col_pos: Fractional top-left position on the canvas
        v_speed, h_speed: Characters moved per tick (rows, columns)
        frame_rate: Frames advanced per tick
        current_frame: Real-valued frame pointer, truncated when drawing
        frames: Animation cycle, every frame sized height x width
    """

    def __init__(self):
        self._height = 0
        self._width = 0
        self.row_pos = 0.0
        self.col_pos = 0.0
        self.v_speed = 0.0
        self.h_speed = 0.0
        self.frame_rate = 0.0
        self.current_frame = 0.0
        self.frames: List[Grid] = []

    # ------------------------------------------------------------------
    # Size (mirrored onto every frame)
    # ------------------------------------------------------------------

    @property
    def height(self) -> int:
        return self._height

    @height.setter
    def height(self, value: int):
        if value != self._height:
            for frame in self.frames:
                frame.set_height(value)
            self._height = value

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, value: int):
        if value != self._width:
            for frame in self.frames:
                frame.set_width(value)
            self._width = value

    # ------------------------------------------------------------------
    # Definition parsing
    # ------------------------------------------------------------------

    def parse(self, tokens: Iterator[str], body_source: Iterable[str]) -> 'Sprite':
        """
        Read a sprite definition and, only if it is complete, commit it.

        Args:
            tokens: Header tokens following the SPRITE keyword
            body_source: Line source positioned on the header line; iterating
                it skips the rest of that line and yields the frame lines

        Returns:
            self, for chaining

        Raises:
            MalformedSprite: invalid or missing header values
            IncompleteFrame: the body ended before every frame was read
        """
        height = _count(next(tokens, None), "height")
        width = _count(next(tokens, None), "width")
        row = _real(next(tokens, None), "row")
        col = _real(next(tokens, None), "column")
        if row < 0 or col < 0:
            raise MalformedSprite(f"Negative position ({row}, {col})")

        v_speed = _real(next(tokens, None), "vertical speed")
        h_speed = _real(next(tokens, None), "horizontal speed")
        frame_count = _count(next(tokens, None), "frame count")
        frames_per_cycle = _real(next(tokens, None), "frames per cycle")

        lines = iter(body_source)
        staged: List[Grid] = []
        for _ in range(frame_count):
            frame = Grid(height, width, EMPTY)
            frame.parse_rows(lines, height, width)
            staged.append(frame)

        self._height = height
        self._width = width
        self.row_pos = row
        self.col_pos = col
        self.v_speed = v_speed
        self.h_speed = h_speed
        self.frame_rate = 0.0 if frames_per_cycle == 0 else frame_count / frames_per_cycle
        self.current_frame = 0.0
        self.frames = staged

        logger.debug(f"Parsed sprite {height}x{width} at ({row}, {col}) "
                     f"with {frame_count} frames, rate {self.frame_rate:.3f}")
        return self

    def add_frame(self, frame: Grid):
        """Append a frame to the end of the cycle, sized to match the sprite"""
        if frame.height != self._height or frame.width != self._width:
            frame = frame.copy()
            frame.resize(self._height, self._width)
        self.frames.append(frame)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def advance(self, canvas_height: int, canvas_width: int):
        """
        Move the sprite one tick forward in time.

        Position wraps at the canvas edges; the frame pointer wraps at the
        number of frames.

        Raises:
            ValueError: if the sprite has no frames or the canvas has a
                zero dimension
        """
        if not self.frames:
            raise ValueError("Cannot advance a sprite with no frames")
        self.row_pos = wrap(self.row_pos + self.v_speed, 0, canvas_height)
        self.col_pos = wrap(self.col_pos + self.h_speed, 0, canvas_width)
        self.current_frame = wrap(self.current_frame + self.frame_rate, 0, len(self.frames))

    def current_image(self) -> Optional[Grid]:
        """Frame that draw() would composite, or None without frames"""
        if not self.frames:
            return None
        return self.frames[math.floor(self.current_frame) % len(self.frames)]

    def draw(self, target: Grid):
        """
        Composite the current frame onto target with its top-left corner at
        (floor(row_pos), floor(col_pos)).

        Cells falling off an edge wrap to the opposite side through the
        target's own addressing.
        """
        image = self.current_image()
        if image is None or target.is_degenerate:
            return
        top = math.floor(self.row_pos)
        left = math.floor(self.col_pos)
        for row in range(self._height):
            for col in range(self._width):
                target.set(top + row, left + col, image.get(row, col))

    # ------------------------------------------------------------------
    # Debugging
    # ------------------------------------------------------------------

    def describe(self) -> str:
        """Multi-line dump of the sprite state and every frame"""
        lines = [
            f"Size: {self._height} x {self._width}",
            f"Position: ({self.row_pos}, {self.col_pos})",
            f"Velocity: ({self.v_speed}, {self.h_speed})",
            f"Frame rate: {self.frame_rate},   current frame: {self.current_frame}",
        ]
        for index, frame in enumerate(self.frames):
            lines.append(f"============= FRAME {index} ===============")
            lines.extend(frame.to_lines())
        lines.append("======================================")
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return (f"Sprite({self._height}x{self._width} at "
                f"({self.row_pos:.2f}, {self.col_pos:.2f}), {len(self.frames)} frames)")
