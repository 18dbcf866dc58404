#!/usr/bin/env python3
"""
🐧 PNGN Sprite Animator - Scene Loader
======================================
Copyright (c) 2025 PNGN-Tec LLC

Scene Description Format
========================
Whitespace-delimited directives with case-insensitive keywords:

    CANVAS <height> <width>
    SPRITE <height> <width> <row> <col> <v_speed> <h_speed> <frames> <frames_per_cycle>
    <frames, each exactly <height> lines>
    FPS <frames_per_second>
    SINGLE-STEP
    CONTINUOUS

Loading Rules
=============
- The first source must begin with CANVAS, otherwise loading fails with
  MissingCanvasHeader. Later sources may set the canvas again; the last
  CANVAS wins.
- Sprites accumulate across sources in file order, which is also the
  compositing order.
- A bad SPRITE is reported and dropped; scanning resumes at the next
  token.
- A source that cannot be opened is reported and skipped.
- FPS / SINGLE-STEP / CONTINUOUS update the AnimationConfig handed to
  the loader.
- Anything else is skipped.

Example Usage
=============
```python
from config import AnimationConfig
from pngn_scene import load_scene

settings = AnimationConfig()
scene = load_scene(["canvas.txt", "fish.txt"], settings)
print(scene.canvas.height, len(scene.sprites))
```
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, TextIO, Tuple, Union

from wcwidth import wcwidth

from config import AnimationConfig
from pngn_errors import (
    AnimatorError,
    DegenerateCanvas,
    FileUnavailable,
    MalformedSprite,
    MissingCanvasHeader,
)
from pngn_grid import EMPTY, Grid
from pngn_sprite import Sprite

logger = logging.getLogger('pngn_scene')

# A source is a path or an already-open text stream
Source = Union[str, Path, TextIO]

# ============================================================================
# TOKENIZATION
# ============================================================================


class TokenStream:
    """
    Reads whitespace-delimited tokens and raw lines from the same text.

    Tokens may span lines. Iterating the stream discards whatever is left
    of the line holding the last token and then yields the following
    lines verbatim (without terminators); that is how frame bodies are
    read right after a SPRITE header.
    """

    def __init__(self, text: str, name: str = "<stream>"):
        self.name = name
        self._lines = [line.rstrip('\r') for line in text.split('\n')]
        if self._lines and self._lines[-1] == '':
            self._lines.pop()
        self._line = 0
        self._col = 0

    @classmethod
    def from_stream(cls, stream: TextIO, name: Optional[str] = None) -> 'TokenStream':
        return cls(stream.read(), name or getattr(stream, 'name', '<stream>'))

    @property
    def line_number(self) -> int:
        """1-based number of the line the stream is positioned on"""
        return self._line + 1

    def next_token(self) -> Optional[str]:
        """Next whitespace-delimited token, or None at end of input"""
        while self._line < len(self._lines):
            text = self._lines[self._line]
            start = self._col
            while start < len(text) and text[start].isspace():
                start += 1
            if start == len(text):
                self._line += 1
                self._col = 0
                continue
            end = start
            while end < len(text) and not text[end].isspace():
                end += 1
            self._col = end
            return text[start:end]
        return None

    def tokens(self) -> Iterator[str]:
        """Generator over the remaining tokens, sharing this stream's position"""
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token

    def skip_rest_of_line(self):
        if self._col > 0:
            self._line += 1
            self._col = 0

    def __iter__(self) -> Iterator[str]:
        self.skip_rest_of_line()
        return self._remaining_lines()

    def _remaining_lines(self) -> Iterator[str]:
        while self._line < len(self._lines):
            line = self._lines[self._line]
            self._line += 1
            self._col = 0
            yield line


# ============================================================================
# SCENE
# ============================================================================


@dataclass
class Scene:
    """
    Canvas plus sprites in compositing order.

    Attributes:
        canvas: Shared character grid every sprite is drawn onto
        sprites: Sprites in file order; later ones draw over earlier ones
        problems: Recoverable errors met while loading
    """

    canvas: Grid = field(default_factory=lambda: Grid(0, 0, EMPTY))
    sprites: List[Sprite] = field(default_factory=list)
    problems: List[AnimatorError] = field(default_factory=list)

    @property
    def is_degenerate(self) -> bool:
        return self.canvas.is_degenerate


# ============================================================================
# LOADER
# ============================================================================


class SceneLoader:
    """
    Parses scene sources into a Scene.

    Settings directives update the AnimationConfig passed in, so the same
    object can then be handed to the animation loop.
    """

    def __init__(self, settings: Optional[AnimationConfig] = None):
        self.settings = settings if settings is not None else AnimationConfig()
        self.scene = Scene()

    def load(self, sources: Sequence[Source]) -> Scene:
        """
        Load every source in order.

        Raises:
            MissingCanvasHeader: the first source does not start with a
                valid CANVAS directive
        """
        for index, source in enumerate(sources):
            try:
                stream = self._open(source)
            except FileUnavailable as e:
                self._report(e)
                continue
            if index == 0:
                self._read_canvas_header(stream)
            self._read_directives(stream)

        self._check_scene()
        logger.info(f"Loaded canvas {self.scene.canvas.height}x{self.scene.canvas.width} "
                    f"with {len(self.scene.sprites)} sprites "
                    f"({len(self.scene.problems)} problems)")
        return self.scene

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def _open(self, source: Source) -> TokenStream:
        if hasattr(source, 'read'):
            return TokenStream.from_stream(source)
        path = Path(source)
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise FileUnavailable(str(source), getattr(e, 'strerror', None) or str(e)) from e
        return TokenStream(text, str(source))

    def _report(self, error: AnimatorError):
        logger.warning(str(error))
        self.scene.problems.append(error)

    # ------------------------------------------------------------------
    # Directives
    # ------------------------------------------------------------------

    def _read_canvas_header(self, stream: TokenStream):
        keyword = stream.next_token()
        if keyword is None or keyword.upper() != 'CANVAS':
            raise MissingCanvasHeader(stream.name)
        dimensions = self._canvas_dimensions(stream)
        if dimensions is None:
            raise MissingCanvasHeader(stream.name)
        self._set_canvas(*dimensions)

    def _read_directives(self, stream: TokenStream):
        for token in stream.tokens():
            keyword = token.upper()
            if keyword == 'SPRITE':
                self._read_sprite(stream)
            elif keyword == 'CANVAS':
                dimensions = self._canvas_dimensions(stream)
                if dimensions is None:
                    logger.warning(f"{stream.name}:{stream.line_number}: "
                                   f"ignoring CANVAS without valid dimensions")
                else:
                    self._set_canvas(*dimensions)
            elif keyword == 'FPS':
                self._read_fps(stream)
            elif keyword == 'SINGLE-STEP':
                self.settings.single_step = True
            elif keyword == 'CONTINUOUS':
                self.settings.single_step = False
            else:
                logger.debug(f"{stream.name}:{stream.line_number}: skipping '{token}'")

    def _canvas_dimensions(self, stream: TokenStream) -> Optional[Tuple[int, int]]:
        try:
            height = int(stream.next_token() or '')
            width = int(stream.next_token() or '')
        except ValueError:
            return None
        if height < 0 or width < 0:
            return None
        return height, width

    def _set_canvas(self, height: int, width: int):
        self.scene.canvas.resize(height, width)
        logger.debug(f"Canvas set to {height}x{width}")

    def _read_sprite(self, stream: TokenStream):
        line = stream.line_number
        try:
            sprite = Sprite().parse(stream.tokens(), stream)
        except MalformedSprite as e:
            self._report(MalformedSprite(f"{stream.name}:{line}: sprite dropped: {e}"))
            return
        self.scene.sprites.append(sprite)
        self._check_cell_widths(sprite, stream.name, line)

    def _read_fps(self, stream: TokenStream):
        token = stream.next_token()
        try:
            fps = int(token or '')
        except ValueError:
            fps = 0
        if fps <= 0:
            logger.warning(f"{stream.name}:{stream.line_number}: ignoring invalid FPS {token!r}")
            return
        self.settings.fps = fps

    # ------------------------------------------------------------------
    # Post-load checks
    # ------------------------------------------------------------------

    def _check_cell_widths(self, sprite: Sprite, name: str, line: int):
        """Warn about cells a terminal would not draw in exactly one column"""
        for frame in sprite.frames:
            for cell in frame.cells.flat:
                if wcwidth(cell) != 1:
                    logger.warning(f"{name}:{line}: sprite uses character {cell!r} "
                                   f"that is not one column wide; display may misalign")
                    return

    def _check_scene(self):
        canvas = self.scene.canvas
        if canvas.is_degenerate:
            self._report(DegenerateCanvas(canvas.height, canvas.width))


def load_scene(sources: Sequence[Source], settings: Optional[AnimationConfig] = None) -> Scene:
    """Load sources into a Scene, updating settings from settings directives"""
    return SceneLoader(settings).load(sources)
