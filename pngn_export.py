#!/usr/bin/env python3
"""
🐧 PNGN Sprite Animator - GIF Export
====================================
Copyright (c) 2025 PNGN-Tec LLC

Animated GIF Display Device
===========================
Renders every painted canvas to an RGB image and writes the sequence
as an animated GIF, so a scene can be shared without a terminal.

Technical Implementation
========================
- Monospace font located the same way as the terminal renderer:
  local fonts/ directory, then common Linux paths, then Pillow's default
- Per-character glyph bitmaps rendered once with Pillow and cached as
  numpy arrays
- Frame composition by numpy slice assignment into a cell-aligned buffer
- Frame duration derived from the animation FPS, rounded to the 10 ms
  steps GIF delays are stored in, so the playback rate is approximate

The device never produces keys; pair it with a tick limit
(AnimationConfig.max_ticks) so the loop stops.

Example Usage
=============
```python
from pngn_export import GifExportDisplay
from pngn_loop import run_animation

settings.max_ticks = 60
gif = GifExportDisplay(export_config, fps=settings.fps)
run_animation(scene, gif, settings)
gif.save("scene.gif")
```
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from config import DEFAULT_FPS, ExportConfig, RGBColor
from pngn_errors import DegenerateCanvas
from pngn_grid import Grid
from pngn_loop import DisplayDevice

logger = logging.getLogger('pngn_export')

FONT_CANDIDATES = [
    Path(__file__).parent / 'fonts' / 'DejaVuSansMono.ttf',
    Path('/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf'),
    Path('/usr/share/fonts/dejavu/DejaVuSansMono.ttf'),
    Path('/usr/share/fonts/TTF/DejaVuSansMono.ttf'),
    Path('/data/data/com.termux/files/usr/share/fonts/TTF/DejaVuSansMono.ttf'),
]


def load_monospace_font(size: int):
    """First available monospace TrueType font, else Pillow's built-in font"""
    for font_path in FONT_CANDIDATES:
        if font_path.exists():
            try:
                font = ImageFont.truetype(str(font_path), size)
            except OSError as e:
                logger.debug(f"Could not load {font_path}: {e}")
                continue
            logger.info(f"Loaded font from {font_path}")
            return font
    logger.warning("No monospace font found - using Pillow default")
    return ImageFont.load_default()


class GlyphCache:
    """Cell-sized RGB bitmaps of single characters, rendered on first use"""

    def __init__(self, font: Any, char_width: int, char_height: int,
                 foreground: RGBColor, background: RGBColor):
        self.font = font
        self.char_width = char_width
        self.char_height = char_height
        self.foreground = foreground
        self.background = background
        self._bitmaps: Dict[str, np.ndarray] = {}

    def bitmap(self, char: str) -> np.ndarray:
        cached = self._bitmaps.get(char)
        if cached is not None:
            return cached
        img = Image.new('RGB', (self.char_width, self.char_height), self.background)
        ImageDraw.Draw(img).text((0, 0), char, font=self.font, fill=self.foreground)
        bitmap = np.asarray(img, dtype=np.uint8)
        self._bitmaps[char] = bitmap
        return bitmap

    def __len__(self) -> int:
        return len(self._bitmaps)


class GifExportDisplay(DisplayDevice):
    """
    Collects painted canvases as images for an animated GIF.

    Attributes:
        frames: One PIL image per paint() call
        render_times: Milliseconds spent on each paint()
    """

    def __init__(self, config: Optional[ExportConfig] = None, fps: int = DEFAULT_FPS,
                 font: Optional[Any] = None):
        self.config = config or ExportConfig()
        self.fps = fps
        font = font if font is not None else load_monospace_font(self.config.font_size)
        self.glyphs = GlyphCache(font, self.config.char_width, self.config.char_height,
                                 self.config.foreground, self.config.background)
        self.frames: List[Image.Image] = []
        self.render_times: List[float] = []

    @property
    def frame_duration_ms(self) -> int:
        """Frame delay in milliseconds, a multiple of 10 (GIF delay units)"""
        return max(10, round(100 / self.fps) * 10)

    def render_canvas(self, canvas: Grid) -> Image.Image:
        """Render canvas to an RGB image, one character cell per grid cell"""
        if canvas.is_degenerate:
            raise DegenerateCanvas(canvas.height, canvas.width)
        cw, ch = self.config.char_width, self.config.char_height
        buffer = np.full((canvas.height * ch, canvas.width * cw, 3),
                         self.config.background, dtype=np.uint8)
        for row, cells in enumerate(canvas.cells):
            for col, cell in enumerate(cells):
                char = str(cell)
                if not char.strip():
                    continue
                buffer[row * ch:(row + 1) * ch, col * cw:(col + 1) * cw] = self.glyphs.bitmap(char)
        return Image.fromarray(buffer)

    def paint(self, canvas: Grid):
        start_time = time.time()
        self.frames.append(self.render_canvas(canvas))
        self.render_times.append((time.time() - start_time) * 1000)

    def read_key(self, timeout: Optional[float]) -> Optional[str]:
        return None

    def save(self, output: Union[str, Path]) -> Path:
        """
        Write the collected frames as an animated GIF.

        Raises:
            ValueError: if nothing has been painted yet
        """
        if not self.frames:
            raise ValueError("No frames to export")
        output = Path(output)
        self.frames[0].save(
            output,
            format='GIF',
            save_all=True,
            append_images=self.frames[1:],
            duration=self.frame_duration_ms,
            loop=self.config.loop,
            optimize=False
        )
        logger.info(f"Saved {len(self.frames)} frames to {output}")
        return output

    def get_stats(self) -> Dict[str, Any]:
        """Render statistics"""
        if not self.render_times:
            return {'status': 'No renders yet'}
        return {
            'frames': len(self.frames),
            'avg_render_time': sum(self.render_times) / len(self.render_times),
            'max_render_time': max(self.render_times),
            'glyphs_cached': len(self.glyphs),
            'frame_duration_ms': self.frame_duration_ms,
        }
