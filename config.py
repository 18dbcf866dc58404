#!/usr/bin/env python3
"""
🐧 PNGN Sprite Animator - Configuration Module
==============================================
Copyright (c) 2025 PNGN-Tec LLC

Centralized Configuration System
================================
Complete configuration for the sprite animator including:
- Animation pacing (frames per second, single-step mode, quit key)
- Terminal display options (cursor hiding, foreground color)
- GIF export settings (cell size, font, colors, frame count)
- Environment variable overrides
- PNGN palette subset with ANSI helpers

Configuration Flow
==================
Configuration is an explicit value. load_config() builds a fresh
AnimatorConfig with environment overrides applied; the scene loader
mutates its AnimationConfig when it meets FPS / SINGLE-STEP /
CONTINUOUS directives, and the animation loop reads it every tick.
Nothing is stored at module level.

Environment Overrides
=====================
- PNGN_FPS: frames per second in continuous mode
- PNGN_SINGLE_STEP: true/1/yes to wait for a key every tick
- PNGN_QUIT_KEY: key that stops the animation
- PNGN_COLOR: palette color name for the foreground
- PNGN_EXPORT_FRAMES: number of ticks written by GIF export
- PNGN_LOG_LEVEL: logging level name
- PNGN_DEBUG: true/1/yes for debug mode
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

# Configure logging
logger = logging.getLogger('pngn_config')

# Type alias for RGB colors
RGBColor = Tuple[int, int, int]

# ============================================================================
# ANIMATION SETTINGS
# ============================================================================

DEFAULT_FPS = 30
DEFAULT_QUIT_KEY = 'q'
BLANK_CHAR = ' '

# ============================================================================
# EXPORT SETTINGS
# ============================================================================

STANDARD_CHAR_WIDTH = 8
STANDARD_CHAR_HEIGHT = 16
DEFAULT_FONT_SIZE = 14
DEFAULT_EXPORT_FRAMES = 120

# ============================================================================
# PNGN PALETTE (terminal-friendly subset)
# ============================================================================

PNGN_COLORS: Dict[str, RGBColor] = {
    'pngn-purple': (191, 0, 255),
    'neon-violet': (182, 0, 255),
    'kllr-pink': (255, 0, 215),
    'neon-green': (0, 255, 0),
    'electric-yellow': (159, 255, 0),
    'fire-orange': (255, 191, 0),
    'white-flash': (255, 255, 255),
    'ghost-white': (230, 230, 230),
    'digital-cyan': (0, 191, 255),
    'void-black': (15, 15, 35),
}


class RGBColors:
    """RGB helpers for the PNGN palette"""

    UI_BACKGROUND = PNGN_COLORS['void-black']
    UI_FOREGROUND = PNGN_COLORS['ghost-white']

    @staticmethod
    def rgb_to_ansi(rgb: RGBColor) -> str:
        """Convert RGB tuple to ANSI color code"""
        r, g, b = rgb
        return f"\033[38;2;{r};{g};{b}m"

    @staticmethod
    def lookup(name: str) -> RGBColor:
        """Palette color by name (case-insensitive, '_' or '-' separated)"""
        key = name.strip().lower().replace('_', '-').replace(' ', '-')
        if key not in PNGN_COLORS:
            raise ValueError(f"Unknown color '{name}', expected one of: "
                             f"{', '.join(sorted(PNGN_COLORS))}")
        return PNGN_COLORS[key]


# ============================================================================
# ANIMATION CONFIGURATION
# ============================================================================

@dataclass
class AnimationConfig:
    """
    Animation loop pacing.

    Attributes:
        fps: Ticks per second in continuous mode
        single_step: Wait indefinitely for a key every tick
        quit_key: Key that stops the loop
        blank: Character the canvas is cleared to each tick
        max_ticks: Stop after this many ticks (None runs until quit)
    """

    fps: int = DEFAULT_FPS
    single_step: bool = False
    quit_key: str = DEFAULT_QUIT_KEY
    blank: str = BLANK_CHAR
    max_ticks: Optional[int] = None

    @property
    def frame_delay(self) -> Optional[float]:
        """Seconds to wait for a key each tick (None blocks)"""
        if self.single_step:
            return None
        return 1.0 / self.fps

    def validate(self) -> bool:
        """Validate animation configuration"""
        if self.fps <= 0:
            raise ValueError("FPS must be positive")
        if len(self.quit_key) != 1:
            raise ValueError("Quit key must be a single character")
        if len(self.blank) != 1:
            raise ValueError("Blank must be a single character")
        if self.max_ticks is not None and self.max_ticks < 0:
            raise ValueError("Tick limit must be non-negative")
        return True


# ============================================================================
# DISPLAY CONFIGURATION
# ============================================================================

@dataclass
class DisplayConfig:
    """Terminal display configuration"""

    hide_cursor: bool = True
    color: Optional[str] = None

    @property
    def foreground_ansi(self) -> Optional[str]:
        if self.color is None:
            return None
        return RGBColors.rgb_to_ansi(RGBColors.lookup(self.color))

    def validate(self) -> bool:
        """Validate display configuration"""
        if self.color is not None:
            RGBColors.lookup(self.color)
        return True


# ============================================================================
# EXPORT CONFIGURATION
# ============================================================================

@dataclass
class ExportConfig:
    """
    GIF export configuration.

    Attributes:
        char_width, char_height: Pixel size of one character cell
        font_size: Point size for the monospace font
        foreground, background: Cell colors
        frames: Number of ticks rendered into the GIF
        loop: GIF loop count (0 loops forever)
    """

    char_width: int = STANDARD_CHAR_WIDTH
    char_height: int = STANDARD_CHAR_HEIGHT
    font_size: int = DEFAULT_FONT_SIZE
    foreground: RGBColor = RGBColors.UI_FOREGROUND
    background: RGBColor = RGBColors.UI_BACKGROUND
    frames: int = DEFAULT_EXPORT_FRAMES
    loop: int = 0

    def validate(self) -> bool:
        """Validate export configuration"""
        if self.char_width <= 0 or self.char_height <= 0:
            raise ValueError("Character dimensions must be positive")
        if self.font_size <= 0:
            raise ValueError("Font size must be positive")
        if self.frames <= 0:
            raise ValueError("Export frame count must be positive")
        if self.loop < 0:
            raise ValueError("Loop count must be non-negative")
        return True


# ============================================================================
# MAIN CONFIGURATION CLASS
# ============================================================================

@dataclass
class AnimatorConfig:
    """Complete animator configuration"""

    animation: AnimationConfig = field(default_factory=AnimationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    debug_mode: bool = False
    log_level: str = "WARNING"

    def validate(self) -> bool:
        """Validate entire configuration"""
        self.animation.validate()
        self.display.validate()
        self.export.validate()
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level '{self.log_level}'")
        return True


def _truthy(value: str) -> bool:
    return value.strip().lower() in ('true', '1', 'yes')


def apply_environment_overrides(config: AnimatorConfig,
                                environ: Optional[Mapping[str, str]] = None) -> AnimatorConfig:
    """Load configuration overrides from environment variables"""
    env = os.environ if environ is None else environ

    # Animation settings
    if 'PNGN_FPS' in env:
        config.animation.fps = int(env['PNGN_FPS'])
    if 'PNGN_SINGLE_STEP' in env:
        config.animation.single_step = _truthy(env['PNGN_SINGLE_STEP'])
    if 'PNGN_QUIT_KEY' in env:
        config.animation.quit_key = env['PNGN_QUIT_KEY']

    # Display settings
    if 'PNGN_COLOR' in env:
        config.display.color = env['PNGN_COLOR']

    # Export settings
    if 'PNGN_EXPORT_FRAMES' in env:
        config.export.frames = int(env['PNGN_EXPORT_FRAMES'])

    # Logging / debug
    if 'PNGN_LOG_LEVEL' in env:
        config.log_level = env['PNGN_LOG_LEVEL'].upper()
    if 'PNGN_DEBUG' in env:
        config.debug_mode = _truthy(env['PNGN_DEBUG'])
        if config.debug_mode:
            config.log_level = "DEBUG"

    return config


def load_config(environ: Optional[Mapping[str, str]] = None) -> AnimatorConfig:
    """
    Build a validated configuration with environment overrides applied.

    Args:
        environ: Mapping to read overrides from (os.environ if None)

    Returns:
        Fresh AnimatorConfig owned by the caller
    """
    config = apply_environment_overrides(AnimatorConfig(), environ)
    config.validate()
    logger.debug(f"Configuration loaded: fps={config.animation.fps}, "
                 f"single_step={config.animation.single_step}")
    return config
