#!/usr/bin/env python3
"""
🐧 PNGN Sprite Animator - Command Line
======================================
Copyright (c) 2025 PNGN-Tec LLC

Usage
=====
    pngn-animate SCENE [SCENE ...] [--fps N] [--single-step]
                 [--quit-key K] [--color NAME]
                 [--gif OUT.gif [--frames N]] [--log-level LEVEL]

The first scene file must begin with ``CANVAS <height> <width>``.
Press the quit key (default ``q``) to stop. Flags override settings
directives found in the files.

Exit Codes
==========
- 0: stopped by quit key, or GIF written
- 1: missing canvas header, bad configuration, nothing to export, or
  the GIF could not be written
- 130: interrupted
"""

import argparse
import logging
import sys
from typing import List, Optional

from config import PNGN_COLORS, AnimatorConfig, RGBColors, load_config
from pngn_errors import MissingCanvasHeader
from pngn_export import GifExportDisplay
from pngn_loop import run_animation
from pngn_scene import Scene, load_scene

logger = logging.getLogger('pngn_animate')

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pngn-animate',
        description='PNGN ASCII Sprite Animator'
    )
    parser.add_argument('files', nargs='+', metavar='SCENE',
                        help='scene files; the first must begin with CANVAS')
    parser.add_argument('--fps', type=int, help='ticks per second in continuous mode')
    parser.add_argument('--single-step', action='store_true', default=None,
                        help='wait for a key every tick')
    parser.add_argument('--quit-key', help='key that stops the animation (default: q)')
    parser.add_argument('--color', choices=sorted(PNGN_COLORS),
                        help='foreground color from the PNGN palette')
    parser.add_argument('--gif', metavar='OUT', help='write an animated GIF instead of animating')
    parser.add_argument('--frames', type=int, help='ticks to render with --gif')
    parser.add_argument('--log-level', type=str.upper, choices=LOG_LEVELS,
                        help='logging level (default: WARNING)')
    return parser


def configure_logging(level: str):
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(levelname)s %(name)s: %(message)s'
    )


def apply_arguments(config: AnimatorConfig, args: argparse.Namespace):
    """Command-line flags take precedence over file directives"""
    if args.fps is not None:
        config.animation.fps = args.fps
    if args.single_step:
        config.animation.single_step = True
    if args.quit_key is not None:
        config.animation.quit_key = args.quit_key
    if args.color is not None:
        config.display.color = args.color
    if args.frames is not None:
        config.export.frames = args.frames


def export_gif(scene: Scene, config: AnimatorConfig, output: str) -> int:
    if scene.is_degenerate:
        logger.error(f"Cannot export a {scene.canvas.height}x{scene.canvas.width} canvas")
        return 1
    if config.display.color is not None:
        config.export.foreground = RGBColors.lookup(config.display.color)
    config.animation.single_step = False
    config.animation.max_ticks = config.export.frames

    display = GifExportDisplay(config.export, fps=config.animation.fps)
    run_animation(scene, display, config.animation)
    try:
        display.save(output)
    except OSError as e:
        logger.error(f"Could not write {output}: {e}")
        return 1
    print(f"✓ Saved {output} ({len(display.frames)} frames)")
    return 0


def animate_terminal(scene: Scene, config: AnimatorConfig) -> int:
    # Imported here so GIF export works where termios is unavailable
    from pngn_terminal import TerminalDisplay

    with TerminalDisplay(config.display, quit_key=config.animation.quit_key) as display:
        ticks = run_animation(scene, display, config.animation)
    logger.info(f"Animation stopped after {ticks} ticks")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config()
    except ValueError as e:
        configure_logging('WARNING')
        logger.error(f"Invalid configuration: {e}")
        return 1
    configure_logging(args.log_level or config.log_level)

    try:
        scene = load_scene(args.files, config.animation)
    except MissingCanvasHeader as e:
        logger.error(str(e))
        return 1

    apply_arguments(config, args)
    try:
        config.validate()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        if args.gif:
            return export_gif(scene, config, args.gif)
        return animate_terminal(scene, config)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
