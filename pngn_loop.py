#!/usr/bin/env python3
"""
🐧 PNGN Sprite Animator - Animation Loop
========================================
Copyright (c) 2025 PNGN-Tec LLC

Tick Cycle
==========
While RUNNING, every tick:
1. Clear the canvas to blank
2. For each sprite in list order: draw, then advance
3. Paint the canvas to the display device
4. Wait for a key: blocking in single-step mode, at most 1/FPS seconds
   in continuous mode

The loop moves to STOPPED when the key read equals the quit key, or
when the configured tick limit is reached. A tick always runs to
completion before the key is checked.

Display Devices
===============
A DisplayDevice paints a whole canvas at once and reads single keys.
pngn_terminal.TerminalDisplay drives a real terminal;
pngn_export.GifExportDisplay records frames for an animated GIF.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from config import AnimationConfig
from pngn_grid import Grid
from pngn_scene import Scene

logger = logging.getLogger('pngn_loop')


class DisplayDevice(ABC):
    """Full-buffer paint plus single-key input"""

    @abstractmethod
    def paint(self, canvas: Grid) -> None:
        raise NotImplementedError

    @abstractmethod
    def read_key(self, timeout: Optional[float]) -> Optional[str]:
        """
        Wait for one key.

        Args:
            timeout: Seconds to wait, or None to block until a key arrives

        Returns:
            The key as a one-character string, or None on timeout
        """
        raise NotImplementedError


class LoopState(Enum):
    """Animation loop states"""
    RUNNING = "running"
    STOPPED = "stopped"


class AnimationLoop:
    """
    Drives a scene on a display device until the quit key is pressed.

    Attributes:
        scene: Canvas and sprites, mutated in place every tick
        device: Where the canvas is painted and keys are read
        settings: Pacing, read every tick so directive changes apply
        ticks: Number of completed ticks
        state: RUNNING or STOPPED
    """

    def __init__(self, scene: Scene, device: DisplayDevice,
                 settings: Optional[AnimationConfig] = None):
        self.scene = scene
        self.device = device
        self.settings = settings if settings is not None else AnimationConfig()
        self.ticks = 0
        self.state = LoopState.RUNNING
        self._warned_degenerate = False

    def composite(self):
        """Clear the canvas, then draw and advance every sprite in order"""
        canvas = self.scene.canvas
        if canvas.is_degenerate:
            if not self._warned_degenerate:
                logger.warning(f"Canvas is {canvas.height}x{canvas.width}; nothing to draw")
                self._warned_degenerate = True
            return

        canvas.fill(self.settings.blank)
        for sprite in self.scene.sprites:
            if not sprite.frames:
                continue
            sprite.draw(canvas)
            sprite.advance(canvas.height, canvas.width)

    def tick(self) -> Optional[str]:
        """
        Run one complete tick.

        Returns:
            The key read at the end of the tick, or None
        """
        self.composite()
        self.device.paint(self.scene.canvas)
        key = self.device.read_key(self.settings.frame_delay)
        self.ticks += 1

        if key is not None and key == self.settings.quit_key:
            logger.info(f"Quit key pressed after {self.ticks} ticks")
            self.state = LoopState.STOPPED
        elif self.settings.max_ticks is not None and self.ticks >= self.settings.max_ticks:
            logger.info(f"Tick limit {self.settings.max_ticks} reached")
            self.state = LoopState.STOPPED
        return key

    def run(self) -> int:
        """
        Tick until STOPPED.

        Returns:
            Number of ticks run
        """
        if self.settings.max_ticks == 0:
            self.state = LoopState.STOPPED
        while self.state is LoopState.RUNNING:
            self.tick()
        return self.ticks


def run_animation(scene: Scene, device: DisplayDevice,
                  settings: Optional[AnimationConfig] = None) -> int:
    """Run scene on device until quit; returns the number of ticks"""
    return AnimationLoop(scene, device, settings).run()
