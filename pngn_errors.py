#!/usr/bin/env python3
"""
🐧 PNGN Sprite Animator - Error Kinds
=====================================
Copyright (c) 2025 PNGN-Tec LLC

Error Propagation
=================
- FileUnavailable: source could not be opened (logged, skipped)
- MissingCanvasHeader: first source lacks CANVAS (fatal)
- MalformedSprite: bad SPRITE header (sprite dropped, load continues)
- IncompleteFrame: frame body shorter than declared (treated as MalformedSprite)
- DegenerateCanvas: zero height or width (nothing drawable)

Only MissingCanvasHeader is escalated to process termination; everything
else is recorded on the scene and reported through logging.
"""


class AnimatorError(Exception):
    """Base class for all animator errors"""


class FileUnavailable(AnimatorError):
    """A scene source could not be opened"""

    def __init__(self, source: str, reason: str = ""):
        self.source = source
        self.reason = reason
        message = f'Could not open file "{source}"'
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MissingCanvasHeader(AnimatorError):
    """The first source does not begin with CANVAS <height> <width>"""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f'First file, "{source}", should begin with canvas information.')


class MalformedSprite(AnimatorError):
    """A SPRITE directive could not be parsed"""


class IncompleteFrame(MalformedSprite):
    """A frame body ended before all of its declared lines were read"""

    def __init__(self, expected: int, read: int):
        self.expected = expected
        self.read = read
        super().__init__(f"Frame ended after {read} of {expected} lines")


class DegenerateCanvas(AnimatorError):
    """The canvas has a zero dimension, so no cell is addressable"""

    def __init__(self, height: int, width: int):
        self.height = height
        self.width = width
        super().__init__(f"Canvas {height}x{width} has no drawable area")
