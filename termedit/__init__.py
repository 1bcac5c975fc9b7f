"""termedit - a small terminal text editor."""

from .model import Line, LineStore, CursorPosition, build_render
from .view import Viewport, ScreenCompositor, FrameMarkers
from .version import __version__

__all__ = [
    'Line',
    'LineStore',
    'CursorPosition',
    'build_render',
    'Viewport',
    'ScreenCompositor',
    'FrameMarkers',
    '__version__',
]
