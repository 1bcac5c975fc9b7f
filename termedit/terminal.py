"""Terminal session using Blessed for display and Curtsies for input."""

import logging
import sys
import termios
from typing import Optional

import blessed

from .constants import EditorConstants
from .view import FrameMarkers

logger = logging.getLogger(__name__)


class TerminalError(Exception):
    """Raised when the terminal cannot be put into raw mode."""


class TerminalInterface:
    """Raw-mode terminal session.

    Use as a context manager: the alternate screen and raw input mode are
    entered on ``__enter__`` and restored on every way out of the block.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._input = None
        self._saved_tty = None
        self._out = sys.stdout

    def __enter__(self) -> "TerminalInterface":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def setup(self) -> None:
        """Enter raw mode and the fullscreen buffer."""
        if not self.term.is_a_tty or not sys.stdin.isatty():
            raise TerminalError("stdin is not a terminal")
        from curtsies import Input

        try:
            self._input = Input(keynames='curtsies')
            self._input.__enter__()
        except Exception as e:
            self._input = None
            raise TerminalError(f"could not enter raw mode: {e}") from e
        try:
            self._disable_flow_control()
            self._out.write(self.term.enter_fullscreen + self.term.clear)
            self._out.flush()
            self.is_fullscreen = True
        except BaseException:
            self.cleanup()
            raise
        logger.debug("terminal session started (%dx%d)", self.term.width, self.term.height)

    def cleanup(self) -> None:
        """Clear the screen, leave fullscreen, and restore the tty mode."""
        if self.is_fullscreen:
            self._out.write(self.term.clear + self.term.home
                            + self.term.exit_fullscreen + self.term.normal_cursor)
            self._out.flush()
            self.is_fullscreen = False
        if self._saved_tty is not None:
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, self._saved_tty)
            except (termios.error, OSError) as e:
                logger.warning("could not restore tty flags: %s", e)
            self._saved_tty = None
        if self._input is not None:
            try:
                self._input.__exit__(None, None, None)
            finally:
                self._input = None
        logger.debug("terminal session restored")

    def _disable_flow_control(self) -> None:
        """Let Ctrl-S, Ctrl-Q and Ctrl-C reach the editor as keys."""
        try:
            self._saved_tty = termios.tcgetattr(sys.stdin)
            new_settings = list(self._saved_tty)
            # Input flags: no XON/XOFF, no CR to NL translation
            new_settings[0] &= ~(termios.IXON | termios.IXOFF | termios.ICRNL)
            # Local flags: no signal chars, no extended input processing
            new_settings[3] &= ~(termios.ISIG | termios.IEXTEN)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
        except (termios.error, OSError) as e:
            self._saved_tty = None
            raise TerminalError(f"could not configure tty: {e}") from e

    def frame_markers(self) -> FrameMarkers:
        return FrameMarkers.from_terminal(self.term)

    def write_frame(self, frame: bytes) -> None:
        """Write a whole frame in one call."""
        out = getattr(self._out, 'buffer', None)
        if out is None:
            self._out.write(frame.decode('utf-8', 'replace'))
        else:
            out.write(frame)
            out.flush()
        self._out.flush()

    def get_key(self, timeout: Optional[float] = None):
        """Get a single key token, or None if timeout expires first."""
        if self._input is None:
            return None
        evt = self._input.send(timeout)
        if evt is None:
            return None
        return str(evt)

    def text_area_size(self) -> tuple[int, int]:
        """Rows and columns left for text once the status and message bars are placed."""
        rows = max(0, self.term.height - EditorConstants.RESERVED_ROWS)
        return rows, self.term.width
