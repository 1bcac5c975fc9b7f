from dataclasses import dataclass
from typing import Callable, Optional
import time

from .model import CursorPosition, LineStore, raw_to_render_col
from .constants import EditorConstants
from .version import __version__


def _ansi_move(row: int, col: int) -> bytes:
    return b"\x1b[%d;%dH" % (row, col)


@dataclass
class FrameMarkers:
    """Terminal control sequences used while composing a frame.

    ``move`` takes 1-indexed (row, column) terminal coordinates.
    """
    hide_cursor: bytes = b"\x1b[?25l"
    show_cursor: bytes = b"\x1b[?25h"
    home: bytes = b"\x1b[H"
    clear_eol: bytes = b"\x1b[K"
    reverse: bytes = b"\x1b[7m"
    normal: bytes = b"\x1b[m"
    move: Callable[[int, int], bytes] = _ansi_move

    @classmethod
    def from_terminal(cls, term) -> "FrameMarkers":
        """Build markers from a blessed Terminal's capabilities."""
        def move(row: int, col: int) -> bytes:
            return term.move_yx(row - 1, col - 1).encode()

        return cls(
            hide_cursor=term.hide_cursor.encode(),
            show_cursor=term.normal_cursor.encode(),
            home=term.home.encode(),
            clear_eol=term.clear_eol.encode(),
            reverse=term.reverse.encode(),
            normal=term.normal.encode(),
            move=move,
        )


@dataclass
class ViewOffset:
    x: int = 0  # first visible render column
    y: int = 0  # first visible row


class Viewport:
    """Visible window into the document.

    ``num_rows`` counts text rows only; the status and message bars are
    not part of it.
    """

    def __init__(self, num_rows: int = 0, num_columns: int = 0):
        self.num_rows = num_rows
        self.num_columns = num_columns
        self.offset = ViewOffset()
        self.render_x = 0

    def scroll(self, store: LineStore, cursor: CursorPosition) -> int:
        """Move the offset so the cursor is visible; return its render column."""
        if cursor.y < store.line_count:
            self.render_x = raw_to_render_col(store[cursor.y].raw, cursor.x)
        else:
            self.render_x = 0

        rows, cols = self.num_rows, self.num_columns
        offset = self.offset
        if cursor.y < offset.y:
            offset.y = cursor.y
        if cursor.y >= offset.y + rows:
            # Keep a row of lookahead below the cursor
            offset.y = cursor.y - rows + 2 if rows > 1 else cursor.y
        if self.render_x < offset.x:
            offset.x = self.render_x
        if self.render_x >= offset.x + cols:
            offset.x = self.render_x - cols + 1
        return self.render_x


class ScreenCompositor:
    """Assemble complete terminal frames.

    The output buffer is kept between frames and cleared after each one
    is handed out.
    """

    def __init__(self, markers: Optional[FrameMarkers] = None,
                 message_timeout: float = EditorConstants.STATUS_MESSAGE_TIMEOUT):
        self.markers = markers or FrameMarkers()
        self.message_timeout = message_timeout
        self._buffer = bytearray()

    def compose(
        self,
        store: LineStore,
        cursor: CursorPosition,
        viewport: Viewport,
        filename: Optional[str] = None,
        status_message: str = "",
        status_time: float = 0.0,
        now: Optional[float] = None,
    ) -> bytes:
        """Return one frame; the viewport must already be scrolled."""
        m = self.markers
        buf = self._buffer
        buf += m.hide_cursor
        buf += m.home
        self._draw_rows(store, viewport)
        self._draw_status_bar(store, cursor, viewport.num_columns, filename)
        self._draw_message_bar(viewport.num_columns, status_message, status_time,
                               time.time() if now is None else now)
        buf += m.move(cursor.y - viewport.offset.y + 1,
                      viewport.render_x - viewport.offset.x + 1)
        buf += m.show_cursor
        frame = bytes(buf)
        buf.clear()
        return frame

    def _draw_rows(self, store: LineStore, viewport: Viewport) -> None:
        buf = self._buffer
        cols = viewport.num_columns
        off = viewport.offset
        for y in range(viewport.num_rows):
            row = y + off.y
            if row < store.line_count:
                buf += store[row].render[off.x:off.x + cols]
            elif store.line_count == 0 and y == viewport.num_rows // 3:
                buf += self._welcome_banner(cols)
            else:
                buf += EditorConstants.EMPTY_LINE_MARKER
            buf += self.markers.clear_eol
            buf += b"\r\n"

    def _welcome_banner(self, cols: int) -> bytes:
        msg = EditorConstants.WELCOME_MESSAGE.format(__version__).encode()[:cols]
        padding = (cols - len(msg)) // 2
        if padding:
            return EditorConstants.EMPTY_LINE_MARKER + b" " * (padding - 1) + msg
        return msg

    def _draw_status_bar(self, store: LineStore, cursor: CursorPosition, cols: int,
                         filename: Optional[str]) -> None:
        buf = self._buffer
        name = filename[:EditorConstants.FILENAME_DISPLAY_LIMIT] if filename else EditorConstants.NO_NAME
        modified = "(modified)" if store.dirty else ""
        left = f" {name} - {store.line_count} Lines {modified}".encode()[:cols]
        right = f"{cursor.y + 1}/{store.line_count} ".encode()

        buf += self.markers.reverse
        buf += left
        width = len(left)
        while width < cols:
            if cols - width == len(right):
                buf += right
                break
            buf += b" "
            width += 1
        buf += self.markers.normal
        buf += b"\r\n"

    def _draw_message_bar(self, cols: int, message: str, message_time: float, now: float) -> None:
        self._buffer += self.markers.clear_eol
        if message and now - message_time < self.message_timeout:
            self._buffer += message.encode()[:cols]
