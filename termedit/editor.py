"""Main editor controller."""

import logging
import os
import tempfile
import time
from typing import Optional

from .commands import CommandRegistry, snap_cursor
from .config import EditorConfig
from .constants import EditorConstants
from .keyboard import Key, KeyboardHandler, KeyEvent
from .model import CursorPosition, LineStore, split_lines
from .terminal import TerminalInterface
from .view import ScreenCompositor, Viewport

logger = logging.getLogger(__name__)


def _file_mode(filename: str) -> int:
    """Permissions for a saved file: keep the existing ones, else 0644."""
    try:
        return os.stat(filename).st_mode & 0o7777
    except OSError:
        return 0o644


class Editor:
    """Editing session: document, cursor, viewport and status line state."""

    QUIT_WARNING = EditorConstants.QUIT_WARNING

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 config: Optional[EditorConfig] = None):
        self.config = config or EditorConfig()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.store = LineStore()
        self.cursor = CursorPosition()
        self.viewport = Viewport()
        self.compositor = ScreenCompositor(message_timeout=self.config.message_timeout)
        self.command_registry = CommandRegistry()
        self.running = False
        self.filename: Optional[str] = None
        self.status_message = ""
        self.status_time = 0.0
        self.quit_times = self.config.quit_times
        # Filename prompt shown in the message bar while saving a new file
        self.prompt_mode = False
        self.prompt_input = ""

    @property
    def dirty(self) -> bool:
        return self.store.dirty

    def set_status_message(self, fmt: str, *args) -> None:
        """Show a message in the message bar for a few seconds."""
        message = fmt % args if args else fmt
        self.status_message = message[:EditorConstants.STATUS_MESSAGE_MAX_LENGTH]
        self.status_time = time.time()

    def resize(self, rows: int, columns: int) -> None:
        """Set the size of the text area (status and message bars excluded)."""
        self.viewport.num_rows = rows
        self.viewport.num_columns = columns

    def run(self) -> None:
        """Run the main editor loop until Quit."""
        with self.terminal:
            self.compositor.markers = self.terminal.frame_markers()
            self.resize(*self.terminal.text_area_size())
            self.set_status_message(EditorConstants.HELP_MESSAGE)
            self.running = True
            logger.info("editing %s", self.filename or "new buffer")
            while self.running:
                self.refresh_screen()
                key_event = self.keyboard.get_key_event(timeout=self.config.input_timeout)
                if key_event:
                    self.process_key(key_event)

    def compose_frame(self, now: Optional[float] = None) -> bytes:
        """Scroll the viewport to the cursor and build the next frame."""
        if now is None:
            now = time.time()
        if self.prompt_mode:
            # The prompt stays up until answered
            self.status_message = EditorConstants.SAVE_PROMPT % self.prompt_input
            self.status_time = now
        self.viewport.scroll(self.store, self.cursor)
        return self.compositor.compose(
            self.store,
            self.cursor,
            self.viewport,
            filename=self.filename,
            status_message=self.status_message,
            status_time=self.status_time,
            now=now,
        )

    def refresh_screen(self) -> None:
        self.terminal.write_frame(self.compose_frame())

    def process_key(self, key_event: KeyEvent) -> None:
        """Handle one decoded key event."""
        if self.prompt_mode:
            self._handle_filename_prompt(key_event)
            return

        self.command_registry.execute(self, key_event)
        snap_cursor(self)
        if key_event.key is not Key.QUIT:
            self.quit_times = self.config.quit_times

    def _handle_filename_prompt(self, key_event: KeyEvent) -> None:
        """Handle keypress during the save-as prompt."""
        key = key_event.key
        if key is Key.ESCAPE:
            self.prompt_mode = False
            self.prompt_input = ""
            self.set_status_message(EditorConstants.SAVE_ABORTED_MESSAGE)
            return
        if key is Key.ENTER:
            if self.prompt_input:
                self.filename = self.prompt_input
                self.prompt_mode = False
                self.prompt_input = ""
                self.set_status_message("")
                self.save_file(self.filename)
            return
        if key in (Key.BACKSPACE, Key.DELETE):
            self.prompt_input = self.prompt_input[:-1]
        elif key is Key.CHAR:
            for byte in key_event.value:
                if 32 <= byte < 127:
                    self.prompt_input += chr(byte)
        self.set_status_message(EditorConstants.SAVE_PROMPT, self.prompt_input)

    def save(self) -> None:
        """Save to the current file, asking for a name first if there is none."""
        if self.filename:
            self.save_file(self.filename)
        else:
            self.prompt_mode = True
            self.prompt_input = ""
            self.set_status_message(EditorConstants.SAVE_PROMPT, "")

    def load_file(self, filename: str) -> bool:
        """Load a file into the editor.

        Returns:
            True if the file was read. On failure the document stays empty
            and the name is kept so a later save creates the file.
        """
        self.filename = filename
        try:
            with open(filename, 'rb') as f:
                data = f.read()
        except OSError as e:
            logger.warning("Could not load %s: %s", filename, e)
            self.store.load([])
            return False
        self.store.load(split_lines(data))
        self.cursor = CursorPosition()
        logger.info("loaded %s (%d lines)", filename, self.store.line_count)
        return True

    def save_file(self, filename: str) -> bool:
        """Write the document to filename atomically.

        Returns:
            True if save succeeded. On failure the status bar shows the
            error and the document stays modified.
        """
        data = self.store.serialize()
        dir_name = os.path.dirname(filename) or '.'
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(data)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.chmod(temp_filename, _file_mode(filename))
            os.replace(temp_filename, filename)
        except OSError as e:
            logger.error("Could not save %s: %s", filename, e)
            self.set_status_message(EditorConstants.SAVE_ERROR_MESSAGE, e.strerror or str(e))
            if temp_filename and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_filename)
            return False

        self.store.dirty = False
        self.set_status_message(EditorConstants.SAVE_SUCCESS_MESSAGE, len(data))
        logger.info("saved %s (%d bytes)", filename, len(data))
        return True
