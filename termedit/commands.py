"""Command pattern implementation for editor actions.

Every command works on the editor's current cursor only; nothing here
keeps state between key events. Moves and edits that would leave the
document are silently ignored.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, TYPE_CHECKING
from .keyboard import Key

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Execute the command for key_event."""
        pass


def move_up(editor: 'Editor') -> None:
    if editor.cursor.y > 0:
        editor.cursor.y -= 1


def move_down(editor: 'Editor') -> None:
    if editor.cursor.y < editor.store.line_count - 1:
        editor.cursor.y += 1


def move_left(editor: 'Editor') -> None:
    cursor = editor.cursor
    if cursor.x > 0:
        cursor.x -= 1
    elif cursor.y > 0:
        cursor.y -= 1
        cursor.x = len(editor.store[cursor.y])


def move_right(editor: 'Editor') -> None:
    cursor, store = editor.cursor, editor.store
    if cursor.y < store.line_count and cursor.x < len(store[cursor.y]):
        cursor.x += 1
    elif cursor.y < store.line_count - 1:
        cursor.y += 1
        cursor.x = 0


def snap_cursor(editor: 'Editor') -> None:
    """Clamp the column to the length of the line the cursor is on."""
    cursor, store = editor.cursor, editor.store
    length = len(store[cursor.y]) if cursor.y < store.line_count else 0
    if cursor.x > length:
        cursor.x = length


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor, key_event):
        self._move(editor)

    @abstractmethod
    def _move(self, editor: 'Editor'):
        """Perform the movement."""
        pass


class UpCommand(MovementCommand):
    def _move(self, editor):
        move_up(editor)


class DownCommand(MovementCommand):
    def _move(self, editor):
        move_down(editor)


class LeftCommand(MovementCommand):
    def _move(self, editor):
        move_left(editor)


class RightCommand(MovementCommand):
    def _move(self, editor):
        move_right(editor)


class HomeCommand(MovementCommand):
    def _move(self, editor):
        editor.cursor.x = 0


class EndCommand(MovementCommand):
    def _move(self, editor):
        cursor = editor.cursor
        if cursor.y < editor.store.line_count:
            cursor.x = len(editor.store[cursor.y])


class PageUpCommand(MovementCommand):
    """Jump to the top of the view, then go up one screenful a row at a time."""

    def _move(self, editor):
        editor.cursor.y = editor.viewport.offset.y
        for _ in range(editor.viewport.num_rows):
            move_up(editor)


class PageDownCommand(MovementCommand):
    """Jump to the bottom of the view, then go down one screenful a row at a time."""

    def _move(self, editor):
        rows = editor.viewport.num_rows
        last = max(0, editor.store.line_count - 1)
        editor.cursor.y = max(0, min(editor.viewport.offset.y + rows - 1, last))
        for _ in range(rows):
            move_down(editor)


class InsertNewlineCommand(EditorCommand):
    def execute(self, editor, key_event):
        cursor, store = editor.cursor, editor.store
        if cursor.y == store.line_count:
            store.insert_line(cursor.y, b"")
        else:
            store.split_at(cursor.y, cursor.x)
        cursor.y += 1
        cursor.x = 0


def backspace(editor: 'Editor') -> None:
    cursor, store = editor.cursor, editor.store
    if cursor.y >= store.line_count:
        return
    if cursor.x == 0 and cursor.y == 0:
        return
    if cursor.x > 0:
        store.delete_char(cursor.y, cursor.x - 1)
        cursor.x -= 1
    else:
        cursor.x = len(store[cursor.y - 1])
        store.join_with_previous(cursor.y)
        cursor.y -= 1


class BackspaceCommand(EditorCommand):
    def execute(self, editor, key_event):
        backspace(editor)


class DeleteCommand(EditorCommand):
    """Delete the byte under the cursor, joining lines at end of line."""

    def execute(self, editor, key_event):
        cursor, store = editor.cursor, editor.store
        if cursor.y >= store.line_count:
            return
        at_last_line = cursor.y == store.line_count - 1
        if at_last_line and cursor.x >= len(store[cursor.y]):
            return
        move_right(editor)
        backspace(editor)


class InsertTextCommand(EditorCommand):
    def execute(self, editor, key_event):
        cursor, store = editor.cursor, editor.store
        for byte in key_event.value:
            if cursor.y == store.line_count:
                store.insert_line(store.line_count, b"")
            store.insert_char(cursor.y, cursor.x, byte)
            cursor.x += 1


class QuitCommand(EditorCommand):
    """Quit, asking for confirmation while there are unsaved changes."""

    def execute(self, editor, key_event):
        if editor.store.dirty and editor.quit_times > 0:
            editor.set_status_message(editor.QUIT_WARNING, editor.quit_times)
            editor.quit_times -= 1
            return
        editor.running = False


class SaveCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.save()


class NoOpCommand(EditorCommand):
    def execute(self, editor, key_event):
        pass


class CommandRegistry:
    """Registry for mapping key events to commands."""

    def __init__(self):
        self._commands: Dict[Key, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register(Key.UP, UpCommand())
        self.register(Key.DOWN, DownCommand())
        self.register(Key.LEFT, LeftCommand())
        self.register(Key.RIGHT, RightCommand())
        self.register(Key.HOME, HomeCommand())
        self.register(Key.END, EndCommand())
        self.register(Key.PAGE_UP, PageUpCommand())
        self.register(Key.PAGE_DOWN, PageDownCommand())

        # Editing commands
        self.register(Key.CHAR, InsertTextCommand())
        self.register(Key.ENTER, InsertNewlineCommand())
        self.register(Key.BACKSPACE, BackspaceCommand())
        self.register(Key.DELETE, DeleteCommand())

        # System commands
        self.register(Key.QUIT, QuitCommand())
        self.register(Key.SAVE, SaveCommand())
        self.register(Key.ESCAPE, NoOpCommand())
        self.register(Key.NONE, NoOpCommand())

    def register(self, key: Key, command: EditorCommand):
        """Register a command for a key."""
        self._commands[key] = command

    def get_command(self, key: Key) -> Optional[EditorCommand]:
        """Get the command for a key."""
        return self._commands.get(key)

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Execute the command for the given key event."""
        command = self.get_command(key_event.key)
        if command:
            command.execute(editor, key_event)
