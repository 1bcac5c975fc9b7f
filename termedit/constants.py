"""Constants and configuration for the termedit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Display
    TAB_WIDTH = 8  # Tab stops every 8 render columns
    EMPTY_LINE_MARKER = b"~"
    WELCOME_MESSAGE = "Terminal Editor - Version: {}"
    NO_NAME = "[No Name]"
    FILENAME_DISPLAY_LIMIT = 20  # Characters of the filename shown in the status bar

    # Layout: rows below the text area (status bar + message bar)
    RESERVED_ROWS = 2

    # Status messages
    STATUS_MESSAGE_MAX_LENGTH = 79
    STATUS_MESSAGE_TIMEOUT = 5  # Seconds a status message stays visible
    HELP_MESSAGE = "HELP: Ctrl-Q to quit | Ctrl-S to Save"
    QUIT_WARNING = "WARNING!! File has unsaved changes. Press Ctrl-Q %d more time to quit."
    SAVE_PROMPT = "Save as: %s"
    SAVE_ABORTED_MESSAGE = "Save aborted"
    SAVE_SUCCESS_MESSAGE = "%d bytes written to disk"
    SAVE_ERROR_MESSAGE = "Can't save! I/O error: %s"
    RAW_MODE_ERROR = "ERROR: Failed setting the terminal to Raw Mode"

    # Quitting a modified document takes this many extra Ctrl-Q presses
    QUIT_TIMES = 1

    # Keyboard timing
    INPUT_TIMEOUT = 0.1  # Wake up this often so expired messages get cleared (seconds)

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files
