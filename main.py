#!/usr/bin/env python3
"""termedit - a small terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home/End, PageUp/PageDown: Move the cursor
    Ctrl-S: Save file
    Ctrl-Q: Quit (press again to discard unsaved changes)
    Type to insert text
    Backspace/Delete: Delete character
    Enter: Split line
"""

from termedit.__main__ import main


if __name__ == "__main__":
    main()
