"""termedit CLI entry point.

Allows running via `python -m termedit` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys

from .version import get_version_string


def run_keyboard_test() -> None:
    """Print decoded key events until ESC is pressed."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, Key

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    kb = KeyboardHandler(term)
    with term:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key is Key.ESCAPE:
                break
            raw = ev.raw.encode('unicode_escape').decode('ascii')
            term.write_frame(f"key={ev.key.value} value={ev.value!r} raw='{raw}'\r\n".encode())


def main() -> None:
    # Very small arg parsing: version, keyboard test, optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    from .config import load_config
    from .logsetup import configure_logging
    from .terminal import TerminalError

    config = load_config()
    configure_logging(config)

    try:
        if args and args[0] in ('--keytest', '--keyboard-test'):
            run_keyboard_test()
            return

        # Lazy import to avoid importing UI deps for --version
        from .editor import Editor
        editor = Editor(config=config)
        if args:
            editor.load_file(args[0])
        editor.run()
    except TerminalError:
        from .constants import EditorConstants
        print(EditorConstants.RAW_MODE_ERROR, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
