"""Logging setup.

The editor owns the screen, so log records go to a file and never to
the terminal.
"""

import logging

from .config import EditorConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: EditorConfig) -> logging.Handler:
    """Attach a file handler to the package logger and return it."""
    root = logging.getLogger("termedit")
    root.setLevel(config.log_level)
    path = config.resolved_log_file()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding='utf-8')
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False
    return handler
