from __future__ import annotations

import importlib.metadata

__version__ = "0.0.1"


def get_version_string() -> str:
    """Return the installed distribution version, or the source version."""
    try:
        return importlib.metadata.version("termedit")
    except importlib.metadata.PackageNotFoundError:
        return __version__
