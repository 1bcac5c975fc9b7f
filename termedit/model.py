from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .constants import EditorConstants

TAB = 0x09


def build_render(raw: bytes, tab_width: int = EditorConstants.TAB_WIDTH) -> bytes:
    """Expand tabs in a raw line into its display form.

    A tab emits spaces until the render column is a multiple of
    tab_width, always at least one. Every other byte is copied as is.
    """
    out = bytearray()
    for byte in raw:
        if byte == TAB:
            out.append(0x20)
            while len(out) % tab_width:
                out.append(0x20)
        else:
            out.append(byte)
    return bytes(out)


def raw_to_render_col(raw: bytes, col: int, tab_width: int = EditorConstants.TAB_WIDTH) -> int:
    """Return the render column of raw column col."""
    rx = 0
    for byte in raw[:col]:
        if byte == TAB:
            rx += (tab_width - 1) - (rx % tab_width)
        rx += 1
    return rx


class Line:
    """One row of the document.

    ``render`` is rebuilt whenever ``raw`` is assigned, so readers never
    see a render cache that lags the raw bytes.
    """

    __slots__ = ("_raw", "_render")

    def __init__(self, raw: bytes = b""):
        self.raw = raw

    @property
    def raw(self) -> bytes:
        return self._raw

    @raw.setter
    def raw(self, value: bytes):
        self._raw = bytes(value)
        self._render = build_render(self._raw)

    @property
    def render(self) -> bytes:
        return self._render

    def __len__(self) -> int:
        return len(self._raw)

    def __repr__(self) -> str:
        return f"Line({self._raw!r})"


@dataclass
class CursorPosition:
    x: int = 0  # raw column
    y: int = 0  # row


class LineStore:
    """Ordered lines of the document plus its dirty flag."""

    def __init__(self, lines: Optional[Iterable[bytes]] = None):
        self._lines: list[Line] = []
        self.dirty = False
        if lines is not None:
            self.load(lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> Line:
        return self._lines[index]

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def load(self, lines: Iterable[bytes]) -> None:
        """Replace the document with newline-stripped raw lines."""
        self._lines = [Line(data) for data in lines]
        self.dirty = False

    def serialize(self) -> bytes:
        """Join every line with a trailing newline, ready to be written out."""
        return b"".join(line.raw + b"\n" for line in self._lines)

    def insert_line(self, index: int, data: bytes = b"") -> None:
        if index < 0 or index > len(self._lines):
            return
        self._lines.insert(index, Line(data))
        self.dirty = True

    def delete_line(self, index: int) -> None:
        if index < 0 or index >= len(self._lines):
            return
        del self._lines[index]
        self.dirty = True

    def insert_char(self, row: int, col: int, byte: int) -> None:
        if not 0 <= row < len(self._lines):
            return
        line = self._lines[row]
        raw = line.raw
        col = max(0, min(col, len(raw)))
        line.raw = raw[:col] + bytes((byte,)) + raw[col:]
        self.dirty = True

    def delete_char(self, row: int, col: int) -> None:
        if not 0 <= row < len(self._lines):
            return
        line = self._lines[row]
        raw = line.raw
        if col < 0 or col >= len(raw):
            return
        line.raw = raw[:col] + raw[col + 1:]
        self.dirty = True

    def join_with_previous(self, row: int) -> None:
        """Append line ``row`` to the line above it and remove it."""
        if row <= 0 or row >= len(self._lines):
            return
        above = self._lines[row - 1]
        above.raw = above.raw + self._lines[row].raw
        self.delete_line(row)

    def split_at(self, row: int, col: int) -> None:
        """Move everything from ``col`` onward into a new line below ``row``."""
        if not 0 <= row < len(self._lines):
            return
        line = self._lines[row]
        raw = line.raw
        col = max(0, min(col, len(raw)))
        self.insert_line(row + 1, raw[col:])
        line.raw = raw[:col]


def split_lines(data: bytes) -> list[bytes]:
    """Split file content into lines, dropping trailing CR/LF from each."""
    if not data:
        return []
    lines = data.split(b"\n")
    if data.endswith(b"\n"):
        lines.pop()
    return [line.rstrip(b"\r") for line in lines]
