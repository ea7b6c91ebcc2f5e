"""Reading FONTX bitmap font files and converting glyphs to display bitmaps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Optional

GLYPH_BUF_SIZE = 32 * 32 // 8
_HEADER_SIZE = 18
_GLYPH_BASE = 17
_BITMAP_SIZE = 32 * 4


class FontxError(Exception):
    """Raised when a FONTX file cannot be used or a glyph cannot be read."""


@dataclass(frozen=True)
class Glyph:
    """A glyph pattern: rows of (width + 7) // 8 bytes, MSB first."""

    width: int
    height: int
    data: bytes


class FontxFile:
    """One FONTX font file, opened lazily and kept open until closed."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.name = ""
        self.width = 0
        self.height = 0
        self.is_ank = False
        self.bc = 0
        self.glyph_size = 0
        self.opened = False
        self.valid = False
        self._error: Optional[str] = None
        self._file: Optional[BinaryIO] = None

    def open(self) -> None:
        """Open the file and read its header; raise FontxError if unusable."""
        if self.opened:
            if not self.valid:
                raise FontxError(self._error or f"{self.path} is not usable")
            return
        try:
            handle = open(self.path, "rb")
        except OSError as exc:
            self.valid = False
            raise FontxError(f"{self.path} not found") from exc
        self.opened = True
        header = handle.read(_HEADER_SIZE)
        if len(header) != _HEADER_SIZE:
            handle.close()
            self._fail(f"{self.path} not FONTX format")
        self.name = header[6:14].split(b"\0", 1)[0].decode("latin-1")
        self.width = header[14]
        self.height = header[15]
        self.is_ank = header[16] == 0
        self.bc = header[17]
        self.glyph_size = (self.width + 7) // 8 * self.height
        if self.glyph_size > GLYPH_BUF_SIZE:
            handle.close()
            self._fail(f"{self.path} is too big font size")
        self._file = handle
        self.valid = True
        self._error = None

    def _fail(self, message: str) -> None:
        self.valid = False
        self._error = message
        raise FontxError(message)

    def close(self) -> None:
        """Close the file if it is open."""
        if self.opened:
            if self._file is not None:
                self._file.close()
                self._file = None
            self.opened = False

    def glyph(self, code: int) -> Glyph:
        """Read the pattern for a single-byte character code."""
        if not 0 <= code <= 0xFF:
            raise ValueError(f"character code out of range: {code}")
        self.open()
        if not self.is_ank:
            raise FontxError(f"{self.path} is not a single-byte font")
        assert self._file is not None
        offset = _GLYPH_BASE + code * self.glyph_size
        self._file.seek(offset)
        data = self._file.read(self.glyph_size)
        if len(data) != self.glyph_size:
            raise FontxError(f"read of glyph at offset {offset} failed")
        return Glyph(self.width, self.height, data)

    def __enter__(self) -> "FontxFile":
        self.open()
        return self

    def __exit__(self, *args) -> None:
        self.close()


class FontxSet:
    """A primary and a secondary font searched in that order."""

    def __init__(self, primary: str, secondary: str = "") -> None:
        self.fonts = (FontxFile(primary), FontxFile(secondary))

    def get_glyph(self, code: int) -> Glyph:
        """Return the glyph from the first usable single-byte font."""
        for font in self.fonts:
            try:
                font.open()
            except FontxError:
                continue
            if font.is_ank:
                return font.glyph(code)
        raise FontxError("no single-byte font available")

    def dump(self) -> str:
        """Describe both fonts, one field per line."""
        lines = []
        for i, font in enumerate(self.fonts):
            lines.extend(
                f"fonts[{i}].{field}={value}"
                for field, value in (
                    ("path", font.path),
                    ("opened", font.opened),
                    ("name", font.name),
                    ("valid", font.valid),
                    ("is_ank", font.is_ank),
                    ("w", font.width),
                    ("h", font.height),
                    ("fsz", font.glyph_size),
                    ("bc", font.bc),
                )
            )
        return "\n".join(lines)

    def close(self) -> None:
        """Close both fonts."""
        for font in self.fonts:
            font.close()

    def __enter__(self) -> "FontxSet":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def font_to_bitmap(fonts: bytes, width: int, height: int, inverse: bool = False) -> bytearray:
    """Convert a row-major glyph into the 32-column, 8-row-per-byte layout."""
    line = bytearray(_BITMAP_SIZE)
    stride = (width + 7) // 8
    for y in range(height):
        row = fonts[y * stride:(y + 1) * stride]
        bit = 1 << (7 - y % 8)
        for x in range(width):
            if row[x // 8] & (0x80 >> (x % 8)):
                pos = ((y // 8) * 32 + x) & 0xFF
                line[pos] = (line[pos] + bit) & 0xFF
    if inverse:
        for y in range(height // 8):
            for x in range(width):
                line[y * 32 + x] = rotate_byte(line[y * 32 + x])
    return line


def underline_bitmap(line: bytes, width: int, height: int) -> bytearray:
    """Return a copy of the bitmap with the top bit of its last band added."""
    result = bytearray(line)
    bands = height // 8
    if bands:
        base = (bands - 1) * 32
        for x in range(width):
            result[base + x] = (result[base + x] + 0x80) & 0xFF
    return result


def reverse_bitmap(line: bytes, width: int, height: int) -> bytearray:
    """Return a copy of the bitmap with every used byte inverted."""
    result = bytearray(line)
    for y in range(height // 8):
        for x in range(width):
            result[y * 32 + x] ^= 0xFF
    return result


def render_font(fonts: bytes, width: int, height: int) -> str:
    """Draw a glyph pattern as text, '*' for set and '.' for clear dots."""
    stride = (width + 7) // 8
    lines = [f"[ShowFont pw={width} ph={height}]"]
    for y in range(height):
        row = fonts[y * stride:(y + 1) * stride]
        dots = "".join(
            "*" if row[x // 8] & (0x80 >> (x % 8)) else "." for x in range(width)
        )
        lines.append(f"{y:02d}{dots}")
    return "\n".join(lines) + "\n\n"


def render_bitmap(bitmap: bytes, width: int, height: int) -> str:
    """Draw a converted bitmap as text, '*' for set and '.' for clear dots."""
    lines = [f"[ShowBitmap pw={width} ph={height}]"]
    for y in range(height):
        mask = 0x80 >> (y % 8)
        dots = "".join(
            "*" if bitmap[x + (y // 8) * 32] & mask else "." for x in range(width)
        )
        lines.append(f"{y:02d}{dots}")
    return "\n".join(lines) + "\n\n"


def rotate_byte(value: int) -> int:
    """Reverse the order of the eight bits of a byte."""
    result = 0
    for _ in range(8):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result