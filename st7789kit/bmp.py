"""Parsing the headers of Windows BMP files."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike
from typing import Union

_FILE_HEADER = struct.Struct("<2sIHHI")
_DIB_HEADER = struct.Struct("<IIIHHIIIIII")


class BmpError(Exception):
    """Raised when data is not a readable BMP file."""


@dataclass(frozen=True)
class BmpHeader:
    """The 14-byte BMP file header."""

    magic: bytes
    file_size: int
    creator1: int
    creator2: int
    offset: int


@dataclass(frozen=True)
class DibHeader:
    """The 40-byte BITMAPINFOHEADER (DIB v3)."""

    header_size: int
    width: int
    height: int
    planes: int
    depth: int
    compress_type: int
    bitmap_size: int
    hres: int
    vres: int
    ncolors: int
    nimpcolors: int


@dataclass(frozen=True)
class BmpFile:
    """Both headers together with the whole file contents."""

    header: BmpHeader
    dib: DibHeader
    data: bytes


def parse_bmp(data: bytes) -> BmpFile:
    """Parse the file and DIB headers of a BMP image."""
    data = bytes(data)
    if len(data) < 2:
        raise BmpError("file is too short")
    if data[:2] != b"BM":
        raise BmpError("file is not BMP")
    needed = _FILE_HEADER.size + _DIB_HEADER.size
    if len(data) < needed:
        raise BmpError(f"file is truncated: {len(data)} of {needed} header bytes")
    header = BmpHeader(*_FILE_HEADER.unpack_from(data, 0))
    dib = DibHeader(*_DIB_HEADER.unpack_from(data, _FILE_HEADER.size))
    return BmpFile(header, dib, data)


def load_bmp(path: Union[str, PathLike]) -> BmpFile:
    """Read and parse a BMP file from disk."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except FileNotFoundError as exc:
        raise BmpError(f"file not found [{path}]") from exc
    return parse_bmp(data)