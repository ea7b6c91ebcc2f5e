"""Decoding JPEG files into screen-sized rows of RGB565 pixels."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from typing import List, Union

from PIL import Image, UnidentifiedImageError

from .colors import rgb565


class JpegError(Exception):
    """Raised when a JPEG file is missing, malformed or unsupported."""


@dataclass
class DecodedImage:
    """Screen-sized pixel rows and the size of the scaled image inside them."""

    pixels: List[List[int]]
    width: int
    height: int
    scale: int


def jpeg_scale(screen_width: int, screen_height: int, image_width: int, image_height: int) -> int:
    """Return N so that the image descaled by 1 / 2**N (N = 0..3) fits best."""
    if screen_width >= image_width and screen_height >= image_height:
        return 0
    scale = max(image_width / screen_width, image_height / screen_height)
    if scale <= 2.0:
        return 1
    if scale <= 4.0:
        return 2
    return 3


def decode_jpeg(path: Union[str, PathLike], width: int, height: int) -> DecodedImage:
    """Decode a baseline JPEG into width x height RGB565 rows, descaled to fit."""
    pixels = [[0] * width for _ in range(height)]
    try:
        image = Image.open(path)
    except FileNotFoundError as exc:
        raise JpegError(f"Image file not found [{path}]") from exc
    except (UnidentifiedImageError, OSError) as exc:
        raise JpegError(f"Image decoder: prepare failed [{path}]") from exc
    with image:
        if image.format != "JPEG":
            raise JpegError(f"Image decoder: not a JPEG file [{path}]")
        if image.info.get("progressive") or image.info.get("progression"):
            raise JpegError(f"Image decoder: progressive JPEG is not supported [{path}]")
        scale = jpeg_scale(width, height, image.width, image.height)
        factor = 1 << scale
        image_width = (image.width // factor) & 0xFFFF
        image_height = (image.height // factor) & 0xFFFF
        try:
            rgb = image.convert("RGB")
            if factor > 1:
                rgb = rgb.reduce(factor)
        except OSError as exc:
            raise JpegError(f"Image decoder: decode failed [{path}]") from exc
    data = rgb.tobytes()
    row_bytes = rgb.width * 3
    visible = min(rgb.width, width)
    for y, row in enumerate(pixels[: rgb.height]):
        line = data[y * row_bytes:y * row_bytes + visible * 3]
        channels = iter(line)
        row[:visible] = [rgb565(r, g, b) for r, g, b in zip(channels, channels, channels)]
    return DecodedImage(pixels, image_width, image_height, scale)