"""Collecting decoded PNG pixels into a screen-sized RGB565 image."""

from __future__ import annotations

from typing import Sequence

from .colors import rgb565


class ScreenImage:
    """Receives decoder callbacks and stores pixels scaled to fit the screen."""

    def __init__(self, screen_width: int, screen_height: int) -> None:
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.pixels = [[0] * screen_width for _ in range(screen_height)]
        self.image_width = 0
        self.image_height = 0
        self.reduction = False
        self.scale_factor = 1.0
        self.done = False

    def on_init(self, width: int, height: int) -> None:
        """Record the image size and work out the reduction needed."""
        self.image_width = width & 0xFFFF
        self.image_height = height & 0xFFFF
        self.reduction = False
        self.scale_factor = 1.0
        self.done = False
        if self.screen_width < self.image_width or self.screen_height < self.image_height:
            self.reduction = True
            factor_width = self.screen_width / self.image_width
            factor_height = self.screen_height / self.image_height
            self.scale_factor = min(factor_width, factor_height)
            self.image_width = int(self.image_width * self.scale_factor)
            self.image_height = int(self.image_height * self.scale_factor)

    def on_draw(self, x: int, y: int, w: int, h: int, rgba: Sequence[int]) -> None:
        """Store one decoded pixel, scaled down when the image is too large."""
        if self.reduction:
            x = int(x * self.scale_factor)
            y = int(y * self.scale_factor)
        if y < self.screen_height and x < self.screen_width:
            self.pixels[y][x] = rgb565(rgba[0], rgba[1], rgba[2])

    def on_done(self) -> None:
        """Mark the image as complete."""
        self.done = True