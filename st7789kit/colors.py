"""RGB565 colour values used by the display driver."""

RED = 0xF800
GREEN = 0x07E0
BLUE = 0x001F
BLACK = 0x0000
WHITE = 0xFFFF
GRAY = 0x8C51
YELLOW = 0xFFE0
CYAN = 0x07FF
PURPLE = 0xF81F


def rgb565(r: int, g: int, b: int) -> int:
    """Pack 8-bit red, green and blue into a 16-bit RRRRRGGGGGGBBBBB value."""
    return (((r & 0xF8) << 8) | ((g & 0xFC) << 3) | (b >> 3)) & 0xFFFF