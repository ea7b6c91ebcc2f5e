"""ST7789 display driver drawing through a command/data transport."""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import List, Optional, Protocol, Sequence, Tuple, Union

from .fontx import FontxError, FontxSet
from .shapes import (
    arrow_head,
    circle_points,
    fill_circle_lines,
    line_points,
    rect_angle_corners,
    round_rect_corner_points,
    triangle_corners,
)

CMD_SOFTWARE_RESET = 0x01
CMD_SLEEP_IN = 0x10
CMD_SLEEP_OUT = 0x11
CMD_NORMAL_MODE = 0x13
CMD_INVERSION_OFF = 0x20
CMD_INVERSION_ON = 0x21
CMD_DISPLAY_OFF = 0x28
CMD_DISPLAY_ON = 0x29
CMD_COLUMN_ADDRESS = 0x2A
CMD_ROW_ADDRESS = 0x2B
CMD_MEMORY_WRITE = 0x2C
CMD_MEMORY_ACCESS = 0x36
CMD_PIXEL_FORMAT = 0x3A


def _u16(value: Union[int, float]) -> int:
    return int(value) & 0xFFFF


def _i16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


class Direction(IntEnum):
    """Direction in which text runs."""

    DIRECTION0 = 0
    DIRECTION90 = 1
    DIRECTION180 = 2
    DIRECTION270 = 3


class _Transport(Protocol):
    def command(self, cmd: int) -> None: ...

    def data(self, payload: bytes) -> None: ...

    def set_backlight(self, on: bool) -> None: ...

    def delay(self, ms: int) -> None: ...


class FrameBuffer:
    """An in-memory stand-in for the controller: it interprets commands into pixels."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.memory = [[0] * width for _ in range(height)]
        self.commands: List[int] = []
        self.writes: List[Tuple[int, bytes]] = []
        self.backlight = False
        self.inverted = False
        self.display_on = False
        self.sleeping = True
        self.pixel_format: Optional[int] = None
        self.memory_access: Optional[int] = None
        self.elapsed_ms = 0
        self.columns = (0, width - 1)
        self.rows = (0, height - 1)
        self._cmd: Optional[int] = None
        self._params = bytearray()
        self._cursor = (0, 0)

    def command(self, cmd: int) -> None:
        """Receive one command byte."""
        cmd &= 0xFF
        self.commands.append(cmd)
        self._cmd = cmd
        self._params = bytearray()
        if cmd == CMD_SOFTWARE_RESET:
            self.sleeping = True
            self.display_on = False
            self.inverted = False
        elif cmd == CMD_SLEEP_OUT:
            self.sleeping = False
        elif cmd == CMD_SLEEP_IN:
            self.sleeping = True
        elif cmd == CMD_INVERSION_OFF:
            self.inverted = False
        elif cmd == CMD_INVERSION_ON:
            self.inverted = True
        elif cmd == CMD_DISPLAY_OFF:
            self.display_on = False
        elif cmd == CMD_DISPLAY_ON:
            self.display_on = True
        elif cmd == CMD_MEMORY_WRITE:
            self._cursor = (self.columns[0], self.rows[0])

    def data(self, payload: bytes) -> None:
        """Receive parameter or pixel bytes for the last command."""
        payload = bytes(payload)
        cmd = self._cmd
        if cmd is None:
            raise RuntimeError("data sent before any command")
        self.writes.append((cmd, payload))
        self._params += payload
        if cmd in (CMD_COLUMN_ADDRESS, CMD_ROW_ADDRESS):
            if len(self._params) >= 4:
                window = struct.unpack(">HH", bytes(self._params[:4]))
                if cmd == CMD_COLUMN_ADDRESS:
                    self.columns = window
                else:
                    self.rows = window
        elif cmd == CMD_PIXEL_FORMAT:
            self.pixel_format = self._params[-1]
        elif cmd == CMD_MEMORY_ACCESS:
            self.memory_access = self._params[-1]
        elif cmd == CMD_MEMORY_WRITE:
            while len(self._params) >= 2:
                color = (self._params[0] << 8) | self._params[1]
                del self._params[:2]
                self._store(color)

    def _store(self, color: int) -> None:
        x, y = self._cursor
        if 0 <= x < self.width and 0 <= y < self.height:
            self.memory[y][x] = color
        x += 1
        if x > self.columns[1]:
            x = self.columns[0]
            y += 1
            if y > self.rows[1]:
                y = self.rows[0]
        self._cursor = (x, y)

    def set_backlight(self, on: bool) -> None:
        """Switch the backlight."""
        self.backlight = bool(on)

    def delay(self, ms: int) -> None:
        """Account for a delay without sleeping."""
        self.elapsed_ms += ms

    def pixel(self, x: int, y: int) -> int:
        """The RGB565 value stored at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the frame buffer")
        return self.memory[y][x]


class ST7789:
    """Drawing primitives for an ST7789 panel reached through a transport."""

    def __init__(
        self,
        transport: _Transport,
        width: int,
        height: int,
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> None:
        self.transport = transport
        self.width = width
        self.height = height
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.font_direction = int(Direction.DIRECTION0)
        self.font_fill = False
        self.font_fill_color = 0
        self.font_underline = False
        self.font_underline_color = 0

    def _command(self, cmd: int) -> None:
        self.transport.command(cmd)

    def _data(self, payload: bytes) -> None:
        self.transport.data(payload)

    def _addr(self, a: int, b: int) -> None:
        self._data(struct.pack(">HH", a & 0xFFFF, b & 0xFFFF))

    def _window(self, x1: int, x2: int, y1: int, y2: int) -> None:
        self._command(CMD_COLUMN_ADDRESS)
        self._addr(x1, x2)
        self._command(CMD_ROW_ADDRESS)
        self._addr(y1, y2)
        self._command(CMD_MEMORY_WRITE)

    def init(self) -> None:
        """Reset the controller and switch the display on."""
        self.font_direction = int(Direction.DIRECTION0)
        self.font_fill = False
        self.font_underline = False
        delay = self.transport.delay

        self._command(CMD_SOFTWARE_RESET)
        delay(150)
        self._command(CMD_SLEEP_OUT)
        delay(255)
        self._command(CMD_PIXEL_FORMAT)
        self._data(b"\x55")
        delay(10)
        self._command(CMD_MEMORY_ACCESS)
        self._data(b"\x00")
        for cmd in (CMD_COLUMN_ADDRESS, CMD_ROW_ADDRESS):
            self._command(cmd)
            for byte in (0x00, 0x00, 0x00, 0xF0):
                self._data(bytes([byte]))
        self._command(CMD_INVERSION_ON)
        delay(10)
        self._command(CMD_NORMAL_MODE)
        delay(10)
        self._command(CMD_DISPLAY_ON)
        delay(255)
        self.transport.set_backlight(True)

    def draw_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates off the screen are ignored."""
        x, y = _u16(x), _u16(y)
        if x >= self.width or y >= self.height:
            return
        _x = _u16(x + self.offset_x)
        _y = _u16(y + self.offset_y)
        self._window(_x, _x, _y, _y)
        self._data(struct.pack(">H", color & 0xFFFF))

    def draw_multi_pixels(self, x: int, y: int, colors: Sequence[int]) -> None:
        """Write a run of pixels along one row starting at (x, y)."""
        x, y = _u16(x), _u16(y)
        size = len(colors) & 0xFFFF
        if x + size > self.width or y >= self.height:
            return
        _x1 = _u16(x + self.offset_x)
        _x2 = _u16(_x1 + size)
        _y = _u16(y + self.offset_y)
        self._window(_x1, _x2, _y, _y)
        self._data(b"".join(struct.pack(">H", c & 0xFFFF) for c in colors[:size]))

    def draw_fill_rect(self, x1: int, y1: int, x2: int, y2: int, color: int) -> None:
        """Fill the rectangle between two corners, clipped to the screen."""
        x1, y1, x2, y2 = _u16(x1), _u16(y1), _u16(x2), _u16(y2)
        if x1 >= self.width:
            return
        if x2 >= self.width:
            x2 = self.width - 1
        if y1 >= self.height:
            return
        if y2 >= self.height:
            y2 = self.height - 1
        _x1 = _u16(x1 + self.offset_x)
        _x2 = _u16(x2 + self.offset_x)
        _y1 = _u16(y1 + self.offset_y)
        _y2 = _u16(y2 + self.offset_y)
        self._window(_x1, _x2, _y1, _y2)
        size = _y2 - _y1 + 1
        if size <= 0:
            return
        column = struct.pack(">H", color & 0xFFFF) * size
        for _ in range(_x1, _x2 + 1):
            self._data(column)

    def display_off(self) -> None:
        """Turn the panel off."""
        self._command(CMD_DISPLAY_OFF)

    def display_on(self) -> None:
        """Turn the panel on."""
        self._command(CMD_DISPLAY_ON)

    def fill_screen(self, color: int) -> None:
        """Fill the whole screen with one colour."""
        self.draw_fill_rect(0, 0, self.width - 1, self.height - 1, color)

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: int) -> None:
        """Draw a straight line between two points."""
        for x, y in line_points(_u16(x1), _u16(y1), _u16(x2), _u16(y2)):
            self.draw_pixel(x, y, color)

    def draw_rect(self, x1: int, y1: int, x2: int, y2: int, color: int) -> None:
        """Draw a rectangle outline."""
        self.draw_line(x1, y1, x2, y1, color)
        self.draw_line(x2, y1, x2, y2, color)
        self.draw_line(x2, y2, x1, y2, color)
        self.draw_line(x1, y2, x1, y1, color)

    def draw_rect_angle(self, xc: int, yc: int, w: int, h: int, angle: int, color: int) -> None:
        """Draw a rectangle outline centred on (xc, yc) turned by angle degrees."""
        p = rect_angle_corners(_u16(xc), _u16(yc), _u16(w), _u16(h), _u16(angle))
        for a, b in ((0, 1), (0, 2), (1, 3), (2, 3)):
            self.draw_line(p[a][0], p[a][1], p[b][0], p[b][1], color)

    def draw_triangle(self, xc: int, yc: int, w: int, h: int, angle: int, color: int) -> None:
        """Draw a triangle outline centred on (xc, yc) turned by angle degrees."""
        p = triangle_corners(_u16(xc), _u16(yc), _u16(w), _u16(h), _u16(angle))
        for a, b in ((0, 1), (0, 2), (1, 2)):
            self.draw_line(p[a][0], p[a][1], p[b][0], p[b][1], color)

    def draw_circle(self, x0: int, y0: int, r: int, color: int) -> None:
        """Draw a circle outline."""
        for x, y in circle_points(_u16(x0), _u16(y0), _u16(r)):
            self.draw_pixel(x, y, color)

    def draw_fill_circle(self, x0: int, y0: int, r: int, color: int) -> None:
        """Draw a filled circle."""
        for xa, ya, xb, yb in fill_circle_lines(_u16(x0), _u16(y0), _u16(r)):
            self.draw_line(xa, ya, xb, yb, color)

    def draw_round_rect(self, x1: int, y1: int, x2: int, y2: int, r: int, color: int) -> None:
        """Draw a rectangle outline with rounded corners; too small ones are skipped."""
        x1, y1, x2, y2, r = _u16(x1), _u16(y1), _u16(x2), _u16(y2), _u16(r)
        if x1 > x2:
            x1, x2 = x2, x1 & 0xFF
        if y1 > y2:
            y1, y2 = y2, y1 & 0xFF
        try:
            corners = round_rect_corner_points(x1, y1, x2, y2, r)
        except ValueError:
            return
        for x, y in corners:
            self.draw_pixel(x, y, color)
        self.draw_line(x1 + r, y1, x2 - r, y1, color)
        self.draw_line(x1 + r, y2, x2 - r, y2, color)
        self.draw_line(x1, y1 + r, x1, y2 - r, color)
        self.draw_line(x2, y1 + r, x2, y2 - r, color)

    def _arrow_head(self, x0: int, y0: int, x1: int, y1: int, w: int):
        (lx, ly), (rx, ry) = arrow_head(x0, y0, x1, y1, w)
        return (_u16(lx), _u16(ly)), (_u16(rx), _u16(ry))

    def draw_arrow(self, x0: int, y0: int, x1: int, y1: int, w: int, color: int) -> None:
        """Draw the outline of an arrow head pointing at (x1, y1)."""
        x0, y0, x1, y1, w = _u16(x0), _u16(y0), _u16(x1), _u16(y1), _u16(w)
        left, right = self._arrow_head(x0, y0, x1, y1, w)
        self.draw_line(x1, y1, left[0], left[1], color)
        self.draw_line(x1, y1, right[0], right[1], color)
        self.draw_line(left[0], left[1], right[0], right[1], color)

    def draw_fill_arrow(self, x0: int, y0: int, x1: int, y1: int, w: int, color: int) -> None:
        """Draw an arrow from (x0, y0) with a filled head at (x1, y1)."""
        x0, y0, x1, y1, w = _u16(x0), _u16(y0), _u16(x1), _u16(y1), _u16(w)
        left, right = self._arrow_head(x0, y0, x1, y1, w)
        self.draw_line(x0, y0, x1, y1, color)
        self.draw_line(x1, y1, left[0], left[1], color)
        self.draw_line(x1, y1, right[0], right[1], color)
        self.draw_line(left[0], left[1], right[0], right[1], color)
        for ww in range(w - 1, 0, -1):
            left, right = self._arrow_head(x0, y0, x1, y1, ww)
            self.draw_line(x1, y1, left[0], left[1], color)
            self.draw_line(x1, y1, right[0], right[1], color)

    def draw_char(self, fonts: FontxSet, x: int, y: int, code: int, color: int) -> int:
        """Draw one character; return the position for the next one, or 0 on failure."""
        try:
            glyph = fonts.get_glyph(code & 0xFF)
        except FontxError:
            return 0
        pw, ph, data = glyph.width, glyph.height, glyph.data
        x, y = _u16(x), _u16(y)
        direction = self.font_direction
        xd1 = yd1 = xd2 = yd2 = 0
        xss = yss = xsd = ysd = nxt = 0
        x0 = x1 = y0 = y1 = 0
        if direction == 0:
            xd1, yd1 = 1, 1
            xss, yss = x, _u16(y - (ph - 1))
            xsd = 1
            nxt = _i16(x + pw)
            x0, y0, x1, y1 = x, y - (ph - 1), x + (pw - 1), y
        elif direction == 2:
            xd1, yd1 = -1, -1
            xss, yss = x, _u16(y + ph + 1)
            xsd = 1
            nxt = _i16(x - pw)
            x0, y0, x1, y1 = x - (pw - 1), y, x, y + (ph - 1)
        elif direction == 1:
            xd2, yd2 = -1, 1
            xss, yss = _u16(x + ph), y
            ysd = 1
            nxt = _i16(y + pw)
            x0, y0, x1, y1 = x, y, x + (ph - 1), y + (pw - 1)
        elif direction == 3:
            xd2, yd2 = 1, -1
            xss, yss = _u16(x - (ph - 1)), y
            ysd = 1
            nxt = _i16(y - pw)
            x0, y0, x1, y1 = x - (ph - 1), y - (pw - 1), x, y

        if self.font_fill:
            self.draw_fill_rect(x0, y0, x1, y1, self.font_fill_color)

        ofs = 0
        xx, yy = xss, yss
        for h in range(ph):
            if xsd:
                xx = xss
            if ysd:
                yy = yss
            bits = pw
            underline = self.font_underline and h >= ph - 2
            for _ in range((pw + 4) // 8):
                byte = data[ofs] if ofs < len(data) else 0
                mask = 0x80
                for _bit in range(8):
                    bits -= 1
                    if bits < 0:
                        continue
                    if byte & mask:
                        self.draw_pixel(xx, yy, color)
                    if underline:
                        self.draw_pixel(xx, yy, self.font_underline_color)
                    xx = _u16(xx + xd1)
                    yy = _u16(yy + yd2)
                    mask >>= 1
                ofs += 1
            yy = _u16(yy + yd1)
            xx = _u16(xx + xd2)
        return max(nxt, 0)

    def _advance(self, fonts: FontxSet, x: int, y: int, code: int, color: int) -> Tuple[int, int]:
        direction = self.font_direction
        if direction in (0, 2):
            x = _u16(self.draw_char(fonts, x, y, code, color))
        elif direction in (1, 3):
            y = _u16(self.draw_char(fonts, x, y, code, color))
        return x, y

    def _result(self, x: int, y: int) -> int:
        if self.font_direction in (0, 2):
            return x
        if self.font_direction in (1, 3):
            return y
        return 0

    def draw_string(
        self, fonts: FontxSet, x: int, y: int, text: Union[str, bytes], color: int
    ) -> int:
        """Draw a string up to its first NUL; return the position after it."""
        raw = text.encode("latin-1") if isinstance(text, str) else bytes(text)
        raw = raw.split(b"\0", 1)[0]
        x, y = _u16(x), _u16(y)
        for code in raw:
            x, y = self._advance(fonts, x, y, code, color)
        return self._result(x, y)

    def draw_code(self, fonts: FontxSet, x: int, y: int, code: int, color: int) -> int:
        """Draw a single character code; return the position after it."""
        x, y = self._advance(fonts, _u16(x), _u16(y), code, color)
        return self._result(x, y)

    def set_font_direction(self, direction: int) -> None:
        """Choose the direction in which text runs."""
        self.font_direction = int(direction) & 0xFFFF

    def set_font_fill(self, color: int) -> None:
        """Fill the box behind each character with a colour."""
        self.font_fill = True
        self.font_fill_color = color

    def unset_font_fill(self) -> None:
        """Stop filling behind characters."""
        self.font_fill = False

    def set_font_underline(self, color: int) -> None:
        """Underline characters in a colour."""
        self.font_underline = True
        self.font_underline_color = color

    def unset_font_underline(self) -> None:
        """Stop underlining characters."""
        self.font_underline = False

    def backlight_off(self) -> None:
        """Switch the backlight off."""
        self.transport.set_backlight(False)

    def backlight_on(self) -> None:
        """Switch the backlight on."""
        self.transport.set_backlight(True)

    def inversion_off(self) -> None:
        """Turn colour inversion off."""
        self._command(CMD_INVERSION_OFF)

    def inversion_on(self) -> None:
        """Turn colour inversion on."""
        self._command(CMD_INVERSION_ON)