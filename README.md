# st7789kit

Pure-Python building blocks for driving an ST7789 TFT panel and an MPU6050
motion sensor. The package has no hardware access of its own: the display
driver talks to any transport object you supply, and a `FrameBuffer`
transport is included that interprets the controller commands into memory,
so drawing can run and be tested on a desktop.

## What is inside

- `st7789kit.colors` – `rgb565(r, g, b)` colour packing and named RGB565
  colours (`RED`, `GREEN`, `BLUE`, `BLACK`, `WHITE`, `GRAY`, `YELLOW`,
  `CYAN`, `PURPLE`).
- `st7789kit.fontx` – reading FONTX bitmap font files (`FontxFile`,
  `FontxSet`, `Glyph`) and glyph bitmap helpers: `font_to_bitmap`,
  `underline_bitmap`, `reverse_bitmap`, `render_font`, `render_bitmap`,
  `rotate_byte`.
- `st7789kit.bmp` – parsing the file and DIB headers of BMP files with
  `parse_bmp` / `load_bmp`, returning a `BmpFile` with the whole file data.
- `st7789kit.decode_jpeg` – `decode_jpeg(path, width, height)` returning a
  `DecodedImage` of screen-sized RGB565 rows, descaled by 1/2, 1/4 or 1/8 as
  chosen by `jpeg_scale`. Progressive JPEGs are refused with `JpegError`.
- `st7789kit.decode_png` – `ScreenImage`, a callback target (`on_init`,
  `on_draw`, `on_done`) that scales decoded pixels down to the screen and
  stores them as RGB565.
- `st7789kit.shapes` – pixel geometry for lines, circles, filled circles,
  rounded rectangle corners, rotated rectangles, triangles and arrow heads.
- `st7789kit.st7789` – the `ST7789` driver: pixels, pixel runs, filled and
  outlined rectangles, shapes, text in four directions (`Direction`) with
  fill and underline, backlight and inversion; plus the `FrameBuffer`
  in-memory transport.
- `st7789kit.mpu6050` – the `Mpu6050` accelerometer/gyroscope over a bus
  object you supply, with `AccelRange`, `GyroRange` and a
  `ComplementaryFilter` for roll and pitch.

## Installing

```
pip install .
```

## Drawing into memory

```python
from st7789kit.colors import rgb565
from st7789kit.st7789 import ST7789, FrameBuffer

panel = FrameBuffer(240, 240)
lcd = ST7789(panel, 240, 240, 0, 0)
lcd.init()
lcd.fill_screen(0x0000)
lcd.draw_circle(120, 120, 50, rgb565(0, 255, 255))
print(hex(panel.pixel(120, 70)))  # 0x7ff
```

A transport for real hardware needs four methods: `command(cmd)`,
`data(payload)`, `set_backlight(on)` and `delay(ms)`.

## Text with FONTX fonts

```python
from st7789kit.fontx import FontxSet

with FontxSet("ILGH16XB.FNT", "") as fonts:
    lcd.draw_string(fonts, 0, 15, "ST7789", 0xFFFF)
```

`draw_string` and `draw_code` return the position where the next character
would go; `draw_char` returns 0 when no glyph could be read.

## Showing a JPEG

```python
from st7789kit.decode_jpeg import decode_jpeg

image = decode_jpeg("photo.jpeg", 240, 240)
for y in range(min(image.height, 240)):
    lcd.draw_multi_pixels(0, y, image.pixels[y][: min(image.width, 240)])
```

## Reading the MPU6050

```python
from st7789kit.mpu6050 import AccelRange, GyroRange, Mpu6050, ComplementaryFilter

sensor = Mpu6050(bus, 0x68)  # bus has read_registers / write_registers
sensor.configure(AccelRange.FS_4G, GyroRange.FS_500DPS)
sensor.wake_up()
angle = ComplementaryFilter().update(sensor.accel(), sensor.gyro())
```

The bus object needs `read_registers(address, register, length)` returning
bytes and `write_registers(address, register, data)`. Failed transfers are
raised as `Mpu6050Error`.

## What the package does not do

- It does not decode PNG files. `ScreenImage` only collects pixels handed to
  its callbacks; the PNG decoder that calls them must come from elsewhere.
- It has no SPI, GPIO or I2C access. The display and the sensor work only
  through transport and bus objects you provide.
- It has no command-line program.

Errors are raised as `FontxError`, `BmpError`, `JpegError` and
`Mpu6050Error` by their modules.

## Running the tests

```
pip install .[test]
pytest
```