"""ST7789 display driving, FONTX fonts, BMP/JPEG loading, PNG pixel collection and MPU6050 helpers."""

__version__ = "0.1.0"

__all__ = [
    "colors",
    "fontx",
    "bmp",
    "mpu6050",
    "decode_png",
    "decode_jpeg",
    "shapes",
    "st7789",
]