import pytest
from PIL import Image

from st7789kit.decode_jpeg import DecodedImage, JpegError, decode_jpeg, jpeg_scale


def save_jpeg(path, size, color=(255, 0, 0), **kwargs):
    Image.new("RGB", size, color).save(path, "JPEG", quality=95, **kwargs)
    return path


@pytest.mark.parametrize(
    "screen,image,expected",
    [
        ((240, 240), (240, 240), 0),
        ((240, 240), (100, 50), 0),
        ((100, 100), (200, 100), 1),
        ((100, 100), (100, 400), 2),
        ((100, 100), (401, 100), 3),
    ],
)
def test_jpeg_scale(screen, image, expected):
    assert jpeg_scale(*screen, *image) == expected


def test_scale_never_exceeds_three():
    assert jpeg_scale(10, 10, 65535, 65535) == 3


def test_decode_small_image_fits_without_scaling(tmp_path):
    path = save_jpeg(tmp_path / "red.jpg", (16, 16))
    result = decode_jpeg(path, 32, 32)
    assert isinstance(result, DecodedImage)
    assert (result.width, result.height, result.scale) == (16, 16, 0)
    assert len(result.pixels) == 32
    assert all(len(row) == 32 for row in result.pixels)
    pixel = result.pixels[8][8]
    assert pixel >> 11 >= 28
    assert (pixel >> 5) & 0x3F <= 4
    assert pixel & 0x1F <= 3
    assert result.pixels[20][20] == 0


def test_decode_large_image_is_descaled(tmp_path):
    path = save_jpeg(tmp_path / "wide.jpg", (64, 32), color=(0, 0, 255))
    result = decode_jpeg(path, 32, 32)
    assert result.scale == 1
    assert (result.width, result.height) == (32, 16)
    assert result.pixels[5][30] & 0x1F >= 28
    assert result.pixels[30][5] == 0


def test_missing_file(tmp_path):
    with pytest.raises(JpegError, match="not found"):
        decode_jpeg(tmp_path / "missing.jpg", 10, 10)


def test_not_a_jpeg(tmp_path):
    path = tmp_path / "image.jpg"
    Image.new("RGB", (4, 4)).save(path, "PNG")
    with pytest.raises(JpegError):
        decode_jpeg(path, 10, 10)


def test_garbage_file(tmp_path):
    path = tmp_path / "junk.jpg"
    path.write_bytes(b"this is not an image at all")
    with pytest.raises(JpegError):
        decode_jpeg(path, 10, 10)


def test_progressive_jpeg_is_rejected(tmp_path):
    path = save_jpeg(tmp_path / "prog.jpg", (16, 16), progressive=True)
    with pytest.raises(JpegError, match="progressive"):
        decode_jpeg(path, 32, 32)