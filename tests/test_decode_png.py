from st7789kit.colors import rgb565
from st7789kit.decode_png import ScreenImage


def test_small_image_is_not_reduced():
    image = ScreenImage(240, 240)
    image.on_init(100, 80)
    assert image.reduction is False
    assert image.scale_factor == 1.0
    assert (image.image_width, image.image_height) == (100, 80)


def test_large_image_is_reduced_keeping_aspect():
    image = ScreenImage(100, 50)
    image.on_init(200, 200)
    assert image.reduction is True
    assert image.image_width <= image.screen_width
    assert image.image_height <= image.screen_height
    assert image.image_width == image.image_height
    assert image.image_height == 50


def test_draw_stores_rgb565():
    image = ScreenImage(10, 10)
    image.on_init(10, 10)
    image.on_draw(3, 4, 1, 1, (200, 100, 50, 255))
    assert image.pixels[4][3] == rgb565(200, 100, 50)
    assert image.pixels[0][0] == 0


def test_draw_outside_screen_is_ignored():
    image = ScreenImage(4, 4)
    image.on_init(4, 4)
    image.on_draw(4, 0, 1, 1, (255, 255, 255, 255))
    image.on_draw(0, 9, 1, 1, (255, 255, 255, 255))
    assert all(value == 0 for row in image.pixels for value in row)


def test_draw_maps_through_scale_factor():
    image = ScreenImage(10, 10)
    image.on_init(20, 20)
    image.on_draw(19, 19, 1, 1, (255, 0, 0, 255))
    assert image.pixels[9][9] == rgb565(255, 0, 0)


def test_done_flag():
    image = ScreenImage(2, 2)
    image.on_init(2, 2)
    assert image.done is False
    image.on_done()
    assert image.done is True