import pytest

from huewake.utils import WHITE_POINT, clamp, interpolate, rgb_to_xy, xy_to_rgb


def test_clamp():
    assert clamp(-10, -6, 15) == -6
    assert clamp(20, -6, 15) == 15
    assert clamp(3.5, -6, 15) == 3.5


def test_interpolate():
    assert interpolate(0, 0, 255) == 0
    assert interpolate(1, 0, 255) == 255
    assert interpolate(0.5, 255, 0) == 127.5


def test_rgb_to_xy():
    assert rgb_to_xy(0, 0, 0) == WHITE_POINT
    red_x, red_y = rgb_to_xy(255, 0, 0)
    blue_x, blue_y = rgb_to_xy(0, 0, 255)
    assert red_x > 0.6
    assert blue_y < 0.1


@pytest.mark.parametrize(
    "rgb", [(255, 0, 0), (0, 0, 255), (255, 200, 200), (50, 50, 255), (194, 0, 61)]
)
def test_xy_to_rgb_keeps_hue(rgb):
    restored = xy_to_rgb(*rgb_to_xy(*rgb), bri=255)
    brightest = max(rgb)
    assert restored.index(max(restored)) == rgb.index(brightest)
    for expected, got in zip(rgb, restored):
        assert abs(expected * 255 / brightest - got) <= 10
