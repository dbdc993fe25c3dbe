import pytest
from PIL import Image

from focushub.gif_handler import (
    GifError,
    GifHandler,
    fit_size,
    get_gif_dimensions,
    load_gif,
)

RED = (255, 0, 0)
BLUE = (0, 0, 255)
GREEN = (0, 255, 0)


def _write_gif(path, images, durations):
    images[0].save(
        path, save_all=True, append_images=images[1:], duration=durations, loop=0
    )
    return path


@pytest.fixture
def two_frame_gif(tmp_path):
    frames = [Image.new("RGB", (4, 3), RED), Image.new("RGB", (4, 3), BLUE)]
    return _write_gif(tmp_path / "anim.gif", frames, [100, 200])


def test_dimensions(two_frame_gif):
    assert get_gif_dimensions(two_frame_gif) == (4, 3)


def test_load_frames_and_delays(two_frame_gif):
    gif = load_gif(two_frame_gif)
    assert gif.size == (4, 3)
    assert len(gif.frames) == 2
    assert gif.delays == [pytest.approx(0.1), pytest.approx(0.2)]
    assert gif.frames[0].mode == "RGBA"
    assert gif.frames[0].getpixel((0, 0)) == RED + (255,)
    assert gif.frames[1].getpixel((3, 2)) == BLUE + (255,)


def test_partial_frame_is_composited(tmp_path):
    first = Image.new("RGB", (5, 5), RED)
    second = first.copy()
    second.putpixel((2, 2), GREEN)
    path = _write_gif(tmp_path / "delta.gif", [first, second], [50, 50])
    gif = load_gif(path)
    assert gif.frames[1].getpixel((2, 2)) == GREEN + (255,)
    assert gif.frames[1].getpixel((0, 0)) == RED + (255,)
    assert gif.frames[1].getpixel((4, 4)) == RED + (255,)


def test_interlaced_rows_land_in_place(tmp_path):
    image = Image.new("RGB", (3, 10))
    for y in range(10):
        for x in range(3):
            image.putpixel((x, y), (y * 20, 0, 0))
    path = tmp_path / "rows.gif"
    image.save(path, interlace=True)
    gif = load_gif(path)
    assert [gif.frames[0].getpixel((1, y))[0] for y in range(10)] == [y * 20 for y in range(10)]


def test_not_a_gif(tmp_path):
    path = tmp_path / "bad.gif"
    path.write_bytes(b"PNG not a gif at all")
    with pytest.raises(GifError):
        load_gif(path)
    with pytest.raises(GifError):
        get_gif_dimensions(path)


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_gif(tmp_path / "missing.gif")


def test_handler_load_failure_keeps_state(tmp_path):
    handler = GifHandler()
    assert handler.load_from_path(tmp_path / "missing.gif") is False
    assert handler.current_frame_image() is None
    assert handler.get_path_string() is None


def test_handler_load_and_tick(two_frame_gif):
    handler = GifHandler(last_frame_time=0.0)
    assert handler.load_from_path(two_frame_gif) is True
    assert handler.gif_load_id == 1
    assert handler.get_path_string() == str(two_frame_gif)
    handler.tick(now=0.05)
    assert handler.current_frame == 0
    handler.tick(now=0.1)
    assert handler.current_frame == 1
    assert handler.current_frame_image().getpixel((0, 0)) == BLUE + (255,)
    handler.tick(now=0.2)
    assert handler.current_frame == 1
    handler.tick(now=0.3)
    assert handler.current_frame == 0


def test_fit_size_keeps_aspect_ratio():
    width, height = fit_size((100, 50), (200, 200))
    assert width / height == pytest.approx(2.0)
    assert width == pytest.approx(200)


def test_fit_size_zero_height():
    assert fit_size((10, 0), (100, 100)) is None