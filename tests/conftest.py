import io
import logging

import numpy as np
import pytest
from PIL import Image

from gifedit.frames import Frame

# Colours far enough apart to survive palette quantisation unchanged
PALETTE = [
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 255, 0),
    (0, 255, 255),
    (255, 0, 255),
    (255, 255, 255),
    (0, 0, 0),
]


def make_bitmap(index: int, size: tuple[int, int] = (16, 16)) -> Image.Image:
    """Create a solid-colour RGB bitmap; different *index* gives a different colour."""
    colour = PALETTE[index % len(PALETTE)]
    pixels = np.zeros((size[1], size[0], 3), dtype=np.uint8)
    pixels[:, :] = colour
    return Image.fromarray(pixels, "RGB")


def make_gif_bytes(
    frame_count: int,
    durations_ms: list[int] | int | None = 100,
    loop: int | None = 0,
    size: tuple[int, int] = (16, 16),
) -> bytes:
    """Write a small GIF with Pillow directly, bypassing the encoder under test."""
    images = [make_bitmap(i, size) for i in range(frame_count)]
    params: dict = {"format": "GIF", "save_all": True, "append_images": images[1:]}
    if durations_ms is not None:
        params["duration"] = durations_ms
    if loop is not None:
        params["loop"] = loop

    buffer = io.BytesIO()
    images[0].save(buffer, **params)
    return buffer.getvalue()


@pytest.fixture
def bitmap_factory():
    return make_bitmap


@pytest.fixture
def gif_factory():
    return make_gif_bytes


@pytest.fixture
def three_frame_gif() -> bytes:
    """Three distinct frames, 100/200/300 ms, looping forever."""
    return make_gif_bytes(3, durations_ms=[100, 200, 300], loop=0)


@pytest.fixture
def single_frame_gif() -> bytes:
    return make_gif_bytes(1, durations_ms=100, loop=0)


@pytest.fixture
def frames() -> list[Frame]:
    """Four distinct frames with durations 0.1, 0.2, 0.3, 0.4 seconds."""
    return [Frame(bitmap=make_bitmap(i), duration=0.1 * (i + 1)) for i in range(4)]


@pytest.fixture
def palette() -> list[tuple[int, int, int]]:
    return PALETTE


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
