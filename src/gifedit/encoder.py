"""Encode a frame sequence into animated GIF bytes.

Frames without a bitmap are skipped. The first bitmap-carrying frame sets
the canvas size; frames of another size are scaled to fit and padded with
transparency. Delays are stored in the GIF's 10 ms resolution and are
limited to what a 16-bit centisecond field holds (655.35 s).

Boundary: a sequence with no bitmap-carrying frames (for example a
placeholder-only timeline) cannot form a GIF and raises FinalizationFailed.

Every retained frame is written as its own image block, including a frame
identical to the one before it, so decoding the output yields exactly one
frame per retained input frame.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

import numpy as np
from PIL import GifImagePlugin, Image, ImageOps

from .config import DEFAULT_CODEC_CONFIG, CodecConfig
from .error_handling import (
    AllocationFailed,
    ErrorLevel,
    FinalizationFailed,
    WriteFailed,
    error_context,
    log_warning_with_context,
)
from .frames import Frame
from .io import atomic_write, open_image

logger = logging.getLogger(__name__)

# GIF delays are stored in centiseconds in an unsigned 16-bit field
MIN_DELAY_MS = 10
MAX_DELAY_MS = 655350

# Palette slot reserved for transparent pixels
TRANSPARENT_INDEX = 255
ALPHA_THRESHOLD = 128

# Restore to background, so transparent areas do not show the previous frame
DISPOSE_TO_BACKGROUND = 2


def delay_ms(seconds: float) -> int:
    """Convert a frame duration in seconds to a GIF delay in milliseconds.

    The result is clamped to the range a GIF can store, 10 ms to 655350 ms.
    """
    return min(MAX_DELAY_MS, max(MIN_DELAY_MS, int(round(seconds * 1000))))


def _palettize(image: Image.Image) -> tuple[Image.Image, bool]:
    """Quantize to a 256-colour palette image; return it and whether it has transparency."""
    rgba = image.convert("RGBA")
    transparent = np.asarray(rgba.getchannel("A")) < ALPHA_THRESHOLD

    if not transparent.any():
        return rgba.convert("RGB").quantize(colors=256), False

    quantized = rgba.convert("RGB").quantize(colors=TRANSPARENT_INDEX)
    indices = np.array(quantized, dtype=np.uint8)
    indices[transparent] = TRANSPARENT_INDEX

    palette = (quantized.getpalette() or [])[: TRANSPARENT_INDEX * 3]
    palette += [0] * (256 * 3 - len(palette))

    paletted = Image.fromarray(indices)
    paletted.putpalette(palette)
    return paletted, True


def _to_destination(
    bitmap: Image.Image, canvas_size: tuple[int, int]
) -> tuple[Image.Image, bool]:
    image = bitmap
    if image.size != canvas_size:
        image = ImageOps.pad(image.convert("RGBA"), canvas_size)
    return _palettize(image)


def _write_gif(
    fp: BinaryIO,
    images: list[tuple[Image.Image, bool]],
    durations: list[int],
    loops: int,
) -> None:
    # Pillow's save_all drops frames equal to their predecessor, so each
    # frame block is written here with the plugin's header/data helpers.
    disposal = DISPOSE_TO_BACKGROUND if any(t for _, t in images) else 0

    header, _ = GifImagePlugin.getheader(images[0][0], info={"loop": loops})
    for block in header:
        fp.write(block)

    for position, ((image, transparent), delay) in enumerate(zip(images, durations)):
        params: dict = {"duration": delay, "disposal": disposal}
        if transparent:
            params["transparency"] = TRANSPARENT_INDEX
        if position:
            params["include_color_table"] = True
        for block in GifImagePlugin.getdata(image, **params):
            fp.write(block)

    fp.write(b";")


class GifEncoder:
    """Builds animated GIF containers from frames."""

    def __init__(self, config: CodecConfig | None = None) -> None:
        self.config = config or DEFAULT_CODEC_CONFIG

    def encode(self, frames: Iterable[Frame], loops: int | None = None) -> bytes:
        """Encode frames into GIF bytes.

        Args:
            frames: Timeline or iterable of frames, in display order
            loops: Loop count for the whole container (0 = forever), or None
                for the configured default

        Returns:
            Bytes of a finalized GIF with one image per bitmap-carrying frame

        Raises:
            ValueError: If loops is negative
            AllocationFailed: If a frame bitmap cannot be converted
            FinalizationFailed: If there is nothing to encode or the container
                cannot be written
        """
        if loops is None:
            loops = self.config.default_loops
        if loops < 0:
            raise ValueError(f"loops must be non-negative, got {loops}")

        retained = [frame for frame in frames if frame.bitmap is not None]
        if not retained:
            message = "No frames with an image to encode; a GIF needs at least one frame"
            logger.error(f"🚨 {message}")
            raise FinalizationFailed(message, context={"loops": loops})

        context = {"frame_count": len(retained), "loops": loops}

        with error_context(
            "convert frames for GIF", AllocationFailed, ErrorLevel.ERROR, context, logger
        ):
            canvas_size = retained[0].bitmap.size
            images = [_to_destination(frame.bitmap, canvas_size) for frame in retained]

        durations = [delay_ms(frame.duration) for frame in retained]
        clamped = [
            index
            for index, frame in enumerate(retained)
            if frame.duration * 1000 > MAX_DELAY_MS
        ]
        if clamped:
            log_warning_with_context(
                f"{len(clamped)} frame(s) longer than {MAX_DELAY_MS / 1000:.2f}s "
                "are shortened to the GIF maximum",
                context={**context, "frames": clamped},
                logger=logger,
            )

        buffer = io.BytesIO()
        with error_context(
            "finalize GIF", FinalizationFailed, ErrorLevel.ERROR, context, logger
        ):
            _write_gif(buffer, images, durations, loops)
            data = buffer.getvalue()
            self._verify(data, len(images))

        logger.debug(f"Encoded {len(images)} frames ({len(data)} bytes), loops={loops}")
        return data

    def encode_to_image(self, frames: Iterable[Frame], loops: int | None = None) -> Image.Image:
        """Encode frames and open the result as a Pillow image."""
        return open_image(self.encode(frames, loops))

    def encode_and_save(
        self, frames: Iterable[Frame], path: Path, loops: int | None = None
    ) -> Path:
        """Encode frames and write them atomically to ``path``.

        Raises:
            WriteFailed: If the bytes cannot be written; the destination is
                left untouched
        """
        data = self.encode(frames, loops)
        path = Path(path)

        with error_context(
            "write GIF", WriteFailed, ErrorLevel.ERROR, {"path": str(path)}, logger
        ):
            with atomic_write(path) as f:
                f.write(data)

        logger.info(f"Saved GIF to {path}")
        return path

    @staticmethod
    def _verify(data: bytes, expected_frames: int) -> None:
        with open_image(data) as img:
            if img.format != "GIF":
                raise ValueError(f"encoder produced {img.format} instead of GIF")
            frame_count = getattr(img, "n_frames", 0)
            if frame_count != expected_frames:
                raise ValueError(
                    f"encoded GIF holds {frame_count} frames, expected {expected_frames}"
                )


def encode(
    frames: Iterable[Frame], loops: int | None = None, config: CodecConfig | None = None
) -> bytes:
    """Encode frames into GIF bytes. See GifEncoder.encode."""
    return GifEncoder(config).encode(frames, loops)


def encode_to_image(
    frames: Iterable[Frame], loops: int | None = None, config: CodecConfig | None = None
) -> Image.Image:
    """Encode frames and return the GIF as a Pillow image."""
    return GifEncoder(config).encode_to_image(frames, loops)


def encode_and_save(
    frames: Iterable[Frame],
    path: Path,
    loops: int | None = None,
    config: CodecConfig | None = None,
) -> Path:
    """Encode frames and write the GIF to ``path``."""
    return GifEncoder(config).encode_and_save(frames, path, loops)
