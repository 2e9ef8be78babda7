"""Stamp a text label onto frame bitmaps."""

from __future__ import annotations

import logging

from PIL import Image, ImageDraw, ImageFont

from .config import DEFAULT_CODEC_CONFIG, CodecConfig
from .error_handling import log_warning_with_context
from .frames import Frame
from .timeline import Timeline

logger = logging.getLogger(__name__)

TEXT_FILL = (255, 255, 255, 255)
STROKE_FILL = (0, 0, 0, 255)
STROKE_WIDTH = 1


def _load_font(config: CodecConfig) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    try:
        return ImageFont.truetype(config.watermark_font, config.watermark_font_size)
    except OSError:
        logger.debug(
            f"Font {config.watermark_font!r} not available, using Pillow's default font"
        )
        return ImageFont.load_default(size=config.watermark_font_size)


def stamp(
    images: list[Image.Image], text: str, config: CodecConfig | None = None
) -> list[Image.Image]:
    """Draw ``text`` near the top-left corner of every image.

    Each image is drawn onto a new RGBA copy; the inputs are not modified.
    An image that cannot be stamped is passed through unchanged, so the
    result always has the same length and order as ``images``.

    Args:
        images: Bitmaps to stamp
        text: Label to draw
        config: Font and placement settings

    Returns:
        Stamped bitmaps
    """
    config = config or DEFAULT_CODEC_CONFIG
    font = _load_font(config)

    stamped: list[Image.Image] = []
    for index, image in enumerate(images):
        try:
            canvas = image.convert("RGBA")
            draw = ImageDraw.Draw(canvas)
            draw.text(
                config.watermark_origin,
                text,
                font=font,
                fill=TEXT_FILL,
                stroke_width=STROKE_WIDTH,
                stroke_fill=STROKE_FILL,
            )
        except (OSError, ValueError, MemoryError) as e:
            log_warning_with_context(
                f"Could not stamp image, keeping it unstamped: {e}",
                context={"index": index},
                logger=logger,
            )
            stamped.append(image)
            continue
        stamped.append(canvas)

    return stamped


def stamp_timeline(
    timeline: Timeline, text: str, config: CodecConfig | None = None
) -> Timeline:
    """Return a new timeline with stamped bitmaps and the same durations."""
    frames = list(timeline)
    bitmaps = [frame.bitmap for frame in frames if frame.bitmap is not None]
    stamped = iter(stamp(bitmaps, text, config))

    return Timeline(
        Frame(bitmap=next(stamped), duration=frame.duration)
        if frame.bitmap is not None
        else Frame(duration=frame.duration)
        for frame in frames
    )
