"""Decode animated GIF bytes into frames with per-frame timing."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .classifier import read_animation_metadata
from .config import DEFAULT_CODEC_CONFIG, CodecConfig
from .error_handling import (
    DecodeError,
    ErrorLevel,
    MissingAnimationMetadata,
    error_context,
)
from .frames import Frame, GIFRepresentation
from .io import open_image, read_bytes

logger = logging.getLogger(__name__)

MISSING_METADATA_MESSAGE = (
    "Could not load gif. The file does not contain the metadata required for a gif."
)


class GifDecoder:
    """Turns an animated image buffer into a GIFRepresentation."""

    def __init__(self, config: CodecConfig | None = None) -> None:
        self.config = config or DEFAULT_CODEC_CONFIG

    def decode(self, data: bytes) -> GIFRepresentation:
        """Decode every frame of an animated image.

        Args:
            data: Bytes believed to contain an animated image

        Returns:
            GIFRepresentation with one frame per source frame and the source loop count

        Raises:
            MissingAnimationMetadata: If frame count, loop count or frame
                duration cannot be read
            DecodeError: If a frame fails to decode
        """
        try:
            img = open_image(data)
        except (UnidentifiedImageError, OSError) as e:
            logger.error(f"🚨 {MISSING_METADATA_MESSAGE} ({e})")
            raise MissingAnimationMetadata(MISSING_METADATA_MESSAGE, cause=e) from e

        with img:
            metadata = read_animation_metadata(img)
            if metadata is None:
                logger.error(f"🚨 {MISSING_METADATA_MESSAGE}")
                raise MissingAnimationMetadata(
                    MISSING_METADATA_MESSAGE,
                    context={"format": img.format, "size": img.size},
                )

            with error_context(
                "decode GIF frames",
                DecodeError,
                ErrorLevel.ERROR,
                context={"frame_count": metadata.frame_count},
                logger=logger,
            ):
                frames = [
                    self._extract_frame(img, index)
                    for index in range(metadata.frame_count)
                ]

        logger.debug(
            f"Decoded {len(frames)} frames, loops={metadata.loops}"
        )
        return GIFRepresentation(frames=frames, loops=metadata.loops)

    def _extract_frame(self, img: Image.Image, index: int) -> Frame:
        # Seeking moves the shared cursor, so copy the frame out before the next seek
        img.seek(index)
        bitmap = img.convert("RGBA")

        duration_ms = img.info.get("duration")
        if isinstance(duration_ms, (int, float)) and duration_ms > 0:
            duration = duration_ms / 1000.0
        else:
            duration = self.config.default_frame_duration

        return Frame(bitmap=bitmap, duration=duration)


def decode(data: bytes, config: CodecConfig | None = None) -> GIFRepresentation:
    """Decode animated image bytes. See GifDecoder.decode."""
    return GifDecoder(config).decode(data)


def decode_file(path: Path, config: CodecConfig | None = None) -> GIFRepresentation:
    """Read and decode an animated image file."""
    return decode(read_bytes(path), config)
