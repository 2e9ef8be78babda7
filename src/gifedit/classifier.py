"""Cheap check for whether an image is a real multi-frame animation.

The check only looks at metadata Pillow exposes after opening the file; it
never decodes the frames. It is a heuristic with known false negatives:

- a well-formed single-frame GIF is not animated;
- an animation without a loop extension (no NETSCAPE2.0 block) is not
  recognised, because its loop count cannot be read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from .io import open_image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnimationMetadata:
    """Animation properties readable without decoding every frame."""

    frame_count: int
    loops: int
    duration: float  # seconds, for the currently selected frame


def read_animation_metadata(image: Image.Image) -> AnimationMetadata | None:
    """Read frame count, loop count and current-frame duration.

    Args:
        image: Open Pillow image

    Returns:
        AnimationMetadata when all three properties are readable, None otherwise
    """
    try:
        frame_count = getattr(image, "n_frames", None)
    except (OSError, EOFError, SyntaxError, ValueError) as e:
        logger.debug(f"Could not count frames: {e}")
        return None

    loops = image.info.get("loop")
    duration_ms = image.info.get("duration")

    if not isinstance(frame_count, int) or not isinstance(loops, int):
        return None
    if not isinstance(duration_ms, (int, float)):
        return None

    return AnimationMetadata(
        frame_count=frame_count,
        loops=loops,
        duration=duration_ms / 1000.0,
    )


def is_animated(image: bytes | Image.Image) -> bool:
    """Return True if ``image`` exposes animation metadata and has more than one frame.

    Args:
        image: Raw image bytes or an open Pillow image

    Returns:
        Whether the input looks like a genuine multi-frame animation
    """
    if isinstance(image, (bytes, bytearray, memoryview)):
        try:
            with open_image(bytes(image)) as img:
                metadata = read_animation_metadata(img)
        except (UnidentifiedImageError, OSError) as e:
            logger.debug(f"Input is not a readable image: {e}")
            return False
    else:
        metadata = read_animation_metadata(image)

    # Loops, duration and several frames: treat it as an animation
    return metadata is not None and metadata.frame_count > 1
