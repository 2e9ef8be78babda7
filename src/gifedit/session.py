"""Editing session owning one timeline and its loop count."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from PIL import Image

from .config import DEFAULT_CODEC_CONFIG, CodecConfig
from .decoder import GifDecoder
from .encoder import GifEncoder
from .frames import Frame, GIFRepresentation
from .timeline import Timeline

logger = logging.getLogger(__name__)


class EditingSession:
    """A single editing session.

    The session is the only owner of its timeline. Saving and exporting
    encode a snapshot, so the encode may run elsewhere while editing goes
    on. A failed open or save leaves the timeline and loop count as they
    were.
    """

    def __init__(self, config: CodecConfig | None = None) -> None:
        self.config = config or DEFAULT_CODEC_CONFIG
        self.timeline = Timeline()
        self.loops = self.config.default_loops
        self._decoder = GifDecoder(self.config)
        self._encoder = GifEncoder(self.config)

    @classmethod
    def from_representation(
        cls, representation: GIFRepresentation, config: CodecConfig | None = None
    ) -> EditingSession:
        session = cls(config)
        session.load(representation)
        return session

    def load(self, representation: GIFRepresentation) -> None:
        self.timeline = Timeline.from_frames(representation.frames)
        self.loops = representation.loops

    def open(self, data: bytes) -> None:
        """Replace the session contents with a decoded animation.

        Raises:
            DecodeError: If the bytes are not an animation; state is unchanged
        """
        representation = self._decoder.decode(data)
        self.load(representation)
        logger.info(f"Opened animation with {len(self.timeline)} frames, loops={self.loops}")

    def add_images(self, images: Iterable[Image.Image], index: int | None = None) -> None:
        """Insert still images as frames with the default duration."""
        frames = [
            Frame(bitmap=image, duration=self.config.default_frame_duration)
            for image in images
        ]
        if index is None:
            index = len(self.timeline)
        self.timeline.insert_external(frames, index)

    def to_representation(self) -> GIFRepresentation:
        return GIFRepresentation(frames=self.timeline.snapshot(), loops=self.loops)

    def export(self) -> bytes:
        """Encode a snapshot of the timeline to GIF bytes."""
        return self._encoder.encode(self.timeline.snapshot(), self.loops)

    def save(self, path: Path) -> Path:
        """Encode a snapshot of the timeline and write it to ``path``."""
        return self._encoder.encode_and_save(self.timeline.snapshot(), path, self.loops)
