"""Frame and GIF representation data types."""

from __future__ import annotations

from dataclasses import dataclass, field

from PIL import Image

from .config import DEFAULT_CODEC_CONFIG


@dataclass
class Frame:
    """One still image plus its display duration in seconds.

    A frame without a bitmap is a placeholder; a timeline holding a single
    placeholder represents an empty project.
    """

    bitmap: Image.Image | None = None
    duration: float = DEFAULT_CODEC_CONFIG.default_frame_duration

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError(f"Frame duration must be positive, got {self.duration}")

    @classmethod
    def placeholder(cls) -> Frame:
        """Create a bitmap-less frame."""
        return cls()

    @property
    def is_placeholder(self) -> bool:
        return self.bitmap is None

    def copy(self) -> Frame:
        """Return a new frame with the same bitmap and duration."""
        return Frame(bitmap=self.bitmap, duration=self.duration)


def _default_frames() -> list[Frame]:
    return [Frame.placeholder()]


@dataclass
class GIFRepresentation:
    """Frames and loop count of an animated GIF."""

    frames: list[Frame] = field(default_factory=_default_frames)
    loops: int = DEFAULT_CODEC_CONFIG.default_loops

    @property
    def frame_count(self) -> int:
        """Number of frames carrying a bitmap."""
        return sum(1 for frame in self.frames if not frame.is_placeholder)

    @property
    def total_duration(self) -> float:
        """Summed display time of the bitmap-carrying frames in seconds."""
        return sum(frame.duration for frame in self.frames if not frame.is_placeholder)
