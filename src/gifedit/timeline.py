"""Ordered, never-empty frame list with editing operations.

A timeline always holds at least one frame. A single frame without a bitmap
is the placeholder for an empty project: removing the last frame resets to
it, and inserting content into it replaces it instead of adding next to it.

Reordering follows drop semantics. ``move(from_index, drop_index)`` takes
the index the frame is dropped *before*, as shown between two items while
dragging. Because removing the frame first shifts everything after it left
by one, a frame moving forward lands at ``drop_index - 1``:

    [A, B, C, D, E].move(2, 0) -> [C, A, B, D, E]
    [C, A, B, D, E].move(0, 3) -> [A, B, C, D, E]
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import overload

from PIL import Image

from .frames import Frame


class Timeline:
    """Session-owned sequence of frames in display order."""

    def __init__(self, frames: Iterable[Frame] | None = None) -> None:
        self._frames: list[Frame] = list(frames) if frames is not None else []
        if not self._frames:
            self._frames = [Frame.placeholder()]

    @classmethod
    def from_frames(cls, frames: Iterable[Frame]) -> Timeline:
        """Build a timeline; an empty input yields the placeholder timeline."""
        return cls(frames)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    @overload
    def __getitem__(self, index: int) -> Frame: ...

    @overload
    def __getitem__(self, index: slice) -> list[Frame]: ...

    def __getitem__(self, index: int | slice) -> Frame | list[Frame]:
        return self._frames[index]

    def __repr__(self) -> str:
        return f"Timeline(frames={len(self._frames)}, placeholder={self.is_empty_placeholder})"

    @property
    def frames(self) -> tuple[Frame, ...]:
        return tuple(self._frames)

    @property
    def is_empty_placeholder(self) -> bool:
        """True when the timeline is the single-placeholder empty project."""
        return len(self._frames) == 1 and self._frames[0].is_placeholder

    def snapshot(self) -> list[Frame]:
        """Copy the frame sequence so it can be encoded while editing continues."""
        return [frame.copy() for frame in self._frames]

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def replace(self, index: int, frame: Frame) -> None:
        """Overwrite the frame at ``index``."""
        self._frames[index] = frame

    def replace_bitmap(self, index: int, bitmap: Image.Image) -> None:
        """Swap the bitmap at ``index`` and keep that frame's duration."""
        current = self._frames[index]
        self._frames[index] = Frame(bitmap=bitmap, duration=current.duration)

    def set_duration(self, index: int, seconds: float) -> None:
        if seconds <= 0:
            raise ValueError(f"Frame duration must be positive, got {seconds}")
        self._frames[index].duration = seconds

    def remove(self, index: int) -> None:
        """Delete the frame at ``index``; the last remaining frame resets to a placeholder."""
        if len(self._frames) == 1:
            if index not in (0, -1):
                raise IndexError("timeline index out of range")
            self._frames[0] = Frame.placeholder()
            return
        del self._frames[index]

    def insert_external(self, frames: Iterable[Frame], index: int) -> None:
        """Splice ``frames`` in at ``index``, or take them wholesale over a placeholder."""
        incoming = list(frames)
        if not incoming:
            return

        if self.is_empty_placeholder:
            self._frames = incoming
            return

        index = max(0, min(index, len(self._frames)))
        self._frames[index:index] = incoming

    def move(self, from_index: int, drop_index: int) -> None:
        """Move the frame at ``from_index`` to the gap before ``drop_index``."""
        if from_index < 0:
            from_index += len(self._frames)
        if from_index < drop_index:
            target = drop_index - 1
        else:
            target = drop_index

        frame = self._frames.pop(from_index)
        self._frames.insert(target, frame)

    def append(self, frame: Frame) -> None:
        """Add ``frame`` at the end, replacing the placeholder if present."""
        self.insert_external([frame], len(self._frames))

    def reset(self) -> None:
        """Drop all frames and return to the placeholder state."""
        self._frames = [Frame.placeholder()]
