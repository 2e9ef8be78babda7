"""Tests for gifedit.encoder module."""

import io
from unittest.mock import patch

import pytest
from PIL import Image

from gifedit.config import CodecConfig
from gifedit.decoder import decode
from gifedit.encoder import (
    GifEncoder,
    delay_ms,
    encode,
    encode_and_save,
    encode_to_image,
)
from gifedit.error_handling import (
    AllocationFailed,
    EncodeError,
    FinalizationFailed,
    WriteFailed,
)
from gifedit.frames import Frame
from gifedit.timeline import Timeline

# GIF delays are stored in hundredths of a second
TIME_RESOLUTION = 0.01


class TestDelayConversion:
    """Tests for delay_ms."""

    @pytest.mark.fast
    def test_seconds_to_milliseconds(self):
        assert delay_ms(0.2) == 200
        assert delay_ms(0.125) == 125

    @pytest.mark.fast
    def test_minimum_delay(self):
        """Very short durations are written as the smallest non-zero GIF delay."""
        assert delay_ms(0.001) == 10

    @pytest.mark.fast
    def test_maximum_delay(self):
        """A GIF delay field holds at most 65535 hundredths of a second."""
        assert delay_ms(655.35) == 655350
        assert delay_ms(700.0) == 655350


class TestEncode:
    """Tests for encoding frames into GIF bytes."""

    @pytest.mark.fast
    def test_output_is_gif(self, frames):
        data = encode(frames, loops=0)
        with Image.open(io.BytesIO(data)) as img:
            assert img.format == "GIF"
            assert img.n_frames == 4
            assert img.info["loop"] == 0

    @pytest.mark.fast
    def test_placeholder_frames_are_skipped(self, bitmap_factory, palette):
        """Three frames with the middle one empty encode as two frames, in order."""
        frames = [
            Frame(bitmap=bitmap_factory(0), duration=0.1),
            Frame(bitmap=None, duration=0.2),
            Frame(bitmap=bitmap_factory(2), duration=0.3),
        ]
        representation = decode(encode(frames, loops=0))

        assert len(representation.frames) == 2
        assert [f.duration for f in representation.frames] == pytest.approx([0.1, 0.3])
        assert representation.frames[0].bitmap.getpixel((0, 0))[:3] == palette[0]
        assert representation.frames[1].bitmap.getpixel((0, 0))[:3] == palette[2]

    @pytest.mark.fast
    def test_loop_count_is_global(self, frames):
        data = encode(frames, loops=4)
        assert decode(data).loops == 4

    @pytest.mark.fast
    def test_default_loops_from_config(self, frames):
        encoder = GifEncoder(CodecConfig(default_loops=2))
        assert decode(encoder.encode(frames)).loops == 2

    @pytest.mark.fast
    def test_accepts_timeline(self, frames):
        data = encode(Timeline(frames), loops=0)
        assert len(decode(data).frames) == 4

    @pytest.mark.fast
    def test_mismatched_sizes_fit_first_frame(self, bitmap_factory):
        frames = [
            Frame(bitmap=bitmap_factory(0, size=(16, 16))),
            Frame(bitmap=bitmap_factory(1, size=(8, 32))),
        ]
        representation = decode(encode(frames, loops=0))

        assert len(representation.frames) == 2
        assert all(f.bitmap.size == (16, 16) for f in representation.frames)

    @pytest.mark.fast
    def test_non_gif_modes_are_converted(self, bitmap_factory):
        cmyk = bitmap_factory(3).convert("CMYK")
        frames = [Frame(bitmap=cmyk), Frame(bitmap=bitmap_factory(1))]
        assert len(decode(encode(frames, loops=0)).frames) == 2

    @pytest.mark.fast
    def test_identical_neighbours_are_kept(self, bitmap_factory):
        """A repeated bitmap is written as its own frame with its own delay."""
        held = bitmap_factory(0)
        frames = [
            Frame(bitmap=held, duration=0.1),
            Frame(bitmap=held.copy(), duration=0.2),
            Frame(bitmap=bitmap_factory(1), duration=0.3),
        ]
        representation = decode(encode(frames, loops=0))

        assert len(representation.frames) == 3
        assert [f.duration for f in representation.frames] == pytest.approx([0.1, 0.2, 0.3])

    @pytest.mark.fast
    def test_identical_frames_around_placeholder(self, bitmap_factory):
        """Dropping a placeholder between two equal bitmaps still leaves two frames."""
        held = bitmap_factory(0)
        frames = [
            Frame(bitmap=held, duration=0.1),
            Frame(bitmap=None, duration=0.2),
            Frame(bitmap=held.copy(), duration=0.3),
        ]
        representation = decode(encode(frames, loops=0))

        assert len(representation.frames) == 2
        assert [f.duration for f in representation.frames] == pytest.approx([0.1, 0.3])

    @pytest.mark.fast
    def test_transparent_pixels_survive(self, bitmap_factory, palette):
        overlay = bitmap_factory(2).convert("RGBA")
        overlay.putpixel((0, 0), (0, 0, 0, 0))
        frames = [Frame(bitmap=overlay), Frame(bitmap=bitmap_factory(1))]
        representation = decode(encode(frames, loops=0))

        assert representation.frames[0].bitmap.getpixel((0, 0))[3] == 0
        assert representation.frames[0].bitmap.getpixel((5, 5))[:3] == palette[2]

    @pytest.mark.fast
    def test_overlong_duration_is_clamped(self, bitmap_factory, caplog):
        frames = [
            Frame(bitmap=bitmap_factory(0), duration=700.0),
            Frame(bitmap=bitmap_factory(1), duration=0.1),
        ]
        representation = decode(encode(frames, loops=0))

        assert [f.duration for f in representation.frames] == pytest.approx([655.35, 0.1])
        assert "shortened to the GIF maximum" in caplog.text

    @pytest.mark.fast
    def test_negative_loops_rejected(self, frames):
        with pytest.raises(ValueError, match="loops must be non-negative"):
            encode(frames, loops=-1)


class TestRoundTrip:
    """decode(encode(frames, loops)) keeps count, timing and loop count."""

    @pytest.mark.parametrize("loops", [0, 1, 7])
    def test_round_trip(self, frames, loops):
        representation = decode(encode(frames, loops=loops))

        assert representation.loops == loops
        assert len(representation.frames) == len(frames)
        for original, recovered in zip(frames, representation.frames):
            assert abs(original.duration - recovered.duration) <= TIME_RESOLUTION + 1e-9
            assert recovered.bitmap is not None

    def test_round_trip_sub_resolution_durations(self, bitmap_factory):
        frames = [
            Frame(bitmap=bitmap_factory(0), duration=0.125),
            Frame(bitmap=bitmap_factory(1), duration=0.333),
            Frame(bitmap=bitmap_factory(2), duration=1.0),
        ]
        representation = decode(encode(frames, loops=0))

        for original, recovered in zip(frames, representation.frames):
            assert abs(original.duration - recovered.duration) <= TIME_RESOLUTION + 1e-9


class TestEncodeFailures:
    """Tests for the encoder's error reporting."""

    @pytest.mark.fast
    def test_placeholder_only_timeline(self):
        """A timeline with no images cannot form a GIF."""
        with pytest.raises(FinalizationFailed, match="at least one frame"):
            encode(Timeline(), loops=0)

    @pytest.mark.fast
    def test_empty_iterable(self):
        with pytest.raises(FinalizationFailed):
            encode([], loops=0)

    @pytest.mark.fast
    def test_conversion_failure_is_allocation_failed(self, frames):
        with patch(
            "gifedit.encoder._to_destination", side_effect=MemoryError("out of memory")
        ):
            with pytest.raises(AllocationFailed) as exc_info:
                encode(frames, loops=0)

        assert isinstance(exc_info.value.cause, MemoryError)

    @pytest.mark.fast
    def test_writer_failure_is_finalization_failed(self, frames):
        with patch(
            "gifedit.encoder.GifImagePlugin.getdata", side_effect=OSError("writer broke")
        ):
            with pytest.raises(FinalizationFailed, match="writer broke"):
                encode(frames, loops=0)

    @pytest.mark.fast
    def test_frame_count_mismatch_is_finalization_failed(self, frames, gif_factory):
        """Output that does not hold one image per frame is never returned."""
        single = gif_factory(1)
        with patch(
            "gifedit.encoder._write_gif", side_effect=lambda fp, *args: fp.write(single)
        ):
            with pytest.raises(FinalizationFailed, match="expected 4"):
                encode(frames, loops=0)

    @pytest.mark.fast
    def test_errors_share_a_base(self):
        for error_type in (AllocationFailed, FinalizationFailed, WriteFailed):
            assert issubclass(error_type, EncodeError)


class TestEncodeToImage:
    """Tests for encode_to_image."""

    @pytest.mark.fast
    def test_returns_animated_image(self, frames):
        img = encode_to_image(frames, loops=0)
        assert img.format == "GIF"
        assert img.n_frames == 4


class TestEncodeAndSave:
    """Tests for encode_and_save."""

    @pytest.mark.fast
    def test_writes_file(self, frames, tmp_path):
        path = encode_and_save(frames, tmp_path / "out" / "anim.gif", loops=0)

        assert path.exists()
        assert len(decode(path.read_bytes()).frames) == 4

    @pytest.mark.fast
    def test_unwritable_destination(self, frames, tmp_path):
        """Writing below a regular file fails and leaves nothing behind."""
        blocker = tmp_path / "not_a_dir"
        blocker.write_bytes(b"")
        destination = blocker / "anim.gif"

        with pytest.raises(WriteFailed) as exc_info:
            encode_and_save(frames, destination, loops=0)

        assert not destination.exists()
        assert exc_info.value.reason

    @pytest.mark.fast
    def test_failed_write_keeps_previous_file(self, frames, tmp_path):
        destination = tmp_path / "anim.gif"
        destination.write_bytes(b"previous contents")

        with patch("gifedit.io.move", side_effect=OSError("rename failed")):
            with pytest.raises(WriteFailed) as exc_info:
                encode_and_save(frames, destination, loops=0)

        assert destination.read_bytes() == b"previous contents"
        assert list(tmp_path.iterdir()) == [destination]
        assert "rename failed" in exc_info.value.reason

    @pytest.mark.fast
    def test_encode_failure_writes_nothing(self, tmp_path):
        destination = tmp_path / "anim.gif"
        with pytest.raises(FinalizationFailed):
            encode_and_save(Timeline(), destination, loops=0)
        assert not destination.exists()

    @pytest.mark.fast
    def test_directory_destination(self, frames, tmp_path):
        """A path naming an existing directory is rejected and the directory is left empty."""
        destination = tmp_path / "outdir"
        destination.mkdir()

        with pytest.raises(WriteFailed, match="is a directory"):
            encode_and_save(frames, destination, loops=0)

        assert list(destination.iterdir()) == []
        assert list(tmp_path.iterdir()) == [destination]
