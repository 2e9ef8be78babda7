"""Assemble command for building a GIF from still images."""

from pathlib import Path

import click

from ..config import DEFAULT_CODEC_CONFIG
from ..error_handling import GifEditError
from ..session import EditingSession
from ..watermark import stamp_timeline
from .utils import (
    display_save_summary,
    handle_generic_error,
    handle_keyboard_interrupt,
    load_frames,
)


@click.command()
@click.argument(
    "images",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path of the GIF to write",
)
@click.option(
    "--duration",
    "-d",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_CODEC_CONFIG.default_frame_duration,
    show_default=True,
    help="Seconds each frame is shown",
)
@click.option(
    "--loops",
    "-l",
    type=click.IntRange(min=0),
    default=DEFAULT_CODEC_CONFIG.default_loops,
    show_default=True,
    help="Loop count (0 = loop forever)",
)
@click.option("--watermark", "-w", default=None, help="Text to stamp on every frame")
def assemble(
    images: tuple[Path, ...],
    output: Path,
    duration: float,
    loops: int,
    watermark: str | None,
) -> None:
    """Build an animated GIF from IMAGES, in the order given."""
    try:
        click.echo(f"🎞️  Assembling {len(images)} image(s)")
        session = EditingSession()
        session.timeline.insert_external(load_frames(images, duration), 0)
        session.loops = loops

        if watermark:
            session.timeline = stamp_timeline(session.timeline, watermark)

        saved = session.save(output)
        frame_count = session.to_representation().frame_count
        display_save_summary(saved, frame_count, loops)

    except KeyboardInterrupt:
        handle_keyboard_interrupt("Assemble")
    except (GifEditError, OSError, ValueError) as e:
        handle_generic_error("Assemble", e)
