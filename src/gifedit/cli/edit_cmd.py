"""Edit command for applying frame operations to an existing GIF."""

from pathlib import Path

import click

from ..error_handling import GifEditError
from ..io import read_bytes
from ..session import EditingSession
from ..watermark import stamp_timeline
from .utils import (
    display_path_info,
    display_save_summary,
    handle_generic_error,
    handle_keyboard_interrupt,
    load_frames,
)


@click.command()
@click.argument(
    "gif_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path of the edited GIF (may be GIF_FILE itself)",
)
@click.option(
    "--insert",
    "inserts",
    multiple=True,
    type=(click.Path(exists=True, dir_okay=False, path_type=Path), int),
    metavar="IMAGE INDEX",
    help="Insert a still image before INDEX (repeatable)",
)
@click.option(
    "--duration",
    "durations",
    multiple=True,
    type=(int, click.FloatRange(min=0, min_open=True)),
    metavar="INDEX SECONDS",
    help="Set the duration of frame INDEX (repeatable)",
)
@click.option(
    "--move",
    "moves",
    multiple=True,
    type=(int, int),
    metavar="FROM DROP",
    help="Move frame FROM to the gap before DROP (repeatable)",
)
@click.option(
    "--remove",
    "removals",
    multiple=True,
    type=int,
    metavar="INDEX",
    help="Remove frame INDEX (repeatable)",
)
@click.option(
    "--loops",
    "-l",
    type=click.IntRange(min=0),
    default=None,
    help="New loop count (default: keep the source loop count)",
)
@click.option("--watermark", "-w", default=None, help="Text to stamp on every frame")
def edit(
    gif_file: Path,
    output: Path,
    inserts: tuple[tuple[Path, int], ...],
    durations: tuple[tuple[int, float], ...],
    moves: tuple[tuple[int, int], ...],
    removals: tuple[int, ...],
    loops: int | None,
    watermark: str | None,
) -> None:
    """Edit the frames of GIF_FILE and save the result.

    Operations run in a fixed order: inserts, duration changes, moves,
    then removals. Each operation sees the indices left by the previous
    ones. Removals are applied from the highest index down, so they all
    refer to the frame positions after the moves.
    """
    try:
        display_path_info("Input", gif_file, "🎞️ ")
        session = EditingSession()
        session.open(read_bytes(gif_file))

        for image_path, index in inserts:
            frames = load_frames([image_path], session.config.default_frame_duration)
            session.timeline.insert_external(frames, index)

        for index, seconds in durations:
            session.timeline.set_duration(index, seconds)

        for from_index, drop_index in moves:
            session.timeline.move(from_index, drop_index)

        for index in sorted(set(removals), reverse=True):
            session.timeline.remove(index)

        if loops is not None:
            session.loops = loops

        if watermark:
            session.timeline = stamp_timeline(session.timeline, watermark)

        saved = session.save(output)
        frame_count = session.to_representation().frame_count
        display_save_summary(saved, frame_count, session.loops)

    except KeyboardInterrupt:
        handle_keyboard_interrupt("Edit")
    except IndexError as e:
        handle_generic_error("Edit", ValueError(f"frame index out of range ({e})"))
    except (GifEditError, OSError, ValueError) as e:
        handle_generic_error("Edit", e)
