"""Info command for inspecting an animated GIF."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ..classifier import is_animated
from ..decoder import decode
from ..error_handling import DecodeError
from ..io import read_bytes
from .utils import handle_generic_error

console = Console()


@click.command()
@click.argument(
    "gif_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
def info(gif_file: Path) -> None:
    """Show frame count, loop count and frame durations of GIF_FILE."""
    try:
        data = read_bytes(gif_file)
        animated = is_animated(data)
        representation = decode(data)
    except (DecodeError, OSError) as e:
        handle_generic_error("Info", e)
        return

    loops = representation.loops
    console.print(f"\n🎞️  [bold blue]{gif_file.name}[/bold blue]")
    console.print(f"Animated: {'✅ yes' if animated else '❌ no'}")
    console.print(f"Frames: [bold]{len(representation.frames)}[/bold]")
    console.print(f"Loops: [bold]{'forever' if loops == 0 else loops}[/bold]")
    console.print(f"Total duration: [bold]{representation.total_duration:.2f}s[/bold]\n")

    table = Table(title="Frames", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Size", justify="right", style="cyan")

    for index, frame in enumerate(representation.frames):
        size = f"{frame.bitmap.width}×{frame.bitmap.height}" if frame.bitmap else "-"
        table.add_row(str(index), f"{frame.duration:.3f}", size)

    console.print(table)
