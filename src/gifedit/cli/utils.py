"""Shared utilities for CLI commands."""

import sys
from pathlib import Path

import click

from ..frames import Frame
from ..io import load_still_image


def handle_generic_error(command_name: str, error: Exception) -> None:
    """Handle generic command errors with consistent formatting."""
    click.echo(f"❌ {command_name} failed: {error}", err=True)
    sys.exit(1)


def handle_keyboard_interrupt(command_name: str) -> None:
    """Handle keyboard interrupt with consistent formatting."""
    click.echo(f"\n⏹️  {command_name} interrupted by user", err=True)
    sys.exit(1)


def load_frames(paths: tuple[Path, ...] | list[Path], duration: float) -> list[Frame]:
    """Load still images as frames sharing one duration."""
    return [Frame(bitmap=load_still_image(path), duration=duration) for path in paths]


def display_path_info(label: str, path: Path, emoji: str = "📁") -> None:
    """Display path information with consistent formatting."""
    click.echo(f"{emoji} {label}: {path}")


def display_save_summary(path: Path, frame_count: int, loops: int) -> None:
    """Display the outcome of writing a GIF."""
    loop_text = "forever" if loops == 0 else str(loops)
    click.echo("✅ GIF saved")
    click.echo(f"   • Frames: {frame_count}")
    click.echo(f"   • Loops: {loop_text}")
    click.echo(f"   • Output: {path}")
