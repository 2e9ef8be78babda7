"""I/O utilities for logging setup, atomic writes and image loading."""

import io
import logging
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from shutil import move

from PIL import Image


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> logging.Logger:
    """Set up logging configuration for gifedit.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for a timestamped log file, or None for console only

    Returns:
        Configured logger instance
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        handlers.append(logging.FileHandler(log_dir / f"gifedit_{timestamp}.log"))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )

    return logging.getLogger("gifedit")


@contextmanager
def atomic_write(target_path: Path, mode: str = "wb"):
    """Context manager for atomic file writes using temporary files.

    The target only appears once the block finishes without error; on
    failure the temporary file is removed and an existing target is left
    as it was.

    Args:
        target_path: Final path where file should be written
        mode: File open mode

    Yields:
        File handle for writing

    Raises:
        IsADirectoryError: If target_path names an existing directory

    Example:
        with atomic_write(Path("out.gif")) as f:
            f.write(data)
    """
    if target_path.is_dir():
        raise IsADirectoryError(f"Cannot write to {target_path}: it is a directory")
    target_path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode=mode,
        dir=target_path.parent,
        delete=False,
        suffix=f".tmp_{target_path.name}",
    ) as temp_file:
        try:
            yield temp_file
            temp_file.flush()
            move(temp_file.name, target_path)
        except BaseException:
            Path(temp_file.name).unlink(missing_ok=True)
            raise


def read_bytes(path: Path) -> bytes:
    """Read a whole file into memory.

    Raises:
        IOError: If file cannot be read
    """
    if not path.exists():
        raise OSError(f"File not found: {path}")
    return path.read_bytes()


def open_image(data: bytes) -> Image.Image:
    """Open an in-memory image buffer with Pillow.

    Raises:
        PIL.UnidentifiedImageError: If the bytes are not a known image format
    """
    return Image.open(io.BytesIO(data))


def load_still_image(path: Path) -> Image.Image:
    """Load the first frame of an image file as an independent RGBA bitmap.

    Raises:
        IOError: If file cannot be read or is not an image
    """
    with Image.open(path) as img:
        return img.convert("RGBA")
