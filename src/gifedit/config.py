"""Configuration settings for gifedit."""

import os
from dataclasses import dataclass

from .error_handling import ConfigurationError


@dataclass
class CodecConfig:
    """Defaults shared by the decoder, encoder and watermarker.

    Override with environment variables:
        GIFEDIT_DEFAULT_LOOPS
        GIFEDIT_DEFAULT_FRAME_DURATION
    """

    # Loop count written when the caller does not give one (0 = loop forever)
    default_loops: int = 0

    # Frame duration in seconds when the source has no delay for a frame
    default_frame_duration: float = 0.2

    # Watermark text rendering
    watermark_font: str = "Helvetica"
    watermark_font_size: int = 14
    watermark_origin: tuple[int, int] = (5, 5)

    def __post_init__(self) -> None:
        """Apply environment variable overrides, then validate."""
        env_loops = os.getenv("GIFEDIT_DEFAULT_LOOPS")
        if env_loops:
            try:
                self.default_loops = int(env_loops)
            except ValueError as e:
                raise ConfigurationError(
                    f"GIFEDIT_DEFAULT_LOOPS must be an integer, got {env_loops!r}",
                    cause=e,
                ) from e

        env_duration = os.getenv("GIFEDIT_DEFAULT_FRAME_DURATION")
        if env_duration:
            try:
                self.default_frame_duration = float(env_duration)
            except ValueError as e:
                raise ConfigurationError(
                    f"GIFEDIT_DEFAULT_FRAME_DURATION must be a number, got {env_duration!r}",
                    cause=e,
                ) from e

        if self.default_loops < 0:
            raise ConfigurationError(
                f"default_loops must be non-negative, got {self.default_loops}"
            )

        if self.default_frame_duration <= 0:
            raise ConfigurationError(
                f"default_frame_duration must be positive, got {self.default_frame_duration}"
            )

        if self.watermark_font_size <= 0:
            raise ConfigurationError(
                f"watermark_font_size must be positive, got {self.watermark_font_size}"
            )


# Default configuration instance
DEFAULT_CODEC_CONFIG = CodecConfig()
