"""gifedit - decode, edit and re-encode animated GIFs."""

__version__: str = "0.1.0"

# Public re-exports for convenience ---------------------------------------------------

from .classifier import AnimationMetadata, is_animated, read_animation_metadata
from .config import DEFAULT_CODEC_CONFIG, CodecConfig
from .decoder import GifDecoder, decode, decode_file
from .encoder import GifEncoder, encode, encode_and_save, encode_to_image
from .error_handling import (
    AllocationFailed,
    ConfigurationError,
    DecodeError,
    EncodeError,
    FinalizationFailed,
    GifEditError,
    MissingAnimationMetadata,
    WriteFailed,
)
from .frames import Frame, GIFRepresentation
from .session import EditingSession
from .timeline import Timeline
from .watermark import stamp, stamp_timeline

__all__ = [
    "DEFAULT_CODEC_CONFIG",
    "AllocationFailed",
    "AnimationMetadata",
    "CodecConfig",
    "ConfigurationError",
    "DecodeError",
    "EditingSession",
    "EncodeError",
    "FinalizationFailed",
    "Frame",
    "GIFRepresentation",
    "GifDecoder",
    "GifEditError",
    "GifEncoder",
    "MissingAnimationMetadata",
    "Timeline",
    "WriteFailed",
    "decode",
    "decode_file",
    "encode",
    "encode_and_save",
    "encode_to_image",
    "is_animated",
    "read_animation_metadata",
    "stamp",
    "stamp_timeline",
]
