"""Standardized Error Handling Utilities

Exception hierarchy for the GIF codec plus helpers that turn unexpected
library exceptions into it with consistent logging.
"""

from __future__ import annotations

import logging
import traceback
from contextlib import contextmanager
from enum import Enum
from typing import Any


class ErrorLevel(Enum):
    """Error severity levels for consistent logging."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class GifEditError(Exception):
    """Base exception class for all gifedit errors."""

    def __init__(
        self, message: str, cause: Exception | None = None, context: dict | None = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.cause:
            return f"{base_msg} (caused by: {self.cause})"
        return base_msg


class DecodeError(GifEditError):
    """Raised when an input cannot be decoded into frames."""

    pass


class MissingAnimationMetadata(DecodeError):
    """Raised when the input lacks frame count, loop count or frame duration."""

    pass


class EncodeError(GifEditError):
    """Raised when frames cannot be encoded into a GIF."""

    pass


class AllocationFailed(EncodeError):
    """Raised when a frame cannot be converted for the output container."""

    pass


class FinalizationFailed(EncodeError):
    """Raised when the output container cannot be finalized into valid bytes."""

    pass


class WriteFailed(EncodeError):
    """Raised when encoded bytes cannot be written to their destination."""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: dict | None = None,
        reason: str | None = None,
    ):
        super().__init__(message, cause=cause, context=context)
        self.reason = reason if reason is not None else (str(cause) if cause else message)


class ConfigurationError(GifEditError, ValueError):
    """Raised when configuration values or overrides are invalid."""

    pass


def handle_error(
    error: Exception,
    operation: str,
    error_type: type[GifEditError] = EncodeError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
    reraise: bool = True,
) -> GifEditError | None:
    """Standardized error handling with consistent logging and error transformation.

    Args:
        error: Original exception that occurred
        operation: Description of operation that failed
        error_type: Type of GifEditError to raise
        level: Logging level for the error
        context: Additional context information
        logger: Logger to use (defaults to module logger)
        reraise: Whether to reraise the transformed exception

    Returns:
        The transformed error if reraise=False, otherwise None

    Raises:
        GifEditError: Transformed error if reraise=True
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    message = f"Failed to {operation}: {error}"

    error_context = dict(context or {})
    error_context.update(
        {
            "operation": operation,
            "original_error_type": type(error).__name__,
        }
    )

    if issubclass(error_type, WriteFailed):
        transformed_error: GifEditError = error_type(
            message, cause=error, context=error_context, reason=str(error)
        )
    else:
        transformed_error = error_type(message, cause=error, context=error_context)

    log_message = f"🚨 {operation[:1].upper() + operation[1:]} failed: {error}"
    context_str = ", ".join(f"{k}={v}" for k, v in error_context.items())
    if context_str:
        log_message += f" (context: {context_str})"

    log_func = getattr(logger, level.value)
    log_func(log_message)

    if level in [ErrorLevel.ERROR, ErrorLevel.CRITICAL]:
        logger.debug(f"Traceback for {operation}: {traceback.format_exc()}")

    if reraise:
        raise transformed_error from error
    return transformed_error


@contextmanager
def error_context(
    operation: str,
    error_type: type[GifEditError] = EncodeError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
) -> Any:
    """Context manager for standardized error handling.

    Usage:
        with error_context("write GIF", WriteFailed, context={"path": "out.gif"}):
            risky_operation()

    Args:
        operation: Description of operation being performed
        error_type: Type of GifEditError to raise on failure
        level: Logging level for errors
        context: Additional context information
        logger: Logger to use
    """
    try:
        yield
    except GifEditError:
        # Already typed, pass through unchanged
        raise
    except Exception as e:
        handle_error(e, operation, error_type, level, context, logger, reraise=True)


def log_warning_with_context(
    message: str, context: dict | None = None, logger: logging.Logger | None = None
) -> None:
    """Log a warning with standardized context formatting."""
    if logger is None:
        logger = logging.getLogger(__name__)

    warning_msg = f"⚠️  {message}"
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        warning_msg += f" (context: {context_str})"

    logger.warning(warning_msg)
