"""Loguru-based logging configuration for the MCP Version Server."""

import asyncio
import functools
import sys
import time
from pathlib import Path

from loguru import logger

from .config import get_settings

TEXT_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level: <8} | "
    "{name}:{function}:{line} | "
    "{message}"
)


def setup_logging() -> None:
    """Configure loguru logging based on settings.

    Console output goes to stderr: stdout is the MCP stdio transport and
    anything else written there corrupts the JSON-RPC stream.
    """
    settings = get_settings()

    # Remove default handler
    logger.remove()

    if settings.log_format == "json":
        logger.add(
            sys.stderr,
            format="{message}",
            serialize=True,
            level=settings.log_level,
        )
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level>"
            ),
            level=settings.log_level,
            colorize=True,
        )

    if not settings.log_file_path:
        return

    log_path = Path(settings.log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    serialize = settings.log_format == "json"
    file_format = "{message}" if serialize else TEXT_FORMAT

    logger.add(
        log_path,
        format=file_format,
        serialize=serialize,
        rotation=settings.log_rotation_size,
        retention=f"{settings.log_retention_days} days",
        compression="gz",
        level=settings.log_level,
    )

    # Errors are kept twice as long
    error_log_path = log_path.parent / f"{log_path.stem}_errors{log_path.suffix}"
    logger.add(
        error_log_path,
        format=file_format,
        serialize=serialize,
        rotation=settings.log_rotation_size,
        retention=f"{settings.log_retention_days * 2} days",
        compression="gz",
        level="ERROR",
    )


def get_logger(name: str = None) -> "logger":
    """Get a contextualized logger instance."""
    if name:
        return logger.bind(module=name)
    return logger


def log_performance(func):
    """Decorator to log function performance."""

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        logger.debug(f"Starting {func.__name__}")

        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            elapsed_time = time.perf_counter() - start_time
            logger.error(
                f"Failed {func.__name__} after {elapsed_time:.3f}s: {str(e)}",
                extra={"function": func.__name__, "elapsed_time": elapsed_time, "error": str(e)}
            )
            raise

        elapsed_time = time.perf_counter() - start_time
        logger.success(
            f"Completed {func.__name__} in {elapsed_time:.3f}s",
            extra={"function": func.__name__, "elapsed_time": elapsed_time}
        )
        return result

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        logger.debug(f"Starting {func.__name__}")

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed_time = time.perf_counter() - start_time
            logger.error(
                f"Failed {func.__name__} after {elapsed_time:.3f}s: {str(e)}",
                extra={"function": func.__name__, "elapsed_time": elapsed_time, "error": str(e)}
            )
            raise

        elapsed_time = time.perf_counter() - start_time
        logger.success(
            f"Completed {func.__name__} in {elapsed_time:.3f}s",
            extra={"function": func.__name__, "elapsed_time": elapsed_time}
        )
        return result

    if asyncio.iscoroutinefunction(func):
        return async_wrapper
    return sync_wrapper


# Initialize logging on module import
setup_logging()
