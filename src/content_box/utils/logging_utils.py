"""
Logging utilities with rich console output and processing statistics.

Provides logging setup for the content box tools with support for
different output formats and per-batch statistics.
"""

import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional, Union, Generator

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)


class ContentBoxFormatter(logging.Formatter):
    """Formatter with optional module and function information."""

    def __init__(self, include_module: bool = True, include_function: bool = False):
        parts = ["%(asctime)s"]
        if include_module:
            parts.append("%(name)s")
        parts.append("%(levelname)s")
        if include_function:
            parts.append("%(funcName)s")
        parts.append("%(message)s")
        super().__init__(" - ".join(parts), datefmt="%Y-%m-%d %H:%M:%S")
        self.include_module = include_module
        self.include_function = include_function


def setup_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    use_rich: bool = True,
    format_style: str = "detailed"
) -> logging.Logger:
    """
    Set up logging for the content box tools.

    Args:
        level: Logging level
        log_file: Optional log file path
        use_rich: Whether to use rich console output
        format_style: Format style ('simple', 'detailed', 'minimal')

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    if isinstance(level, str):
        level = getattr(logging, level.upper())
    root_logger.setLevel(level)

    if use_rich:
        console_handler = RichHandler(
            console=console,
            show_time=True,
            show_path=format_style == "detailed",
            markup=False,
            rich_tracebacks=True
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)

        if format_style == "minimal":
            formatter = ContentBoxFormatter(include_module=False, include_function=False)
        elif format_style == "simple":
            formatter = ContentBoxFormatter(include_module=True, include_function=False)
        else:  # detailed
            formatter = ContentBoxFormatter(include_module=True, include_function=True)

        console_handler.setFormatter(formatter)

    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(ContentBoxFormatter(include_module=True, include_function=True))
        file_handler.setLevel(logging.DEBUG)  # More verbose in file
        root_logger.addHandler(file_handler)

    # Reduce noise from external libraries
    logging.getLogger("PIL").setLevel(logging.WARNING)

    return root_logger


@contextmanager
def log_processing_stats(
    operation: str,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO
) -> Generator[Dict[str, Any], None, None]:
    """
    Context manager for logging processing statistics.

    Args:
        operation: Description of the operation
        logger: Logger instance (uses root if None)
        level: Logging level for the stats

    Yields:
        Dictionary in which the caller counts processed and failed files
    """
    if logger is None:
        logger = logging.getLogger()

    stats = {
        "operation": operation,
        "start_time": time.time(),
        "files_processed": 0,
        "files_failed": 0,
    }

    logger.log(level, f"Starting {operation}")

    try:
        yield stats
    except Exception as e:
        duration = time.time() - stats["start_time"]
        logger.error(f"Failed {operation} after {duration:.2f}s: {e}")
        raise

    duration = time.time() - stats["start_time"]
    total = stats["files_processed"] + stats["files_failed"]
    stats["duration"] = duration
    stats["success_rate"] = stats["files_processed"] / total if total > 0 else 0

    logger.log(level,
               f"Completed {operation}: "
               f"processed={stats['files_processed']}, "
               f"failed={stats['files_failed']}, "
               f"duration={duration:.2f}s, "
               f"success_rate={stats['success_rate']*100:.1f}%")
