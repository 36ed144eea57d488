"""Content box utility modules."""

from .logging_utils import (
    setup_logging, log_processing_stats, ContentBoxFormatter
)

__all__ = [
    'setup_logging', 'log_processing_stats', 'ContentBoxFormatter'
]
