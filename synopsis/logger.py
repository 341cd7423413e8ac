"""Global logger instance for synopsis."""
import logging

logger = logging.getLogger("synopsis")

__all__ = ("logger",)
