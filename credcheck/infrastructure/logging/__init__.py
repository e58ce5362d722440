"""Logging infrastructure module."""

from credcheck.infrastructure.logging.logger import JSONFormatter, StructuredLogger, setup_logging

__all__ = ["JSONFormatter", "StructuredLogger", "setup_logging"]
