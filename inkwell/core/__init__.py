"""
Core utilities and configuration for Inkwell.

This package provides core functionality including logging configuration,
the shared exception taxonomy and access to the backend-as-a-service.
"""

from inkwell.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
