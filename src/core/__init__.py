"""
Core module for cross-cutting concerns.

This module provides structured logging configuration and run-scoped
log context helpers.
"""

from core.logging import bind_context, clear_context, configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
