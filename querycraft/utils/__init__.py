"""Utility functions and classes for QueryCraft."""

from querycraft.utils.logging import configure_logging, get_logger

__all__ = ("configure_logging", "get_logger")
