"""Utility modules for configtree."""

from configtree.utils.logging_utils import setup_logging

__all__ = [
    "setup_logging",
]
