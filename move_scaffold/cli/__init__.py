"""
CLI module for move-new.

Provides the click command group and the ``main`` entry point installed as
the ``move-new`` console script.
"""

from .commands import main

__all__ = ["main"]
