"""
Move Package Scaffold

Creates new Move package directories from bundled and remote templates,
rewriting ``{{ key }}`` placeholders in file names and contents.
"""

__version__ = "0.1.0"

from move_scaffold.core.scaffolder import PackageScaffolder, ScaffoldRequest
from move_scaffold.core.substitution import substitute

__all__ = [
    "PackageScaffolder",
    "ScaffoldRequest",
    "substitute",
]
