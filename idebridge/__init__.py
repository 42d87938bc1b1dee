"""Top-level package for idebridge.

This package locates a desktop IDE installation and its companion
command-line tool without prior configuration, then bridges callers to that
tool through subprocess execution. The main entry point is `IdeBridge`.
"""

from .bridge.session import IdeBridge
from .operations.ide import IdeOperations

__all__ = ["IdeBridge", "IdeOperations", "__version__"]

__version__ = "0.1.0"
