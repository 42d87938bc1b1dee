"""CLI resolution, execution, and application launch."""

from .cli_resolver import CliResolver
from .execution import CliExecutor, ExecutionResult, escape_batch_path, quote_batch_path
from .launcher import AppLauncher
from .session import IdeBridge

__all__ = [
    "AppLauncher",
    "CliExecutor",
    "CliResolver",
    "ExecutionResult",
    "IdeBridge",
    "escape_batch_path",
    "quote_batch_path",
]
