"""Bridged IDE operations: launch, preview, upload, compile conditions, logs."""

from .compile_conditions import build_compile_condition
from .ide import (
    CommandOutcome,
    IdeOperations,
    LaunchOutcome,
    PreviewOutcome,
    RuntimeLogOutcome,
    UploadOutcome,
)

__all__ = [
    "CommandOutcome",
    "IdeOperations",
    "LaunchOutcome",
    "PreviewOutcome",
    "RuntimeLogOutcome",
    "UploadOutcome",
    "build_compile_condition",
]
