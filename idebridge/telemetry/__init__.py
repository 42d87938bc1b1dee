"""Telemetry and observability helpers.

This package emits structured discovery and execution events.
"""

from .logger import BridgeLogger, default_logger

__all__ = ["BridgeLogger", "default_logger"]
