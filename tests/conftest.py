"""Shared pytest fixtures for the idebridge test suite."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Iterator

import pytest

from idebridge.discovery.cache import DiscoveryCache
from idebridge.platforms.base import PlatformFamily, PlatformSupport
from idebridge.telemetry.logger import BridgeLogger


class LogCapture:
    """In-memory sink paired with a `BridgeLogger` writing into it."""

    def __init__(self) -> None:
        self.stream = io.StringIO()
        self.logger = BridgeLogger(sink=self.stream, level="DEBUG")

    @property
    def lines(self) -> list[str]:
        return [line for line in self.stream.getvalue().splitlines() if line]


class StubPlatform(PlatformSupport):
    """Platform double with scripted probe results and recorded launches."""

    family = PlatformFamily.MACOS
    bundle_suffix = ".app"

    def __init__(
        self,
        logger: BridgeLogger,
        found: Path | None = None,
        cli_path: Path | None = None,
    ) -> None:
        super().__init__(logger=logger)
        self.found = found
        self.cli_path = cli_path
        self.locate_calls: list[str] = []
        self.launches: list[tuple[str, Path | None]] = []

    def strategies(self) -> list:
        return []

    def locate(self, app_name: str) -> Path | None:
        self.locate_calls.append(app_name)
        return self.found

    def resolve_cli(self, record: Path) -> Path | None:
        return self.cli_path

    def launch(self, app_name: str, record: Path | None) -> bool:
        self.launches.append((app_name, record))
        return True


@pytest.fixture
def log_capture() -> Iterator[LogCapture]:
    """Provide a debug-level logger writing to an in-memory buffer."""

    capture = LogCapture()
    yield capture
    capture.logger.close()


@pytest.fixture
def fresh_cache() -> DiscoveryCache:
    """Provide an empty discovery cache isolated from the process-wide one."""

    return DiscoveryCache()


@pytest.fixture
def stub_platform(log_capture: LogCapture) -> Callable[..., StubPlatform]:
    """Provide a factory for scripted platform doubles sharing the captured logger."""

    def _factory(found: Path | None = None, cli_path: Path | None = None) -> StubPlatform:
        return StubPlatform(log_capture.logger, found=found, cli_path=cli_path)

    return _factory
