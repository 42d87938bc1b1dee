"""High-level bridge wiring locator, CLI resolver, execution, and launcher.

Key types:
- `IdeBridge`: one target application bound to one platform implementation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ..config import BridgeConfig
from ..discovery.cache import DiscoveryCache
from ..discovery.locator import InstallationLocator
from ..errors import CliNotFoundError
from ..platforms import select_platform
from ..platforms.base import PlatformSupport
from ..telemetry.logger import BridgeLogger, default_logger
from .cli_resolver import CliResolver
from .execution import CliExecutor, ExecutionResult
from .launcher import AppLauncher


class IdeBridge:
    """Bridge callers to one desktop application and its command-line tool."""

    def __init__(
        self,
        app_name: str,
        platform: PlatformSupport,
        cache: DiscoveryCache | None = None,
        logger: BridgeLogger | None = None,
        revalidate_cache: bool = True,
        timeout_seconds: float | None = None,
    ) -> None:
        self.app_name = app_name
        self._logger = logger or default_logger()
        self._locator = InstallationLocator(
            platform,
            cache=cache,
            logger=self._logger,
            revalidate_cache=revalidate_cache,
        )
        self._resolver = CliResolver(self._locator, logger=self._logger)
        self._launcher = AppLauncher(self._locator, logger=self._logger)
        self._executor = CliExecutor(
            uses_shell_scripts=platform.uses_shell_scripts,
            timeout_seconds=timeout_seconds,
            logger=self._logger,
        )

    @classmethod
    def from_config(
        cls,
        config: BridgeConfig,
        logger: BridgeLogger | None = None,
        platform: PlatformSupport | None = None,
        cache: DiscoveryCache | None = None,
    ) -> IdeBridge:
        """Build a bridge for the host platform from validated configuration."""

        config.validate()
        resolved_logger = logger or BridgeLogger(level=config.log_level)
        resolved_platform = platform or select_platform(
            logger=resolved_logger,
            search_depth=config.search_depth,
            extra_program_dirs=config.extra_program_dirs,
        )
        return cls(
            config.app_name,
            resolved_platform,
            cache=cache,
            logger=resolved_logger,
            revalidate_cache=config.revalidate_cache,
            timeout_seconds=config.cli_timeout_seconds,
        )

    @property
    def platform(self) -> PlatformSupport:
        return self._locator.platform

    @property
    def locator(self) -> InstallationLocator:
        return self._locator

    @property
    def logger(self) -> BridgeLogger:
        return self._logger

    def locate(self, override_path: Path | str | None = None) -> Path | None:
        return self._locator.locate(self.app_name, override_path)

    def resolve_cli(self) -> Path | None:
        return self._resolver.resolve(self.app_name)

    def require_cli(self) -> Path:
        """Return the CLI path or raise `CliNotFoundError`."""

        cli_path = self.resolve_cli()
        if cli_path is None:
            raise CliNotFoundError(self.app_name)
        return cli_path

    def execute(self, args: Sequence[str]) -> ExecutionResult:
        """Resolve the CLI and run it with `args`."""

        return self.run(self.require_cli(), args)

    def run(self, cli_path: Path, args: Sequence[str]) -> ExecutionResult:
        """Run an already resolved CLI with `args`."""

        return self._executor.execute(cli_path, args)

    def launch(self, override_path: Path | str | None = None) -> bool:
        return self._launcher.launch(self.app_name, override_path)
