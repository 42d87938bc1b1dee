"""Execution bridge for the companion command-line tool.

Responsibilities:
- Run native CLI executables directly, without a shell.
- Run Windows batch-script CLIs through the command interpreter with a quoted,
  consistently escaped script path.
- Surface start failures and non-zero exits as `CliExecutionError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import subprocess
from typing import Sequence

from ..errors import CliExecutionError
from ..parsing import normalize_optional_string
from ..telemetry.logger import BridgeLogger, default_logger


_SHELL_SCRIPT_SUFFIXES = frozenset({".bat", ".cmd"})


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Captured output of one completed CLI invocation."""

    stdout: str
    stderr: str


def escape_batch_path(path: str) -> str:
    """Double backslashes unless the path already contains escaped ones.

    Paths handed over pre-escaped by an upstream caller are returned unchanged,
    which keeps the operation idempotent.
    """

    if "\\\\" in path:
        return path
    return path.replace("\\", "\\\\")


def quote_batch_path(path: str) -> str:
    """Escape and double-quote a batch-script path for shell invocation."""

    return f'"{escape_batch_path(path)}"'


def requires_shell(cli_path: Path | str, uses_shell_scripts: bool) -> bool:
    """Return whether `cli_path` is a script that must run through the shell."""

    return uses_shell_scripts and Path(str(cli_path)).suffix.lower() in _SHELL_SCRIPT_SUFFIXES


class CliExecutor:
    """Run the resolved CLI with caller-supplied arguments."""

    def __init__(
        self,
        uses_shell_scripts: bool = False,
        timeout_seconds: float | None = None,
        logger: BridgeLogger | None = None,
    ) -> None:
        self._uses_shell_scripts = uses_shell_scripts
        self._timeout_seconds = timeout_seconds
        self._logger = logger or default_logger()

    def execute(self, cli_path: Path | str, args: Sequence[str]) -> ExecutionResult:
        """Run `cli_path` with `args` and return its captured output.

        Raises:
            CliExecutionError: When the process cannot start, times out, or
                exits with a non-zero status.
        """

        arguments = [str(argument) for argument in args]
        if requires_shell(cli_path, self._uses_shell_scripts):
            command: str | list[str] = " ".join(
                [quote_batch_path(str(cli_path)), subprocess.list2cmdline(arguments)]
            ).rstrip()
            use_shell = True
        else:
            command = [str(cli_path), *arguments]
            use_shell = False

        self._logger.debug("execute", "start", cli=cli_path, shell=use_shell, args=len(arguments))
        try:
            result = subprocess.run(
                command,
                shell=use_shell,
                check=False,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            self._logger.failure("execute", "TimeoutExpired", cli=cli_path)
            raise CliExecutionError(
                detail=f"Command-line tool `{cli_path}` timed out after {exc.timeout} seconds.",
                stdout=_as_text(exc.stdout),
                stderr=_as_text(exc.stderr),
            ) from exc
        except OSError as exc:
            self._logger.failure("execute", type(exc).__name__, cli=cli_path)
            raise CliExecutionError(
                detail=f"Failed to start command-line tool `{cli_path}`: {exc}",
                hint="Verify the application installation and file permissions.",
            ) from exc

        stdout = result.stdout or ""
        stderr = result.stderr or ""
        if result.returncode != 0:
            self._logger.failure("execute", "NonZeroExit", cli=cli_path, returncode=result.returncode)
            details = normalize_optional_string(stderr) or "no stderr output"
            raise CliExecutionError(
                detail=f"Command-line tool exited with status {result.returncode}: {details}",
                returncode=result.returncode,
                stdout=stdout,
                stderr=stderr,
            )

        return ExecutionResult(stdout=stdout, stderr=stderr)


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)
