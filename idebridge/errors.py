"""Domain exceptions for discovery, execution, and CLI diagnostics."""

from __future__ import annotations


class BridgeError(RuntimeError):
    """Raised when a specific bridge stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped bridge error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class CliNotFoundError(BridgeError):
    """Raised when the companion command-line tool cannot be located."""

    def __init__(self, app_name: str) -> None:
        super().__init__(
            stage="resolve-cli",
            detail=f"Could not find the command-line tool for {app_name}.",
            hint=(
                "Install the application in a standard location; "
                "`idebridge locate --install-path <dir>` checks a custom location."
            ),
        )
        self.app_name = app_name


class CliExecutionError(BridgeError):
    """Raised when the command-line tool could not start or exited abnormally.

    Attributes:
        returncode: Process exit status, or `None` when the process never started.
        stdout: Captured standard output available at failure time.
        stderr: Captured standard error available at failure time.
    """

    def __init__(
        self,
        *,
        detail: str,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
        hint: str | None = None,
    ) -> None:
        super().__init__(stage="execute", detail=detail, hint=hint)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
