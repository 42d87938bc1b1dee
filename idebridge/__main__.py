"""Module entrypoint for running idebridge as ``python -m idebridge``."""

from __future__ import annotations

from idebridge.cli import main


if __name__ == "__main__":
    main()
