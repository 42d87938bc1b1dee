"""Composition helpers for ordered probe strategies.

A probe strategy is a named callable taking the target application name and
returning a path or `None`. Strategies run strictly in order and the first hit
wins. An exception raised inside one strategy is logged and counted as a miss,
so it never reaches the next strategy or the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from ..telemetry.logger import BridgeLogger


ProbeFunction = Callable[[str], Path | None]


@dataclass(frozen=True, slots=True)
class ProbeStrategy:
    """One discrete discovery technique.

    Attributes:
        name: Stable identifier used in log events (for example `registry`).
        probe: Callable returning a located path or `None`.
    """

    name: str
    probe: ProbeFunction


def first_success(
    strategies: Iterable[ProbeStrategy],
    app_name: str,
    logger: BridgeLogger,
) -> Path | None:
    """Run `strategies` strictly in order and return the first non-empty result."""

    for strategy in strategies:
        try:
            result = strategy.probe(app_name)
        except Exception as exc:
            logger.failure("probe", type(exc).__name__, strategy=strategy.name)
            continue
        if result is not None and str(result):
            logger.info("probe", "hit", strategy=strategy.name, path=result)
            return result
        logger.debug("probe", "miss", strategy=strategy.name)
    return None
