"""Compile-condition encoding for the IDE command-line tool.

A compile condition selects the startup page (and optional page query) the
IDE uses when it next compiles a miniprogram project.
"""

from __future__ import annotations


def build_compile_condition(
    condition_name: str,
    page_path: str,
    query: str | None = None,
    simulate_update: bool = False,
) -> str:
    """Encode a compile condition as `name@page[@query][@1]`.

    Simulating an update without a query keeps the empty query slot, producing
    `name@page@@1`.
    """

    condition = f"{condition_name}@{page_path}"
    if query:
        condition += f"@{query}"
        if simulate_update:
            condition += "@1"
    elif simulate_update:
        condition += "@@1"
    return condition
