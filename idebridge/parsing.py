"""Value normalization for configuration sources.

YAML files, `IDEBRIDGE_*` environment variables, and CLI options all deliver
loosely typed values; these helpers reduce them to the shapes `BridgeConfig`
stores.
"""

from __future__ import annotations


_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})


def normalize_optional_string(value: object) -> str | None:
    """Return `value` as a stripped string, or `None` when it is missing or blank.

    Environment variables set to whitespace and YAML keys left empty both
    count as unset.
    """

    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_permissive_boolean(value: object) -> bool | None:
    """Read a boolean flag such as `revalidate_cache`.

    YAML booleans pass through unchanged. String tokens `1/0`, `true/false`,
    `yes/no`, and `on/off` are accepted case-insensitively. Anything else
    yields `None` so the caller can report which field was invalid.
    """

    if isinstance(value, bool):
        return value

    token = normalize_optional_string(value)
    if token is None:
        return None
    lowered = token.lower()
    if lowered in _TRUE_TOKENS:
        return True
    if lowered in _FALSE_TOKENS:
        return False
    return None
