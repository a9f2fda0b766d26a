"""Environment composition — inherited env + base + overrides."""

import os
from collections.abc import Mapping

from spawn_shell.platforms import Platform


def _drop_case_variants(dest: dict, key: str) -> None:
    folded = key.lower()
    for name in [n for n in dest if n.lower() == folded]:
        del dest[name]


def update(dest: dict, overrides: Mapping | None, platform: Platform | None = None) -> dict:
    """Apply overrides onto dest in place and return dest.

    List values are joined with the platform's path-list separator and
    other values are stored as strings.
    On Windows a key replaces any existing key differing only by case.
    """
    if not overrides:
        return dest
    platform = platform or Platform.current()

    for key, value in overrides.items():
        if isinstance(value, (list, tuple)):
            value = platform.path_separator.join(str(v) for v in value)
        else:
            value = str(value)
        if platform.case_insensitive_env:
            _drop_case_variants(dest, key)
        dest[key] = value
    return dest


def compose(
    base: Mapping | None = None,
    overrides: Mapping | None = None,
    platform: Platform | None = None,
) -> dict:
    """Build a child environment: os.environ, then base, then overrides."""
    result = dict(os.environ)
    update(result, base, platform)
    update(result, overrides, platform)
    return result
