"""Option layering — baseline + per-call overrides into effective Options."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from spawn_shell import environment


@dataclass(frozen=True)
class Options:
    """Effective configuration of one invocation.

    None means unset: an Options used as a merge layer only overrides the
    fields it sets. ``resolve`` fills unset switches from FALLBACKS.
    """

    echo_command: bool | Callable | None = None
    ignore_error: bool | None = None
    shell_name: str | None = None
    shell_switch: tuple[str, ...] | None = None
    input_content: str | bytes | None = None
    capture_output: bool | Callable | None = None
    capture_error: bool | Callable | None = None
    normalize_text: bool | Callable | None = None
    raw_env: Mapping | None = None
    env: Mapping | None = None
    stdio: tuple | None = None
    # Anything else is forwarded to asyncio.create_subprocess_exec
    extra: Mapping[str, Any] = field(default_factory=dict)

    def as_mapping(self) -> dict:
        """Return the set fields plus extra keys."""
        result = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                result[f.name] = value
        result.update(self.extra)
        return result


OPTION_KEYS = frozenset(f.name for f in fields(Options) if f.name != "extra")

# Values of unset switches once a merged mapping is resolved
FALLBACKS = {
    "echo_command": False,
    "ignore_error": False,
    "capture_output": False,
    "capture_error": False,
    "normalize_text": True,
}
DEFAULTS = {
    "echo_command": True,
    "ignore_error": False,
    "shell_name": None,
    "shell_switch": None,
    "input_content": None,
    "capture_output": False,
    "capture_error": False,
    "normalize_text": True,
}


def _as_layer(layer: Mapping | Options) -> Mapping:
    if isinstance(layer, Options):
        return layer.as_mapping()
    return layer


def merge(*layers: Mapping | Options | None) -> dict:
    """Merge option layers left to right into a new dict.

    Later layers win key by key. When both sides carry an ``env`` mapping
    the two are merged with env override semantics instead of replaced.
    Env mappings are copied, so the result never shares them with a layer.
    """
    result: dict = {}
    for layer in layers:
        if layer is None:
            continue
        for key, value in _as_layer(layer).items():
            current = result.get(key)
            if key == "env" and current and value is not None:
                result[key] = environment.update(dict(current), value)
            elif key in ("env", "raw_env") and isinstance(value, Mapping):
                result[key] = dict(value)
            else:
                result[key] = value
    return result


def resolve(mapping: Mapping) -> Options:
    """Turn a merged option mapping into an Options value."""
    known = {k: v for k, v in mapping.items() if k in OPTION_KEYS}
    extra = {k: v for k, v in mapping.items() if k not in OPTION_KEYS}

    for key, fallback in FALLBACKS.items():
        if known.get(key) is None:
            known[key] = fallback
    switch = known.get("shell_switch")
    if switch is not None:
        known["shell_switch"] = tuple(switch)
    stdio = known.get("stdio")
    if stdio is not None:
        if len(stdio) != 3:
            raise ValueError(f"stdio needs 3 entries (stdin, stdout, stderr), got {len(stdio)}")
        known["stdio"] = tuple(stdio)

    return Options(**known, extra=extra)
