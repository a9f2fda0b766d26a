try:
    from importlib.metadata import version

    __version__ = version("spawn-shell")
except Exception:
    __version__ = "0.0.0"

from spawn_shell.contexts import Context
from spawn_shell.errors import (
    ConfigError,
    KilledBySignal,
    NonZeroExit,
    ProcessError,
    SpawnError,
    StreamError,
)
from spawn_shell.options import DEFAULTS, Options
from spawn_shell.process import Result, Spawned

default_context = Context(DEFAULTS)

shell = default_context.shell
exec = default_context.exec
spawn = default_context.spawn
context = default_context.context
env = default_context.env

__all__ = [
    "ConfigError",
    "Context",
    "DEFAULTS",
    "KilledBySignal",
    "NonZeroExit",
    "Options",
    "ProcessError",
    "Result",
    "SpawnError",
    "Spawned",
    "StreamError",
    "context",
    "default_context",
    "env",
    "exec",
    "shell",
    "spawn",
]
