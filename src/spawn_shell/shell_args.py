"""Shell adapter — turn a command string into a shell invocation."""

import os
from collections.abc import Mapping, Sequence

from spawn_shell.options import Options
from spawn_shell.platforms import Platform
from spawn_shell.process import Invocation

POSIX_SHELL = "/bin/sh"
POSIX_SWITCH = ("-c",)
WINDOWS_SHELL = "cmd.exe"
WINDOWS_SWITCH = ("/s", "/c")


def _comspec(environ: Mapping) -> str | None:
    for key, value in environ.items():
        if key.upper() == "COMSPEC":
            return value
    return None


def to_invocation(
    command: str,
    options: Options,
    platform: Platform | None = None,
    environ: Mapping | None = None,
) -> Invocation:
    """Build the (program, args) pair that runs command through the system shell.

    Windows: ``<shell> /s /c "<command>"`` with verbatim arguments, shell from
    shell_name → COMSPEC → cmd.exe. POSIX: ``<shell> -c <command>``.

    asyncio re-quotes Windows arguments with list2cmdline, so a command
    containing ``"`` reaches cmd.exe backslash-escaped and may not run as
    written.
    """
    platform = platform or Platform.current()

    if platform is Platform.WINDOWS:
        if environ is None:
            environ = os.environ
        program = options.shell_name or _comspec(environ) or WINDOWS_SHELL
        switch = options.shell_switch if options.shell_switch is not None else WINDOWS_SWITCH
        args = tuple(switch) + (f'"{command}"',)
        return Invocation(program, args, options, verbatim=True)

    program = options.shell_name or POSIX_SHELL
    switch = options.shell_switch if options.shell_switch is not None else POSIX_SWITCH
    return Invocation(program, tuple(switch) + (command,), options)


def spawn_invocation(program: str, args: Sequence[str] | None, options: Options) -> Invocation:
    """Build a direct-mode invocation."""
    return Invocation(program, tuple(args or ()), options)
