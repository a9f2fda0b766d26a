"""Contexts — a baseline of options bound to the shell/exec/spawn entry points."""

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from spawn_shell import environment, options, process, shell_args
from spawn_shell.options import Options


class Context:
    """Reusable default configuration plus the three entry points.

    The baseline is read-only; ``context()`` derives a new Context instead of
    changing this one.
    """

    def __init__(self, baseline: Mapping | Options | None = None):
        self.baseline = MappingProxyType(options.merge(baseline))

    @property
    def options(self) -> Options:
        return options.resolve(self.baseline)

    def _effective(self, overrides: Mapping | Options | None, kwargs: dict) -> Options:
        return options.resolve(options.merge(self.baseline, overrides, kwargs))

    async def shell(
        self, command: str, overrides: Mapping | Options | None = None, **kwargs
    ) -> process.Result | None:
        """Run command through the system shell and return its Result."""
        spawned = await self.exec(command, overrides, **kwargs)
        return await spawned

    async def exec(
        self, command: str, overrides: Mapping | Options | None = None, **kwargs
    ) -> process.Spawned:
        """Start command through the system shell; returns process and completion."""
        invocation = shell_args.to_invocation(command, self._effective(overrides, kwargs))
        return await process.launch(invocation)

    async def spawn(
        self,
        program: str,
        args: Sequence[str] | None = None,
        overrides: Mapping | Options | None = None,
        **kwargs,
    ) -> process.Spawned:
        """Start program directly with args; returns process and completion."""
        invocation = shell_args.spawn_invocation(program, args, self._effective(overrides, kwargs))
        return await process.launch(invocation)

    def context(self, overrides: Mapping | Options | None = None, **kwargs) -> "Context":
        return Context(options.merge(self.baseline, overrides, kwargs))

    env = staticmethod(environment.compose)

    def __repr__(self) -> str:
        return f"Context({dict(self.baseline)!r})"
