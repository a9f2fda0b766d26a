"""Click entry point — sh and run commands."""

import asyncio
import signal
import sys

import click

from spawn_shell import __version__, config, log
from spawn_shell.contexts import Context
from spawn_shell.errors import ConfigError, KilledBySignal, NonZeroExit, SpawnError
from spawn_shell.options import DEFAULTS

SPAWN_FAILED = 127

# Everything after the first positional belongs to the child command
PASSTHROUGH_SETTINGS = {"ignore_unknown_options": True, "allow_interspersed_args": False}


def _common_options(f):
    f = click.option("--quiet", "-q", is_flag=True, help="Do not echo the command")(f)
    f = click.option(
        "--ignore-error", is_flag=True, help="Exit 0 even if the command fails"
    )(f)
    f = click.option("--cwd", default=None, help="Working directory for the command")(f)
    f = click.option(
        "--env", "-e", "env_pairs", multiple=True, help="Set KEY=VALUE in the environment"
    )(f)
    f = click.option(
        "--config",
        "config_path",
        default=None,
        type=click.Path(dir_okay=False),
        help="YAML file with default options",
    )(f)
    return f


def _parse_env(pairs: tuple[str, ...]) -> dict[str, str]:
    env = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--env")
        env[key] = value
    return env


def _build_context(config_path, env_pairs, cwd, ignore_error, quiet, shell_name=None) -> Context:
    """DEFAULTS → option file → command line flags."""
    ctx = Context(DEFAULTS)
    if config_path:
        try:
            ctx = ctx.context(config.load_options(config_path))
        except ConfigError as e:
            log.error(str(e))
            sys.exit(1)

    overrides = {}
    if env_pairs:
        overrides["env"] = _parse_env(env_pairs)
    if cwd:
        overrides["cwd"] = cwd
    if ignore_error:
        overrides["ignore_error"] = True
    if quiet:
        overrides["echo_command"] = False
    if shell_name:
        overrides["shell_name"] = shell_name
    return ctx.context(overrides)


def _signal_exit_code(name: str) -> int:
    try:
        return 128 + signal.Signals[name].value
    except KeyError:
        return 1


def _run(coro) -> int:
    """Drive an invocation and translate its outcome to an exit status."""
    try:
        asyncio.run(coro)
    except NonZeroExit as e:
        log.error(str(e))
        return e.code
    except KilledBySignal as e:
        log.error(str(e))
        return _signal_exit_code(e.signal)
    except SpawnError as e:
        log.error(str(e))
        return SPAWN_FAILED
    return 0


async def _spawn_and_wait(ctx: Context, program: str, args: list[str]):
    spawned = await ctx.spawn(program, args)
    return await spawned


@click.group()
@click.version_option(version=__version__, prog_name="spawn-shell")
def main():
    """Run external commands directly or through the system shell."""


@main.command(context_settings=PASSTHROUGH_SETTINGS)
@_common_options
@click.option("--shell", "shell_name", default=None, help="Shell executable to use")
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
def sh(config_path, env_pairs, cwd, ignore_error, quiet, shell_name, command):
    """Run COMMAND through the system shell."""
    ctx = _build_context(config_path, env_pairs, cwd, ignore_error, quiet, shell_name)
    sys.exit(_run(ctx.shell(" ".join(command))))


@main.command(context_settings=PASSTHROUGH_SETTINGS)
@_common_options
@click.argument("program")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def run(config_path, env_pairs, cwd, ignore_error, quiet, program, args):
    """Run PROGRAM with ARGS directly, without a shell."""
    ctx = _build_context(config_path, env_pairs, cwd, ignore_error, quiet)
    sys.exit(_run(_spawn_and_wait(ctx, program, list(args))))


if __name__ == "__main__":
    main()
