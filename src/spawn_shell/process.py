"""Process launcher — the single seam between invocations and the OS."""

import asyncio
import signal as signal_mod
from dataclasses import dataclass
from typing import Any

from spawn_shell import capture, environment, log
from spawn_shell.errors import KilledBySignal, NonZeroExit, SpawnError
from spawn_shell.options import Options
from spawn_shell.platforms import Platform

PIPE = asyncio.subprocess.PIPE


@dataclass(frozen=True)
class Invocation:
    program: str
    args: tuple[str, ...]
    options: Options
    # Set by the Windows shell arm: the command argument is already quoted
    verbatim: bool = False


@dataclass
class Result:
    code: int | None
    signal: str | None
    stdout: Any = None
    stderr: Any = None
    captured: tuple[str, ...] = ()

    def as_dict(self) -> dict:
        """code/signal plus only the streams that were captured."""
        result = {"code": self.code, "signal": self.signal}
        for name in self.captured:
            result[name] = getattr(self, name)
        return result


@dataclass
class Spawned:
    """A started (or vetoed) invocation. Awaiting it awaits the completion."""

    process: asyncio.subprocess.Process | None
    completion: asyncio.Future

    def __await__(self):
        return self.completion.__await__()


def _resolved(value) -> asyncio.Future:
    future = asyncio.get_running_loop().create_future()
    future.set_result(value)
    return future


def _os_args(invocation: Invocation) -> list[str]:
    args = list(invocation.args)
    # asyncio always re-quotes list arguments on Windows, so hand over the
    # command unquoted and let that quoting produce `/s /c "command"`.
    if invocation.verbatim and Platform.current() is Platform.WINDOWS and args:
        last = args[-1]
        if len(last) >= 2 and last.startswith('"') and last.endswith('"'):
            args[-1] = last[1:-1]
    return args


def _split_returncode(returncode: int) -> tuple[int | None, str | None]:
    """Map a returncode to (exit code, signal name). Negative means killed by signal."""
    if returncode < 0:
        try:
            return None, signal_mod.Signals(-returncode).name
        except ValueError:
            return None, str(-returncode)
    return returncode, None


def _child_env(options: Options) -> dict | None:
    if options.raw_env is not None:
        return dict(options.raw_env)
    if options.env is not None:
        return environment.compose(options.env)
    return None


def _echo(invocation: Invocation) -> bool:
    """Run the echo hook. Returns False when the launch was vetoed."""
    echo = invocation.options.echo_command
    if callable(echo):
        return echo(invocation.program, list(invocation.args)) is not False
    if echo:
        log.command(invocation.program, invocation.args)
    return True


async def _feed(stdin: asyncio.StreamWriter, content: str | bytes) -> None:
    data = content.encode("utf-8") if isinstance(content, str) else content
    try:
        if data:
            stdin.write(data)
            await stdin.drain()
    except (BrokenPipeError, ConnectionResetError) as e:
        # Child exited or closed stdin before reading everything
        log.debug(f"input not fully consumed: {e}")
    finally:
        stdin.close()


async def _discard(tasks: list[asyncio.Future]) -> None:
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


async def _complete(
    proc: asyncio.subprocess.Process,
    options: Options,
    captures: dict[str, asyncio.Future],
    feeder: asyncio.Future | None,
) -> Result:
    pending = list(captures.values())
    if feeder is not None:
        pending.append(feeder)

    returncode = await proc.wait()
    code, sig = _split_returncode(returncode)
    log.debug(f"process {proc.pid} finished (code={code}, signal={sig})")

    if not options.ignore_error and (code or sig):
        await _discard(pending)
        if sig:
            raise KilledBySignal(proc.pid, sig)
        raise NonZeroExit(proc.pid, code)

    # Every stream drains to the end even if another one failed
    outcomes = await asyncio.gather(*pending, return_exceptions=True)
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome

    values = dict(zip(captures, outcomes))
    return Result(
        code=code,
        signal=sig,
        stdout=values.get("stdout"),
        stderr=values.get("stderr"),
        captured=tuple(captures),
    )


async def launch(invocation: Invocation) -> Spawned:
    """Start the process described by invocation.

    Raises SpawnError if the OS cannot create the process. The returned
    completion resolves to a Result, or raises NonZeroExit, KilledBySignal
    or StreamError. A vetoing echo hook yields no process and a completion
    of None.
    """
    options = invocation.options

    if not _echo(invocation):
        log.debug(f"launch of {invocation.program} vetoed by echo hook")
        return Spawned(process=None, completion=_resolved(None))

    # Raw stdio skips input feeding and capture entirely
    handle_stdio = options.stdio is None
    if handle_stdio:
        stdin = PIPE if options.input_content is not None else None
        stdout = PIPE if options.capture_output else None
        stderr = PIPE if options.capture_error else None
    else:
        stdin, stdout, stderr = options.stdio

    try:
        proc = await asyncio.create_subprocess_exec(
            invocation.program,
            *_os_args(invocation),
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,
            env=_child_env(options),
            **options.extra,
        )
    except OSError as e:
        log.debug(f"spawn of {invocation.program} failed: {e}")
        raise SpawnError(invocation.program, e) from e
    log.debug(f"started {invocation.program} as pid {proc.pid}")

    captures: dict[str, asyncio.Future] = {}
    feeder = None
    normalize = True if options.normalize_text is None else options.normalize_text
    if handle_stdio:
        for name, reader, wanted in (
            ("stdout", proc.stdout, options.capture_output),
            ("stderr", proc.stderr, options.capture_error),
        ):
            if wanted:
                transform = wanted if callable(wanted) else None
                captures[name] = asyncio.ensure_future(
                    capture.capture(reader, name, transform, normalize)
                )
        if options.input_content is not None:
            feeder = asyncio.ensure_future(_feed(proc.stdin, options.input_content))

    completion = asyncio.ensure_future(_complete(proc, options, captures, feeder))
    return Spawned(process=proc, completion=completion)
