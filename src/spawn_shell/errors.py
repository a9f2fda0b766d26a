"""Failure taxonomy for process invocations."""


class ProcessError(RuntimeError):
    """Base class for every failure of an invocation."""

    reason = "ProcessError"


class SpawnError(ProcessError):
    """The OS refused to create the process."""

    reason = "SpawnError"

    def __init__(self, program: str, cause: OSError):
        self.program = program
        super().__init__(f"Failed to start {program}: {cause.strerror or cause}")


class NonZeroExit(ProcessError):
    reason = "NonZeroExit"

    def __init__(self, pid: int, code: int):
        self.pid = pid
        self.code = code
        super().__init__(f"Process {pid} exited with code {code}")


class KilledBySignal(ProcessError):
    reason = "KilledBySignal"

    def __init__(self, pid: int, signal: str):
        self.pid = pid
        self.signal = signal
        super().__init__(f"Process {pid} was terminated by signal {signal}")


class StreamError(ProcessError):
    """Reading a captured stream failed; captured data is incomplete."""

    reason = "StreamError"

    def __init__(self, stream: str, detail: str = ""):
        self.stream = stream
        msg = f"Failed to read {stream} of process"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class ConfigError(RuntimeError):
    """An option file could not be loaded."""
