"""Timestamped output + GitHub Actions error annotations."""

import os
import sys
from collections.abc import Sequence
from datetime import datetime


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _is_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def _debug_enabled() -> bool:
    return bool(os.environ.get("SPAWN_SHELL_DEBUG"))


def info(msg: str) -> None:
    print(f"[{_timestamp()}] {msg}", flush=True)


def debug(msg: str) -> None:
    if _debug_enabled():
        info(f"debug: {msg}")


def command(program: str, args: Sequence[str]) -> None:
    """Echo an invocation before it runs."""
    info(" ".join([program, *args]))


def error(msg: str) -> None:
    if _is_github_actions():
        print(f"::error::{msg}", flush=True)
    print(f"[{_timestamp()}] ERROR: {msg}", file=sys.stderr, flush=True)
