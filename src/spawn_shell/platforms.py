"""Platform variant used by the shell adapter and env composition."""

import os
from enum import Enum


class Platform(Enum):
    POSIX = "posix"
    WINDOWS = "windows"

    @classmethod
    def current(cls) -> "Platform":
        return cls.WINDOWS if os.name == "nt" else cls.POSIX

    @property
    def path_separator(self) -> str:
        return ";" if self is Platform.WINDOWS else ":"

    @property
    def case_insensitive_env(self) -> bool:
        return self is Platform.WINDOWS
