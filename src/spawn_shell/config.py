"""Load option baselines from YAML files."""

import yaml

from spawn_shell.errors import ConfigError


def _check_env(name: str, env, allow_lists: bool) -> dict:
    if not isinstance(env, dict):
        raise ConfigError(f"{name} must be a mapping")
    result = {}
    for key, value in env.items():
        # Lists are kept so they can be joined as path lists
        if isinstance(value, list):
            if not allow_lists:
                raise ConfigError(f"{name}.{key} must be a string")
            result[str(key)] = [str(v) for v in value]
        elif value is None:
            result[str(key)] = ""
        else:
            result[str(key)] = str(value)
    return result


def parse_options(data) -> dict:
    """Validate a parsed YAML document and return it as an option layer."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"options must be a mapping, got {type(data).__name__}")

    options = dict(data)
    for key in ("env", "raw_env"):
        if key in options:
            options[key] = _check_env(key, options[key], allow_lists=key == "env")

    switch = options.get("shell_switch")
    if switch is not None:
        if not isinstance(switch, list) or not all(isinstance(s, str) for s in switch):
            raise ConfigError("shell_switch must be a list of strings")

    return options


def load_options(path: str) -> dict:
    """Read an option file. Raises ConfigError when missing or invalid."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"option file not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}")
    return parse_options(data)
