import os
import yaml

from listcrawl.exceptions import ConfigError

# Keys accepted in a crawl config file and the type each value must have.
CONFIG_KEYS = {
    "root": str,
    "filetype": str,
    "filter": str,
    "output": str,
    "simulate": bool,
    "max_depth": int,
    "max_urls": int,
    "workers": int,
    "timeout": (int, float),
}


def load_config_file(path: str) -> dict:
    """Load crawl options from the YAML file at `path`.

    The file holds a single mapping using the same names as the command-line
    flags, for example:

        root: http://mirror.example.com/pub/
        filetype: .iso
        filter: "x86_64"
        output: ./isos
        simulate: false

    Keys that are missing are left out of the returned dict; unknown keys and
    values of the wrong type raise ConfigError.
    """
    if not os.path.isfile(path):
        raise ConfigError(f"Config file {path!r} not found")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file {path!r} is not valid YAML: {e}") from e
    except OSError as e:
        raise ConfigError(f"Config file {path!r} could not be read: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path!r} must contain a mapping")

    cfg = {}
    for key, value in data.items():
        expected = CONFIG_KEYS.get(key)
        if expected is None:
            raise ConfigError(f"Unknown key {key!r} in config file {path!r}")
        if value is None:
            continue
        # bool is a subclass of int; don't accept `max_depth: true`
        if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
            raise ConfigError(f"Invalid value for {key!r} in config file {path!r}: {value!r}")
        cfg[key] = value
    return cfg
