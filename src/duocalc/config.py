"""
Configuration for the calculator console.

Sources, lowest to highest precedence:
1. Defaults
2. A YAML file (top-level mapping of the fields below)
3. Environment variables DUOCALC_STATE_FILE and DUOCALC_PROMPT
4. Explicit overrides (command line flags)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .lang.errors import error_config
from .storage import DEFAULT_STATE_FILENAME

logger = logging.getLogger(__name__)

ENV_STATE_FILE = "DUOCALC_STATE_FILE"
ENV_PROMPT = "DUOCALC_PROMPT"


@dataclass(frozen=True)
class CalcConfig:
    state_file: Path = Path(DEFAULT_STATE_FILENAME)
    prompt: str = "> "
    autosave: bool = True
    show_history_on_start: bool = True


_FIELD_TYPES = {
    "state_file": (str,),
    "prompt": (str,),
    "autosave": (bool,),
    "show_history_on_start": (bool,),
}


def _coerce(values: Mapping[str, Any], origin: str) -> Dict[str, Any]:
    known = {f.name for f in fields(CalcConfig)}
    result: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            raise error_config(f"unknown configuration key '{key}' in {origin}")
        if isinstance(value, Path) and key == "state_file":
            result[key] = value
            continue
        if not isinstance(value, _FIELD_TYPES[key]):
            raise error_config(
                f"configuration key '{key}' in {origin} must be {_FIELD_TYPES[key][0].__name__}"
            )
        result[key] = Path(value) if key == "state_file" else value
    return result


def load_config_file(path: Path | str) -> Dict[str, Any]:
    """Read a YAML config file into a dict of validated fields."""
    path = Path(path)
    if not path.exists():
        raise error_config(f"config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
    except yaml.YAMLError as e:
        raise error_config(f"cannot parse config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise error_config(f"config file {path} must contain a mapping")
    return _coerce(data, str(path))


def load_config(path: Optional[Path | str] = None,
                environ: Optional[Mapping[str, str]] = None,
                **overrides: Any) -> CalcConfig:
    """
    Resolve the effective configuration.

    Args:
        path: Optional YAML config file
        environ: Environment mapping (defaults to os.environ)
        **overrides: Field values that win over every other source; None
            values are ignored

    Raises:
        ConfigError: On a missing or malformed file or an unknown key
    """
    environ = os.environ if environ is None else environ
    config = CalcConfig()

    if path is not None:
        config = replace(config, **load_config_file(path))
        logger.debug("loaded config file %s", path)

    env_values: Dict[str, Any] = {}
    if environ.get(ENV_STATE_FILE):
        env_values["state_file"] = environ[ENV_STATE_FILE]
    if ENV_PROMPT in environ:
        env_values["prompt"] = environ[ENV_PROMPT]
    config = replace(config, **_coerce(env_values, "environment"))

    explicit = {k: v for k, v in overrides.items() if v is not None}
    config = replace(config, **_coerce(explicit, "command line"))

    logger.debug("effective config: %s", config)
    return config
