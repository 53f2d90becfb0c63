"""Loading UsageOptions from mappings, YAML files and the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ValidationError
from .models import UsageOptions

DELIMITER_ENV_VAR = "S3_USAGE_DELIMITER"
DEPTH_ENV_VAR = "S3_USAGE_DEPTH"
OUTPUT_FACTOR_ENV_VAR = "S3_USAGE_OUTPUT_FACTOR"
STORAGE_CLASSES_ENV_VAR = "S3_USAGE_STORAGE_CLASSES"

# Accepted spellings, normalized to UsageOptions field names
_KEY_ALIASES = {
    "delimiter": "delimiter",
    "depth": "depth",
    "output_factor": "output_factor",
    "outputFactor": "output_factor",
    "storage_classes": "storage_classes",
    "storageClasses": "storage_classes",
}


def options_from_mapping(data: Mapping[str, Any] | None, **overrides: Any) -> UsageOptions:
    """
    Build UsageOptions from a mapping with snake_case or camelCase keys.

    Args:
        data: Option values (None or empty for defaults)
        **overrides: Field values that take precedence over ``data``;
            None values are ignored

    Raises:
        ValidationError: On unknown keys or invalid values
    """
    kwargs: dict[str, Any] = {}
    for key, value in (data or {}).items():
        name = _KEY_ALIASES.get(key)
        if name is None:
            raise ValidationError(
                "option", key, f"unknown option; expected one of {sorted(_KEY_ALIASES)}"
            )
        kwargs[name] = value

    kwargs.update({k: v for k, v in overrides.items() if v is not None})

    if "storage_classes" in kwargs:
        classes = kwargs["storage_classes"]
        if isinstance(classes, str):
            classes = [c.strip() for c in classes.split(",") if c.strip()]
        if not isinstance(classes, list | tuple):
            raise ValidationError("storage_classes", classes, "must be a list of tier names")
        kwargs["storage_classes"] = tuple(classes)

    return UsageOptions(**kwargs)


def load_options(path: str | Path, **overrides: Any) -> UsageOptions:
    """
    Load UsageOptions from a YAML file.

    Example file:
        delimiter: /
        depth: 2
        outputFactor: 1000
        storageClasses: [STANDARD, STANDARD_IA, GLACIER, DEEP_ARCHIVE]
    """
    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("config", str(path), "YAML document must be a mapping")

    return options_from_mapping(data, **overrides)


def options_from_environment(environ: Mapping[str, str] | None = None) -> UsageOptions:
    """Create UsageOptions from S3_USAGE_* environment variables."""
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}

    if DELIMITER_ENV_VAR in env:
        data["delimiter"] = env[DELIMITER_ENV_VAR]
    if DEPTH_ENV_VAR in env:
        data["depth"] = _env_int(DEPTH_ENV_VAR, env[DEPTH_ENV_VAR])
    if OUTPUT_FACTOR_ENV_VAR in env:
        data["output_factor"] = _env_int(OUTPUT_FACTOR_ENV_VAR, env[OUTPUT_FACTOR_ENV_VAR])
    if env.get(STORAGE_CLASSES_ENV_VAR):
        data["storage_classes"] = env[STORAGE_CLASSES_ENV_VAR]

    return options_from_mapping(data)


def _env_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValidationError(name, value, "must be an integer") from None
