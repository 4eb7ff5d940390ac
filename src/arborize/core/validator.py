from __future__ import annotations

"""
Configuration Validation Service.

Normalizes configuration dictionaries coming from the CLI or the persisted
JSON file before they reach the services. Coerces types, fills defaults and
reports every correction as a warning (or raises in strict mode).
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from arborize.domain.config import OUTPUT_FORMATS, get_default_config
from arborize.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)

_BOOL_FIELDS = ("show_hidden", "follow_symlinks", "dirs_first", "effectful")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise ``TypeError``/``ValueError`` instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and the
        list of warnings produced while normalizing it.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    unknown = sorted(set(config) - set(defaults))
    for key in unknown:
        warnings.append(f"Unknown field '{key}' ignored.")
        merged.pop(key)

    merged["input_path"] = _as_str(
        merged.get("input_path"), defaults["input_path"], "input_path", warnings, strict
    )

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["max_depth"] = _as_optional_int(
        merged.get("max_depth"), "max_depth", warnings, strict, minimum=0
    )
    merged["timeout_seconds"] = _as_optional_float(
        merged.get("timeout_seconds"), "timeout_seconds", warnings, strict
    )

    merged["output_format"] = _as_choice(
        merged.get("output_format"), OUTPUT_FORMATS, defaults["output_format"],
        "output_format", warnings, strict,
    )
    merged["log_level"] = _as_choice(
        str(merged.get("log_level") or "").upper() or None, tuple(_LEVEL_MAP),
        defaults["log_level"], "log_level", warnings, strict,
    )

    log_file = merged.get("log_file")
    merged["log_file"] = _as_str(log_file, "", "log_file", warnings, strict) or None

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and strip string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce numeric and keyword inputs into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_optional_int(
        value: Any,
        field: str,
        warnings: List[str],
        strict: bool,
        minimum: int = 0,
) -> Optional[int]:
    """Accept None or a non-negative integer (numeric strings in lax mode)."""
    if value is None:
        return None

    candidate: Optional[int] = None
    if isinstance(value, int) and not isinstance(value, bool):
        candidate = value
    elif isinstance(value, str) and not strict and value.strip().lstrip("-").isdigit():
        candidate = int(value.strip())
        warnings.append(f"Field '{field}' converted from '{value}' to {candidate}.")

    if candidate is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using no limit.")
        return None

    if candidate < minimum:
        msg = f"Invalid field '{field}': must be >= {minimum}, received {candidate}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using no limit.")
        return None

    return candidate


def _as_optional_float(
        value: Any,
        field: str,
        warnings: List[str],
        strict: bool,
) -> Optional[float]:
    """Accept None or a positive number of seconds."""
    if value is None:
        return None

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
    elif isinstance(value, str) and not strict:
        try:
            number = float(value.strip())
        except ValueError:
            warnings.append(f"Invalid field '{field}': '{value}' is not a number. Timeout disabled.")
            return None
        warnings.append(f"Field '{field}' converted from '{value}' to {number}.")
    else:
        msg = f"Invalid field '{field}': expected number, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Timeout disabled.")
        return None

    if number <= 0:
        msg = f"Invalid field '{field}': must be positive, received {number}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Timeout disabled.")
        return None

    return number


def _as_choice(
        value: Any,
        choices: Tuple[str, ...],
        fallback: str,
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Restrict a field to a closed set of string values."""
    if value is None:
        return fallback
    if isinstance(value, str) and value in choices:
        return value

    msg = f"Invalid field '{field}': expected one of {', '.join(choices)}, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback
