"""Value sources feeding the resolver: flags, legacy variables, defaults."""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Dict, Iterable, Mapping, Optional

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

_ENV_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def parse_var_assignments(assignments: Optional[Iterable[str]]) -> Dict[str, str]:
    """Parse legacy ``--var name=value`` switches into a raw string map.

    Later assignments of the same name win.
    """
    result: Dict[str, str] = {}
    for token in assignments or ():
        name, sep, value = token.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValidationError(
                "--var", f"invalid variable format '{token}', expected name=value (e.g. --var env=dev)"
            )
        result[name] = value
    return result


def merge_provided(flags: Optional[Mapping[str, Any]], legacy: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge legacy variables under explicit flags; flags always win."""
    merged = dict(legacy or {})
    for name, value in (flags or {}).items():
        if name in merged and merged[name] != value:
            logger.debug("Flag value for '%s' overrides legacy variable", name)
        merged[name] = value
    return merged


def has_env_placeholder(value: Any) -> bool:
    return isinstance(value, str) and _ENV_PLACEHOLDER.search(value) is not None


def substitute_env(value: Any, environ: Optional[Mapping[str, str]] = None) -> Any:
    """Replace ``${VAR}`` placeholders in string defaults.

    Unset variables are left verbatim. Non-string values pass through.
    """
    if not has_env_placeholder(value):
        return value
    env = os.environ if environ is None else environ

    def _replace(match):
        return env.get(match.group(1), match.group(0))

    resolved = _ENV_PLACEHOLDER.sub(_replace, value)
    logger.debug("Resolved default '%s' -> '%s'", value, resolved)
    return resolved
