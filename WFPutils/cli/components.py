"""Composable CLI components."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from ..params.sources import merge_provided, parse_var_assignments
from ..schemas.parameter import Parameter, ParameterType
from .args import param_dest

logger = logging.getLogger(__name__)


class ParameterManager:
    """Collect parameter values from parsed switches and legacy variables."""

    def __init__(self, parameters: Iterable[Parameter]):
        self.parameters = tuple(parameters)

    @staticmethod
    def parse(assignments) -> Dict[str, str]:
        return parse_var_assignments(assignments)

    @staticmethod
    def merge(legacy: Dict[str, Any], flags: Dict[str, Any]) -> Dict[str, Any]:
        return merge_provided(flags, legacy)

    def flags(self, namespace) -> Dict[str, Any]:
        """Values given through per-parameter switches."""
        values: Dict[str, Any] = {}
        for param in self.parameters:
            value = getattr(namespace, param_dest(param.name), None)
            if value is None:
                continue
            if param.type is ParameterType.MULTI_CHOICE:
                value = _split_selections(value)
            values[param.name] = value
        return values

    def collect(self, namespace, assignments) -> Dict[str, Any]:
        """Merge switches over ``--var`` assignments."""
        provided = self.merge(self.parse(assignments), self.flags(namespace))
        logger.debug("Provided values: %s", ", ".join(sorted(provided)) or "none")
        return provided


def _split_selections(values) -> List[str]:
    # --tags a,b c gives ["a", "b", "c"]
    selected: List[str] = []
    for value in values:
        selected.extend(item.strip() for item in value.split(",") if item.strip())
    return selected
