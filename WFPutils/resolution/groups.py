"""Ordering of parameters by group for help output and prompting hints."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from ..exceptions import SchemaError
from ..schemas.parameter import Parameter, ParameterGroup

GENERAL_GROUP = "general"


def group_order(
    groups: Iterable[ParameterGroup], parameters: Iterable[Parameter]
) -> List[Tuple[ParameterGroup, List[Parameter]]]:
    """Return ``(group, member parameters)`` pairs in declared order.

    Parameters that belong to no group are collected in a trailing
    ``general`` group.
    """
    parameters = list(parameters)
    by_name = {param.name: param for param in parameters}
    ordered: List[Tuple[ParameterGroup, List[Parameter]]] = []
    grouped = set()

    for group in groups:
        members = []
        for name in group.member_names:
            if name not in by_name:
                raise SchemaError(f"group '{group.name}' references unknown parameter '{name}'")
            members.append(by_name[name])
            grouped.add(name)
        ordered.append((group, members))

    ungrouped = [param for param in parameters if param.name not in grouped]
    if ungrouped:
        general = ParameterGroup(
            name=GENERAL_GROUP,
            description="General parameters",
            member_names=tuple(param.name for param in ungrouped),
        )
        ordered.append((general, ungrouped))
    return ordered
