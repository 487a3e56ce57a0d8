"""Per-call resolution state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Tuple

from ..exceptions import WFPError
from ..schemas.parameter import Parameter


@dataclass(frozen=True)
class ResolutionOutcome:
    """Result of one successful resolution call."""

    values: Dict[str, Any]
    passes: int
    excluded: Tuple[str, ...]
    absent: Tuple[str, ...]


@dataclass
class ResolutionContext:
    """Private mutable state of a single resolution call.

    Created fresh for every call and never shared, so concurrent calls on
    the same definitions do not interfere.
    """

    resolved: Dict[str, Any] = field(default_factory=dict)
    pending: List[Parameter] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    optional_absent: List[str] = field(default_factory=list)
    failed: Set[str] = field(default_factory=set)
    errors: List[WFPError] = field(default_factory=list)
    passes: int = 0

    @property
    def absent(self) -> Set[str]:
        """Names settled without a value; predicates over them are false."""
        return set(self.excluded) | set(self.optional_absent)

    def assign(self, name: str, value: Any) -> None:
        self.resolved[name] = value

    def exclude(self, name: str) -> None:
        self.excluded.append(name)

    def leave_absent(self, name: str) -> None:
        self.optional_absent.append(name)

    def fail(self, name: str, error: WFPError) -> None:
        self.failed.add(name)
        self.errors.append(error)

    def outcome(self) -> ResolutionOutcome:
        return ResolutionOutcome(
            values=dict(self.resolved),
            passes=self.passes,
            excluded=tuple(self.excluded),
            absent=tuple(self.optional_absent),
        )
