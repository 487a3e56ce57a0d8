"""Prompt decision adapter.

The resolver decides *that* a parameter must be asked for and hands the
adapter a PromptRequest describing what to ask and why. Adapters only
supply raw answers; the request's ``accept`` hook runs the Validator, and a
rejected answer re-asks the same parameter with the error message.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import PromptAttemptsExceeded, ValidationError
from ..schemas.parameter import Parameter, ParameterType

logger = logging.getLogger(__name__)


class InputShape(Enum):
    """Kind of input control an adapter should present."""

    TEXT = "text"
    YES_NO = "yes_no"
    SINGLE_CHOICE = "single_choice"
    MULTI_SELECT = "multi_select"


_SHAPES = {
    ParameterType.STRING: InputShape.TEXT,
    ParameterType.NUMBER: InputShape.TEXT,
    ParameterType.BOOLEAN: InputShape.YES_NO,
    ParameterType.CHOICE: InputShape.SINGLE_CHOICE,
    ParameterType.MULTI_CHOICE: InputShape.MULTI_SELECT,
}


@dataclass(frozen=True)
class PromptRequest:
    """Everything an adapter needs to ask for one parameter."""

    parameter: Parameter
    label: str
    explanation: Optional[str]
    shape: InputShape
    accept: Callable[[Any], Any] = field(repr=False, compare=False)
    choices: Tuple[str, ...] = ()
    min_selections: int = 0
    max_selections: Optional[int] = None
    default: Any = None

    @property
    def name(self) -> str:
        return self.parameter.name

    @property
    def required(self) -> bool:
        return self.parameter.required


def build_prompt_request(param: Parameter, accept: Callable[[Any], Any]) -> PromptRequest:
    """Describe the prompt for an active, unresolved parameter."""
    rules = param.rules
    choices = tuple(param.choices or ())
    max_selections = None
    if param.type is ParameterType.MULTI_CHOICE:
        max_selections = rules.max_selections if rules.max_selections is not None else len(choices)
    return PromptRequest(
        parameter=param,
        label=param.label,
        explanation=param.condition.explain() if param.condition else None,
        shape=_SHAPES[param.type],
        accept=accept,
        choices=choices,
        min_selections=rules.min_selections or 0,
        max_selections=max_selections,
        default=param.default,
    )


class PromptAdapter(ABC):
    """Injected capability that obtains answers for parameters.

    ``prompt_optional`` controls whether active optional parameters without
    a default are offered too; required ones are always asked in
    interactive mode. ``max_attempts`` bounds re-prompts after validation
    failures (None means ask until a valid answer or a decline).
    """

    def __init__(self, prompt_optional: bool = False, max_attempts: Optional[int] = None):
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.prompt_optional = prompt_optional
        self.max_attempts = max_attempts

    def should_prompt(self, param: Parameter) -> bool:
        if param.required:
            return True
        return self.prompt_optional and not param.has_default

    def prompt(self, request: PromptRequest) -> Any:
        """Ask until an answer passes validation; None means declined."""
        error: Optional[str] = None
        attempts = 0
        while True:
            raw = self.ask(request, error)
            if raw is None:
                logger.debug("Prompt for '%s' declined", request.name)
                return None
            attempts += 1
            try:
                return request.accept(raw)
            except ValidationError as exc:
                error = exc.reason
                logger.debug("Answer for '%s' rejected: %s", request.name, error)
                if self.max_attempts is not None and attempts >= self.max_attempts:
                    raise PromptAttemptsExceeded(request.name, attempts) from exc

    @abstractmethod
    def ask(self, request: PromptRequest, error: Optional[str]) -> Any:
        """Return a raw answer for ``request`` or None to decline.

        ``error`` is the validation message of the previous answer, or None
        on the first attempt.
        """


class ScriptedPromptAdapter(PromptAdapter):
    """Adapter replaying canned answers, for headless runs and tests.

    ``answers`` maps a parameter name to the successive raw answers given
    for it; once a name runs out of answers its prompt is declined.
    """

    def __init__(self, answers: Mapping[str, Sequence[Any]], prompt_optional: bool = False,
                 max_attempts: Optional[int] = None):
        super().__init__(prompt_optional=prompt_optional, max_attempts=max_attempts)
        self._answers: Dict[str, List[Any]] = {name: list(values) for name, values in answers.items()}
        self.requests: List[PromptRequest] = []
        self.asked: List[Tuple[str, Optional[str]]] = []

    def ask(self, request: PromptRequest, error: Optional[str]) -> Any:
        if error is None:
            self.requests.append(request)
        self.asked.append((request.name, error))
        queue = self._answers.get(request.name)
        if not queue:
            return None
        return queue.pop(0)
