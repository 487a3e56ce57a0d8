"""Terminal prompt adapter built on ``input()``."""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Optional

from ..params.patterns import hint_for_pattern
from ..resolution.prompting import InputShape, PromptAdapter, PromptRequest

logger = logging.getLogger(__name__)

_YES = ("y", "yes", "true")
_NO = ("n", "no", "false")


class TerminalPromptAdapter(PromptAdapter):
    """Ask for parameter values on the terminal.

    Choices are listed with numbers; an answer may be the number or the
    value itself. An empty answer declines when there is a default or the
    parameter is optional, and asks again otherwise. End of input declines.
    """

    def __init__(self, prompt_optional: bool = False, max_attempts: Optional[int] = None,
                 input_func: Optional[Callable[[str], str]] = None, output=None):
        super().__init__(prompt_optional=prompt_optional, max_attempts=max_attempts)
        self.input_func = input_func or input
        self.output = output

    def _print(self, text: str = "") -> None:
        print(text, file=self.output or sys.stdout)

    def ask(self, request: PromptRequest, error: Optional[str]) -> Any:
        if error is None:
            self._introduce(request)
        else:
            self._print(f"  Invalid value: {error}")
            pattern = request.parameter.rules.pattern
            if pattern:
                self._print(f"  Expected: {hint_for_pattern(pattern)}")

        while True:
            try:
                answer = self.input_func(self._question(request)).strip()
            except EOFError:
                logger.debug("End of input while asking for '%s'", request.name)
                self._print()
                return None

            if answer:
                return self._interpret(request, answer)
            if request.default is not None or not request.required:
                # Declining lets the resolver apply the default.
                return None
            self._print("  A value is required.")

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _introduce(self, request: PromptRequest) -> None:
        heading = request.label
        if request.explanation:
            heading += f" (asked because {request.explanation})"
        self._print(heading)
        if request.shape in (InputShape.SINGLE_CHOICE, InputShape.MULTI_SELECT):
            for number, choice in enumerate(request.choices, start=1):
                self._print(f"  {number}) {choice}")
        if request.shape is InputShape.MULTI_SELECT:
            self._print(
                f"  Select {request.min_selections}-{request.max_selections}, separated by commas"
            )

    def _question(self, request: PromptRequest) -> str:
        question = request.name
        if request.shape is InputShape.YES_NO:
            question += " [y/n]"
        default = request.default
        if default is not None:
            if isinstance(default, (list, tuple)):
                default = ",".join(default)
            elif isinstance(default, bool):
                default = "y" if default else "n"
            question += f" (default: {default})"
        return question + ": "

    # ------------------------------------------------------------------
    # Answer mapping
    # ------------------------------------------------------------------
    def _interpret(self, request: PromptRequest, answer: str) -> Any:
        if request.shape is InputShape.YES_NO:
            lowered = answer.lower()
            if lowered in _YES:
                return True
            if lowered in _NO:
                return False
            return answer
        if request.shape is InputShape.SINGLE_CHOICE:
            return _pick(request.choices, answer)
        if request.shape is InputShape.MULTI_SELECT:
            return [_pick(request.choices, item.strip()) for item in answer.split(",") if item.strip()]
        return answer


def _pick(choices, answer: str) -> str:
    if answer.isdigit() and answer not in choices:
        index = int(answer) - 1
        if 0 <= index < len(choices):
            return choices[index]
    return answer

