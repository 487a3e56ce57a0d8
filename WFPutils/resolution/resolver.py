"""Fixed-point multi-source parameter resolver.

Values come from, in order of precedence: explicit flags, legacy
``--var`` variables (both merged by the caller into ``provided``),
interactive answers, declared defaults. Pending parameters are revisited
pass after pass until every one is settled or a pass changes nothing.

Each productive pass settles at least one parameter, so an acyclic
condition graph over N parameters needs at most N passes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Set

from ..conditions import Outcome, evaluate, parse_condition, referenced_names
from ..exceptions import (
    ConfigurationError,
    ConditionEvaluationError,
    PromptAttemptsExceeded,
    RequiredParameterMissing,
    ResolutionErrors,
    UnresolvableDependencyError,
    ValidationError,
)
from ..params.sources import substitute_env
from ..params.validator import Validator
from ..schemas.parameter import Parameter, ParameterGroup
from .checks import check_definitions
from .context import ResolutionContext, ResolutionOutcome
from .prompting import PromptAdapter, build_prompt_request

logger = logging.getLogger(__name__)


class ParameterResolver:
    """Resolve parameter values for one set of definitions.

    The definitions are checked once on construction; a resolver holds no
    per-call state and can serve any number of resolution calls.
    """

    def __init__(
        self,
        parameters: Iterable[Parameter],
        groups: Iterable[ParameterGroup] = (),
        prompter: Optional[PromptAdapter] = None,
        validator: Optional[Validator] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.parameters = tuple(parameters)
        self.groups = tuple(groups)
        check_definitions(self.parameters, self.groups)

        self.prompter = prompter
        self.validator = validator or Validator()
        self.environ = environ
        self._by_name = {param.name: param for param in self.parameters}
        self._conditions = {
            param.name: parse_condition(param.condition.expression, param.name)
            for param in self.parameters
            if param.condition is not None
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def resolve(self, provided: Optional[Mapping[str, Any]] = None, interactive: bool = False) -> Dict[str, Any]:
        """Return the resolved name -> value map or raise ResolutionErrors."""
        return self.run(provided, interactive).values

    def run(self, provided: Optional[Mapping[str, Any]] = None, interactive: bool = False) -> ResolutionOutcome:
        """Resolve and report how the result was reached."""
        if interactive and self.prompter is None:
            raise ConfigurationError("interactive resolution requires a prompt adapter")

        ctx = self._start(provided or {})
        while ctx.pending:
            ctx.passes += 1
            logger.debug("Resolution pass %d: %d pending", ctx.passes, len(ctx.pending))
            if not self._run_pass(ctx, interactive):
                self._report_stalled(ctx)
                break

        if ctx.errors:
            raise ResolutionErrors(ctx.errors)
        return ctx.outcome()

    # ------------------------------------------------------------------
    # Algorithm
    # ------------------------------------------------------------------
    def _start(self, provided: Mapping[str, Any]) -> ResolutionContext:
        ctx = ResolutionContext()
        for name, value in provided.items():
            if value is None:
                continue
            param = self._by_name.get(name)
            if param is None:
                logger.debug("Passing through undeclared value '%s'", name)
                ctx.assign(name, value)
                continue
            try:
                ctx.assign(name, self.validator.validate(param, value))
            except ValidationError as exc:
                ctx.fail(name, exc)

        ctx.pending = [
            param for param in self.parameters
            if param.name not in ctx.resolved and param.name not in ctx.failed
        ]
        return ctx

    def _run_pass(self, ctx: ResolutionContext, interactive: bool) -> bool:
        changed = False
        still_pending = []
        for param in ctx.pending:
            try:
                outcome = self._condition_outcome(param, ctx)
            except ConditionEvaluationError as exc:
                ctx.fail(param.name, exc)
                changed = True
                continue

            if outcome is Outcome.UNDECIDABLE:
                still_pending.append(param)
                continue

            changed = True
            if outcome is Outcome.FALSE:
                logger.debug("Excluding '%s': condition is false", param.name)
                ctx.exclude(param.name)
            else:
                self._settle_active(param, ctx, interactive)

        ctx.pending = still_pending
        return changed

    def _condition_outcome(self, param: Parameter, ctx: ResolutionContext) -> Outcome:
        tree = self._conditions.get(param.name)
        if tree is None:
            return Outcome.TRUE
        return evaluate(tree, ctx.resolved, ctx.absent, param.name)

    def _settle_active(self, param: Parameter, ctx: ResolutionContext, interactive: bool) -> None:
        value = None
        if interactive and self.prompter.should_prompt(param):
            try:
                value = self._ask(param)
            except PromptAttemptsExceeded as exc:
                ctx.fail(param.name, exc)
                return

        if value is None and param.has_default:
            try:
                value = self.validator.validate(param, substitute_env(param.default, self.environ))
            except ValidationError as exc:
                ctx.fail(param.name, exc)
                return

        if value is not None:
            ctx.assign(param.name, value)
        elif param.required:
            condition = param.condition.expression if param.condition else None
            ctx.fail(param.name, RequiredParameterMissing(param.name, condition))
        else:
            ctx.leave_absent(param.name)

    def _ask(self, param: Parameter) -> Any:
        logger.debug("Prompting for '%s'", param.name)
        request = build_prompt_request(param, accept=lambda raw: self.validator.validate(param, raw))
        return self.prompter.prompt(request)

    def _waiting_on(self, param: Parameter, ctx: ResolutionContext) -> Set[str]:
        refs = referenced_names(self._conditions[param.name])
        return {name for name in refs if name not in ctx.resolved and name not in ctx.absent}

    def _report_stalled(self, ctx: ResolutionContext) -> None:
        """Split stalled parameters into blocked and deadlocked ones.

        A parameter waiting (directly or through other stalled parameters)
        on one that already failed is blocked; its root cause is reported
        already. Everything else is a genuine dependency cycle.
        """
        blocked: Set[str] = set()
        grew = True
        while grew:
            grew = False
            for param in ctx.pending:
                if param.name in blocked:
                    continue
                if self._waiting_on(param, ctx) & (ctx.failed | blocked):
                    blocked.add(param.name)
                    grew = True

        for name in sorted(blocked):
            logger.debug("Skipping '%s': it depends on a parameter that failed", name)
        deadlocked = [param.name for param in ctx.pending if param.name not in blocked]
        if deadlocked:
            ctx.errors.append(UnresolvableDependencyError(deadlocked))


def resolve(
    parameters: Iterable[Parameter],
    groups: Iterable[ParameterGroup] = (),
    provided: Optional[Mapping[str, Any]] = None,
    interactive: bool = False,
    prompter: Optional[PromptAdapter] = None,
) -> Dict[str, Any]:
    """Resolve ``parameters`` in one call; see ParameterResolver."""
    return ParameterResolver(parameters, groups, prompter=prompter).resolve(provided, interactive)
