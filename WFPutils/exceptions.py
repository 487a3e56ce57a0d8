"""Custom exception hierarchy for WFP parameter resolution."""


class WFPError(Exception):
    """Base exception for all WFP errors."""


class SchemaError(WFPError):
    """Raised when parameter definitions are invalid at load time."""

    def __init__(self, message, problems=None):
        self.problems = list(problems or [message])
        super().__init__(message)


class InvalidConditionError(SchemaError):
    """Raised when a condition expression cannot be parsed."""

    def __init__(self, expression, details, parameter=None):
        owner = f" on parameter '{parameter}'" if parameter else ""
        super().__init__(f"Invalid condition{owner} '{expression}': {details}")
        self.expression = expression
        self.details = details
        self.parameter = parameter


class ValidationError(WFPError):
    """Raised when a value fails type, range or pattern validation."""

    def __init__(self, parameter, reason):
        super().__init__(f"Parameter '{parameter}': {reason}")
        self.parameter = parameter
        self.reason = reason


class ConditionEvaluationError(WFPError):
    """Raised when a resolved value cannot be compared by a condition."""

    def __init__(self, expression, details, parameter=None):
        owner = f" for parameter '{parameter}'" if parameter else ""
        super().__init__(f"Failed to evaluate condition{owner} '{expression}': {details}")
        self.expression = expression
        self.details = details
        self.parameter = parameter


class RequiredParameterMissing(WFPError):
    """Raised when an active required parameter received no value."""

    def __init__(self, parameter, condition=None):
        if condition:
            message = f"Parameter '{parameter}' is required because condition '{condition}' is met"
        else:
            message = f"Required parameter '{parameter}' is missing"
        super().__init__(message)
        self.parameter = parameter
        self.condition = condition


class UnresolvableDependencyError(WFPError):
    """Raised when conditions wait on each other with no base case."""

    def __init__(self, names):
        self.names = list(names)
        super().__init__(
            "Conditions could not be decided for parameters: "
            + ", ".join(self.names)
            + " (circular dependency)"
        )


class PromptAttemptsExceeded(WFPError):
    """Raised when an interactive answer kept failing validation."""

    def __init__(self, parameter, attempts):
        super().__init__(f"Maximum retry attempts exceeded for parameter '{parameter}' ({attempts})")
        self.parameter = parameter
        self.attempts = attempts


class ResolutionErrors(WFPError):
    """Raised by the resolver with every error collected during one call."""

    def __init__(self, errors):
        self.errors = list(errors)
        if not self.errors:
            raise ValueError("ResolutionErrors requires at least one error")
        noun = "error" if len(self.errors) == 1 else "errors"
        super().__init__(
            f"{len(self.errors)} parameter {noun}:\n"
            + "\n".join(f"  - {error}" for error in self.errors)
        )

    def __iter__(self):
        return iter(self.errors)

    def __len__(self):
        return len(self.errors)


class TemplateError(WFPError):
    """Raised when help or report rendering fails."""


class ConfigurationError(WFPError):
    """Raised when an environment setting has an unusable value."""
