"""Rule engine error classes."""


class RuleError(Exception):
    """Base class for errors raised while building or evaluating rules."""

    def __init__(self, message: str, rule: str | None = None) -> None:
        super().__init__(message)
        self.rule = rule


class EmptyConditionSet(RuleError):
    """Raised when a rule is declared without any conditions."""

    def __init__(self, rule: str | None = None) -> None:
        name = f"Rule '{rule}'" if rule else "A rule"
        super().__init__(f"{name} must declare at least one condition", rule=rule)


class DuplicateRuleError(RuleError):
    """Raised when a rule name is registered twice."""

    def __init__(self, rule: str) -> None:
        super().__init__(f"Rule '{rule}' is already registered", rule=rule)


class FactLookupError(RuleError):
    """Raised when a fact is undefined or its source is unavailable."""

    def __init__(self, fact: str, reason: str | None = None) -> None:
        message = f"Fact '{fact}' is not available"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.fact = fact


class ConditionError(RuleError):
    """Raised when a condition cannot compare the fact it read."""


class ActionError(RuleError):
    """Raised when an action fails while a rule is firing."""

    def __init__(self, message: str, rule: str | None = None, index: int = 0) -> None:
        super().__init__(message, rule=rule)
        self.index = index


class ConfigFileError(ValueError):
    """Raised when a rules or facts file does not have the expected shape."""

    def __init__(self, path: object, problem: str) -> None:
        super().__init__(f"{path}: {problem}")
        self.path = path
