"""Rule engine: conditions, actions and evaluation."""

from nighthawk.rules.actions import (
    Action,
    ActionContext,
    ActionType,
    CallbackAction,
    LogAction,
    ReportAction,
    RuleAction,
)
from nighthawk.rules.conditions import (
    Condition,
    ConditionType,
    Conjunction,
    Predicate,
    fold,
)
from nighthawk.rules.engine import (
    EvalOutcome,
    Rule,
    RuleDefinition,
    RuleEngine,
    RuleResult,
    RuleStatus,
    evaluate,
)

__all__ = [
    "Action",
    "ActionContext",
    "ActionType",
    "CallbackAction",
    "Condition",
    "ConditionType",
    "Conjunction",
    "EvalOutcome",
    "LogAction",
    "Predicate",
    "ReportAction",
    "Rule",
    "RuleAction",
    "RuleDefinition",
    "RuleEngine",
    "RuleResult",
    "RuleStatus",
    "evaluate",
    "fold",
]
