"""Rule evaluation and the rule registry."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from nighthawk.errors import ActionError, DuplicateRuleError, EmptyConditionSet, RuleError
from nighthawk.logging import get_rule_logger
from nighthawk.rules.actions import Action, ActionContext, CallbackAction, RuleAction
from nighthawk.rules.conditions import Condition, Conjunction, Expr, Predicate, fold

if TYPE_CHECKING:
    from rich.console import Console

    from nighthawk.facts import FactSource


class EvalOutcome(str, Enum):
    """Result of evaluating a rule whose conditions could be read."""

    FIRED = "fired"
    NOT_FIRED = "not_fired"


class RuleStatus(str, Enum):
    """Per-rule status reported by a registry run."""

    FIRED = "fired"
    NOT_FIRED = "not_fired"
    FAILED = "failed"


def _as_expression(condition: Any) -> Expr:
    if isinstance(condition, (Condition, Predicate, Conjunction)):
        return condition
    if callable(condition):
        return Predicate(condition)
    raise TypeError(f"Not a condition: {condition!r}")


def _as_action(action: Any) -> Action:
    if isinstance(action, Action):
        return action
    if callable(action):
        return CallbackAction(action)
    raise TypeError(f"Not an action: {action!r}")


@dataclass(frozen=True)
class Rule:
    """A named, compiled condition with the actions it triggers."""

    name: str
    condition: Expr
    actions: tuple[Action, ...] = ()
    description: str | None = None

    @classmethod
    def define(
        cls,
        name: str,
        conditions: Iterable[Expr | Callable[[FactSource], Any]],
        actions: Iterable[Action | Callable[[ActionContext], Any]] = (),
        description: str | None = None,
    ) -> Rule:
        """
        Build a rule, folding its conditions into one conjunction.

        Args:
            name: Rule name.
            conditions: Conditions in declaration order. Plain callables
                taking the fact source are wrapped as predicates.
            actions: Actions in execution order. Plain callables taking
                the action context are wrapped as callback actions.
            description: Optional human-readable description.

        Raises:
            EmptyConditionSet: If no conditions were given.
        """
        exprs = [_as_expression(c) for c in conditions]
        try:
            condition = fold(exprs)
        except EmptyConditionSet:
            raise EmptyConditionSet(name) from None
        return cls(
            name=name,
            condition=condition,
            actions=tuple(_as_action(a) for a in actions),
            description=description,
        )

    def matches(self, facts: FactSource) -> bool:
        """Check the compiled condition against the facts."""
        try:
            return self.condition.evaluate(facts)
        except RuleError as e:
            if e.rule is None:
                e.rule = self.name
            raise


def evaluate(rule: Rule, facts: FactSource) -> EvalOutcome:
    """
    Evaluate a rule and run its actions if the conditions hold.

    Actions run in declaration order. If one fails, the remaining
    actions are skipped and the failure propagates; earlier actions
    have already taken effect.

    Args:
        rule: The rule to evaluate.
        facts: Source the conditions read from.

    Returns:
        FIRED if the conditions held and every action ran, NOT_FIRED otherwise.

    Raises:
        FactLookupError: If a condition reads an unavailable fact.
        ConditionError: If a condition cannot compare its fact or a predicate raises.
        ActionError: If an action fails.
    """
    if not rule.matches(facts):
        return EvalOutcome.NOT_FIRED

    context = ActionContext(rule=rule.name, facts=facts)
    for index, action in enumerate(rule.actions):
        try:
            action.perform(context)
        except Exception as e:
            raise ActionError(
                f"Action {index} ({action!r}) of rule '{rule.name}' failed: {e}",
                rule=rule.name,
                index=index,
            ) from e

    return EvalOutcome.FIRED


@dataclass(frozen=True)
class RuleResult:
    """Outcome of one rule within a registry run."""

    name: str
    outcome: EvalOutcome | None = None
    error: RuleError | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if (self.outcome is None) == (self.error is None):
            raise ValueError("RuleResult needs exactly one of outcome or error")

    @property
    def status(self) -> RuleStatus:
        if self.error is not None:
            return RuleStatus.FAILED
        return RuleStatus(self.outcome.value)

    @property
    def failed(self) -> bool:
        return self.error is not None


class RuleDefinition(BaseModel):
    """Declarative form of a rule, as stored in rule files."""

    name: str = Field(description="Rule name")
    description: str | None = Field(default=None, description="Rule description")
    enabled: bool = Field(default=True, description="Whether the rule is active")
    conditions: list[Condition] = Field(default_factory=list)
    actions: list[RuleAction] = Field(default_factory=list)

    def compile(self, console: Console | None = None) -> Rule:
        """Compile into an executable rule."""
        return Rule.define(
            self.name,
            self.conditions,
            [a.build(console=console) for a in self.actions],
            description=self.description,
        )


class RuleEngine:
    """Ordered registry of compiled rules."""

    def __init__(self, rules: Iterable[Rule] | None = None) -> None:
        """
        Initialize the rule engine.

        Args:
            rules: Rules to register, in evaluation order.
        """
        self._rules: list[Rule] = []
        for rule in rules or []:
            self.register(rule)

    @classmethod
    def from_definitions(
        cls,
        definitions: Iterable[RuleDefinition | dict[str, Any]],
        console: Console | None = None,
    ) -> RuleEngine:
        """Compile and register every enabled rule definition."""
        engine = cls()
        for item in definitions:
            definition = (
                item if isinstance(item, RuleDefinition) else RuleDefinition.model_validate(item)
            )
            if definition.enabled:
                engine.register(definition.compile(console=console))
        return engine

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def get(self, name: str) -> Rule | None:
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def register(self, rule: Rule) -> None:
        """Add a rule after the ones already registered."""
        if self.get(rule.name) is not None:
            raise DuplicateRuleError(rule.name)
        self._rules.append(rule)

    def remove_rule(self, name: str) -> bool:
        """Remove a rule by name."""
        original_count = len(self._rules)
        self._rules = [r for r in self._rules if r.name != name]
        return len(self._rules) < original_count

    def run_all(self, facts: FactSource) -> list[RuleResult]:
        """
        Evaluate every rule once, in registration order.

        A rule that fails is recorded with its error and the run moves
        on to the next rule.

        Args:
            facts: Source the conditions read from.

        Returns:
            One result per rule.
        """
        results = []
        for rule in self._rules:
            logger = get_rule_logger(rule.name)
            try:
                outcome = evaluate(rule, facts)
            except RuleError as e:
                logger.error("Evaluation failed: %s", e)
                results.append(RuleResult(name=rule.name, error=e))
                continue

            logger.info("Rule %s", outcome.value.replace("_", " "))
            results.append(RuleResult(name=rule.name, outcome=outcome))
        return results
