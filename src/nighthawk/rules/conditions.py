"""Condition expressions and the conjunction folder."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from nighthawk.errors import ConditionError, EmptyConditionSet, RuleError

if TYPE_CHECKING:
    from nighthawk.facts import FactSource


class ConditionType(str, Enum):
    """Comparisons a declarative condition can apply to a fact."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"

    LESS_THAN = "less_than"
    LESS_EQUAL = "less_equal"
    GREATER_THAN = "greater_than"
    GREATER_EQUAL = "greater_equal"

    CONTAINS = "contains"
    IS_TRUE = "is_true"


class Condition(BaseModel):
    """A single comparison against one named fact."""

    model_config = ConfigDict(frozen=True)

    fact: str = Field(description="Name of the fact to read")
    type: ConditionType = Field(default=ConditionType.EQUALS)
    value: Any = Field(default=None, description="Value to compare the fact against")
    negate: bool = Field(default=False, description="Invert the condition result")

    def evaluate(self, facts: FactSource) -> bool:
        """
        Check the condition against a fact source.

        Args:
            facts: Source the fact value is read from.

        Returns:
            True if the condition holds.
        """
        result = self._compare(facts.lookup(self.fact))
        return not result if self.negate else result

    def _compare(self, actual: Any) -> bool:
        value = self.value
        try:
            match self.type:
                case ConditionType.EQUALS:
                    return actual == value
                case ConditionType.NOT_EQUALS:
                    return actual != value

                case ConditionType.LESS_THAN:
                    return actual < value
                case ConditionType.LESS_EQUAL:
                    return actual <= value
                case ConditionType.GREATER_THAN:
                    return actual > value
                case ConditionType.GREATER_EQUAL:
                    return actual >= value

                case ConditionType.CONTAINS:
                    return value in actual
                case ConditionType.IS_TRUE:
                    return bool(actual)

                case _:
                    return False
        except TypeError as exc:
            raise ConditionError(
                f"Cannot apply '{self.type.value}' to fact '{self.fact}': {exc}"
            ) from exc

    def __str__(self) -> str:
        prefix = "not " if self.negate else ""
        if self.type is ConditionType.IS_TRUE:
            return f"{prefix}{self.fact}"
        return f"{prefix}{self.fact} {self.type.value} {self.value!r}"


@dataclass(frozen=True)
class Predicate:
    """A condition backed by an arbitrary callable over the fact source."""

    func: Callable[[FactSource], Any]
    label: str = ""

    def evaluate(self, facts: FactSource) -> bool:
        try:
            return bool(self.func(facts))
        except RuleError:
            raise
        except Exception as e:
            raise ConditionError(f"Predicate '{self}' failed: {e}") from e

    def __str__(self) -> str:
        return self.label or getattr(self.func, "__name__", "predicate")


@dataclass(frozen=True)
class Conjunction:
    """Short-circuiting logical AND of two expressions."""

    left: Expr
    right: Expr

    def evaluate(self, facts: FactSource) -> bool:
        """
        Evaluate left to right, stopping at the first false operand.

        The left spine is walked iteratively, so long folded chains
        are not bounded by the interpreter's recursion limit.
        """
        pending: list[Expr] = []
        node: Expr = self
        while isinstance(node, Conjunction):
            pending.append(node.right)
            node = node.left

        if not node.evaluate(facts):
            return False
        for expr in reversed(pending):
            if not expr.evaluate(facts):
                return False
        return True

    def __str__(self) -> str:
        return f"({self.left} and {self.right})"


Expr = Condition | Predicate | Conjunction


def fold(conditions: Iterable[Expr]) -> Expr:
    """
    Fold an ordered sequence of conditions into a single conjunction.

    The first two conditions form the innermost AND node and every
    following condition is ANDed on as the new right operand, giving a
    left-leaning tree with N-1 AND nodes for N conditions. A single
    condition is returned unchanged.

    Args:
        conditions: Conditions in declaration order.

    Returns:
        The compiled expression.

    Raises:
        EmptyConditionSet: If no conditions were given.
    """
    items = list(conditions)
    if not items:
        raise EmptyConditionSet()

    first, *rest = items
    if not rest:
        return first

    core: Expr = Conjunction(first, rest[0])
    for condition in rest[1:]:
        core = Conjunction(core, condition)
    return core


def leaves(expr: Expr) -> list[Expr]:
    """Return the leaf conditions of an expression in evaluation order."""
    result: list[Expr] = []
    stack = [expr]
    while stack:
        node = stack.pop()
        if isinstance(node, Conjunction):
            stack.append(node.right)
            stack.append(node.left)
        else:
            result.append(node)
    return result


def depth(expr: Expr) -> int:
    """Number of AND nodes along the left spine."""
    count = 0
    while isinstance(expr, Conjunction):
        count += 1
        expr = expr.left
    return count
