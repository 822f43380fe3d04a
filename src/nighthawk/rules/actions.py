"""Actions executed when a rule fires."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from rich.console import Console

from nighthawk.logging import get_rule_logger

if TYPE_CHECKING:
    from nighthawk.facts import FactSource

REPORT_DELIMITER = "+" * 39


@dataclass(frozen=True)
class ActionContext:
    """What an action can see about the rule that triggered it."""

    rule: str
    facts: FactSource


class Action(ABC):
    """Abstract base class for rule actions."""

    @abstractmethod
    def perform(self, context: ActionContext) -> None:
        """
        Execute the action's side effect.

        Args:
            context: The firing rule and the facts it was evaluated against.
        """
        ...


class ReportAction(Action):
    """Print a delimited report block."""

    def __init__(self, message: str, console: Console | None = None) -> None:
        self.message = message
        self.console = console or Console(highlight=False)

    def perform(self, context: ActionContext) -> None:
        self.console.print(REPORT_DELIMITER, markup=False)
        self.console.print(self.message, markup=False)
        self.console.print(REPORT_DELIMITER, markup=False)
        self.console.print()
        self.console.print()

    def __repr__(self) -> str:
        return f"ReportAction({self.message!r})"


class LogAction(Action):
    """Write a message to the firing rule's log."""

    def __init__(self, message: str, level: str = "INFO") -> None:
        self.message = message
        self.level = getattr(logging, level.upper(), logging.INFO)

    def perform(self, context: ActionContext) -> None:
        get_rule_logger(context.rule).log(self.level, self.message)

    def __repr__(self) -> str:
        return f"LogAction({self.message!r})"


class CallbackAction(Action):
    """Run an arbitrary callable with the action context."""

    def __init__(self, func: Callable[[ActionContext], object], label: str = "") -> None:
        self.func = func
        self.label = label or getattr(func, "__name__", "callback")

    def perform(self, context: ActionContext) -> None:
        self.func(context)

    def __repr__(self) -> str:
        return f"CallbackAction({self.label!r})"


class ActionType(str, Enum):
    """Action kinds that can be declared in rule files."""

    REPORT = "report"
    LOG = "log"


class RuleAction(BaseModel):
    """Declarative action specification."""

    action: ActionType = Field(default=ActionType.REPORT)
    message: str = Field(description="Message to report or log")
    level: str = Field(default="INFO", description="Log level for log actions")

    def build(self, console: Console | None = None) -> Action:
        """Create the concrete action."""
        match self.action:
            case ActionType.REPORT:
                return ReportAction(self.message, console=console)
            case ActionType.LOG:
                return LogAction(self.message, level=self.level)
            case _:
                raise ValueError(f"Unknown action type: {self.action}")
