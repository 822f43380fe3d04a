"""Pytest fixtures for nighthawk tests."""

import io
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from rich.console import Console

from nighthawk.facts import MappingFactSource, SeoFactSource
from nighthawk.logging import reset_logging, setup_logging
from nighthawk.rules.actions import ActionContext, CallbackAction


@pytest.fixture(autouse=True)
def log_dir(tmp_path: Path) -> Iterator[Path]:
    """Route rule logs to a temporary directory."""
    directory = tmp_path / "logs"
    setup_logging(log_dir=directory)
    yield directory
    reset_logging()


@pytest.fixture
def seo_facts() -> SeoFactSource:
    """The stand-in SEO fact source with its fixed values."""
    return SeoFactSource()


@pytest.fixture
def empty_facts() -> MappingFactSource:
    """A fact source with no facts at all."""
    return MappingFactSource({})


@pytest.fixture
def output() -> io.StringIO:
    """Buffer that report actions print into."""
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    """Console writing plain text into the output buffer."""
    return Console(file=output, width=120, highlight=False)


@pytest.fixture
def action_log() -> list[str]:
    """Labels of actions in the order they ran."""
    return []


@pytest.fixture
def record(action_log: list[str]) -> Callable[[str], CallbackAction]:
    """Factory for actions that append their label to the action log."""

    def factory(label: str) -> CallbackAction:
        def perform(context: ActionContext) -> None:
            action_log.append(label)

        return CallbackAction(perform, label=label)

    return factory
