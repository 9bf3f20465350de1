"""Shared fixtures for the test suite."""

from typing import Any, Callable, Dict, List

import pytest

from operations import ToolRegistry


@pytest.fixture
def anyio_backend():
    return "asyncio"


class RecordingTool:
    """Async tool handler that records calls and replays scripted outcomes.

    Each outcome is returned in turn (or raised if it is an exception); the
    last outcome repeats once the script is exhausted.
    """

    def __init__(self, *outcomes: Any):
        self.outcomes: List[Any] = list(outcomes) or [{"data": {}}]
        self.calls: List[Dict[str, Any]] = []

    async def __call__(self, params: Dict[str, Any]) -> Any:
        self.calls.append(params)
        index = min(len(self.calls), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def make_registry() -> Callable[..., ToolRegistry]:
    """Build a registry from name=handler keyword arguments."""

    def _make(**tools: Any) -> ToolRegistry:
        registry = ToolRegistry()
        for name, handler in tools.items():
            registry.register(name, _as_function(handler))
        return registry

    return _make


def _as_function(handler: Any):
    async def tool(params: Dict[str, Any]) -> Any:
        return await handler(params)

    return tool


@pytest.fixture
def recording_tool():
    """The RecordingTool class, for building scripted tools inside a test."""
    return RecordingTool
