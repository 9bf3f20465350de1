"""Tests for single-step execution and retry bookkeeping."""

import pytest

from operations import Step, StepExecutionError, StepStatus
from operations.errors import InvalidStepStateError
from operations.executor import StepExecutor

pytestmark = pytest.mark.anyio


async def test_successful_step_is_completed_with_result(make_registry, recording_tool):
    tool = recording_tool({"data": {"shop": {"name": "Demo"}}})
    executor = StepExecutor(make_registry(execute_query=tool))
    step = Step(id="s1", tool_name="execute_query", params={"query": "{ shop { name } }"})

    result = await executor.execute(step, {})

    assert result == {"data": {"shop": {"name": "Demo"}}}
    assert step.status == StepStatus.COMPLETED
    assert step.result == result
    assert step.retry_count == 0
    assert step.execution_time_ms is not None
    assert tool.calls == [{"query": "{ shop { name } }"}]


async def test_params_are_resolved_against_context(make_registry, recording_tool):
    tool = recording_tool({"data": {"ok": True}})
    executor = StepExecutor(make_registry(execute_mutation=tool))
    step = Step(
        id="s2",
        tool_name="execute_mutation",
        params={"mutation": "m", "variables": {"id": "{{variantId}}"}},
    )

    await executor.execute(step, {"variantId": "gid://1"})

    assert tool.calls == [{"mutation": "m", "variables": {"id": "gid://1"}}]
    # Stored params keep their placeholders
    assert step.params["variables"]["id"] == "{{variantId}}"


async def test_tool_reported_error_is_retryable(make_registry, recording_tool):
    executor = StepExecutor(make_registry(t=recording_tool({"error": "Throttled"})))
    step = Step(id="s", tool_name="t", max_retries=3)

    with pytest.raises(StepExecutionError) as exc_info:
        await executor.execute(step, {})

    assert exc_info.value.terminal is False
    assert step.status == StepStatus.PENDING
    assert step.retry_count == 1
    assert step.error == "Error (retry 1/3): Throttled"


async def test_tool_exception_is_retryable(make_registry, recording_tool):
    executor = StepExecutor(make_registry(t=recording_tool(RuntimeError("connection reset"))))
    step = Step(id="s", tool_name="t")

    with pytest.raises(StepExecutionError):
        await executor.execute(step, {})

    assert step.status == StepStatus.PENDING
    assert "connection reset" in step.error


@pytest.mark.parametrize("empty", [None, {}, [], ""])
async def test_empty_result_counts_as_failure(make_registry, recording_tool, empty):
    executor = StepExecutor(make_registry(t=recording_tool(empty)))
    step = Step(id="s", tool_name="t")

    with pytest.raises(StepExecutionError):
        await executor.execute(step, {})

    assert step.error == "Error (retry 1/3): No result returned"


async def test_step_fails_once_retries_are_exhausted(make_registry, recording_tool):
    tool = recording_tool({"error": "boom"})
    executor = StepExecutor(make_registry(t=tool))
    step = Step(id="s", tool_name="t", max_retries=2)

    for _ in range(2):
        with pytest.raises(StepExecutionError) as exc_info:
            await executor.execute(step, {})
        assert exc_info.value.terminal is False

    with pytest.raises(StepExecutionError) as exc_info:
        await executor.execute(step, {})

    assert exc_info.value.terminal is True
    assert step.status == StepStatus.FAILED
    assert step.retry_count == 3
    assert step.error == "boom"
    assert tool.call_count == 3


async def test_unknown_tool_fails_immediately(make_registry):
    executor = StepExecutor(make_registry())
    step = Step(id="s", tool_name="delete_everything")

    with pytest.raises(StepExecutionError) as exc_info:
        await executor.execute(step, {})

    assert exc_info.value.terminal is True
    assert step.status == StepStatus.FAILED
    assert step.error == "Unknown tool: delete_everything"
    assert step.retry_count == 0


async def test_error_is_kept_after_later_success(make_registry, recording_tool):
    executor = StepExecutor(make_registry(t=recording_tool({"error": "flaky"}, {"data": {"ok": 1}})))
    step = Step(id="s", tool_name="t")

    with pytest.raises(StepExecutionError):
        await executor.execute(step, {})
    await executor.execute(step, {})

    assert step.status == StepStatus.COMPLETED
    assert step.retry_count == 1
    assert step.error == "Error (retry 1/3): flaky"


async def test_non_pending_step_is_rejected(make_registry, recording_tool):
    tool = recording_tool({"data": {}})
    executor = StepExecutor(make_registry(t=tool))
    step = Step(id="s", tool_name="t", status=StepStatus.COMPLETED)

    with pytest.raises(InvalidStepStateError):
        await executor.execute(step, {})
    assert tool.call_count == 0
