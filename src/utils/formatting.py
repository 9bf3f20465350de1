"""Formatting utilities for structured data display."""

from typing import Any, Dict

from operations import PlanOrchestrator, Plan, StepStatus


_STATUS_EMOJI = {
    StepStatus.PENDING: "⏳",
    StepStatus.RUNNING: "🔄",
    StepStatus.COMPLETED: "✅",
    StepStatus.FAILED: "❌",
}


def format_nested_data(data: Any, indent: int = 0, max_depth: int = 10) -> str:
    """
    Recursively format nested data structures (dicts, lists, etc.) into readable text.

    Args:
        data: The data to format (can be dict, list, str, int, bool, etc.)
        indent: Current indentation level (internal use for recursion)
        max_depth: Maximum recursion depth to prevent infinite loops

    Returns:
        Formatted string with proper indentation and line breaks

    Examples:
        >>> print(format_nested_data({"status": "ok", "product": {"id": "gid://shopify/Product/1"}}))
        status: ok
        product:
          id: gid://shopify/Product/1
    """
    if max_depth <= 0:
        return "... (max depth reached)"

    indent_str = "  " * indent

    if data is None:
        return "None"

    if isinstance(data, bool):
        return "Yes" if data else "No"

    if isinstance(data, (int, float)):
        return str(data)

    if isinstance(data, str):
        # Truncate very long strings
        if len(data) > 500:
            return f"{data[:500]}... (truncated)"
        return data

    if isinstance(data, list):
        if not data:
            return f"{indent_str}(empty list)"

        lines = []
        for i, item in enumerate(data, 1):
            if isinstance(item, (dict, list)):
                lines.append(f"{indent_str}{i}.")
                lines.append(format_nested_data(item, indent + 1, max_depth - 1))
            else:
                lines.append(f"{indent_str}{i}. {format_nested_data(item, 0, max_depth - 1)}")
        return "\n".join(lines)

    if isinstance(data, dict):
        if not data:
            return f"{indent_str}(empty)"

        lines = []
        for key, value in data.items():
            if isinstance(value, (dict, list)):
                lines.append(f"{indent_str}{key}:")
                lines.append(format_nested_data(value, indent + 1, max_depth - 1))
            else:
                lines.append(f"{indent_str}{key}: {format_nested_data(value, 0, max_depth - 1)}")
        return "\n".join(lines)

    return str(data)


def format_plan_report(plan: Plan) -> str:
    """
    Format a plan as a short human readable report.

    Args:
        plan: Plan to describe

    Returns:
        Report with one line per step plus any step errors
    """
    summary = PlanOrchestrator.summarize(plan)
    lines = [
        f"Plan {plan.id} [{plan.status.value}]"
        + (" (aborted)" if plan.aborted else ""),
        f"Steps: {summary.completed_steps}/{summary.total_steps} completed, "
        f"{summary.pending_steps} pending, {summary.failed_steps} failed",
    ]

    for i, step in enumerate(plan.steps, 1):
        line = f"  {i}. {_STATUS_EMOJI[step.status]} {step.id} {step.tool_name}"
        if step.depends_on:
            line += f" (after {', '.join(step.depends_on)})"
        if step.retry_count:
            line += f" retries={step.retry_count}"
        if step.execution_time_ms is not None:
            line += f" {step.execution_time_ms:.1f}ms"
        lines.append(line)
        if step.error:
            lines.append(f"     {step.error}")

    return "\n".join(lines)


def format_debug_view(debug: Dict[str, Any]) -> str:
    """Format the runner's debug payload for terminal output."""
    return format_nested_data(debug)
