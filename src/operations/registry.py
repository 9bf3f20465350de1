"""Tool registry mapping tool names to async handlers."""

import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from jsonschema import Draft7Validator
from langsmith import traceable

from .errors import UnknownToolError

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Dict[str, Any]], Awaitable[Any]]


class RegisteredTool:
    """A handler plus the metadata the model and the validator need."""

    def __init__(
        self,
        name: str,
        handler: ToolHandler,
        description: str = "",
        parameters: Optional[Dict[str, Any]] = None,
    ):
        self.name = name
        self.handler = handler
        self.description = description
        self.parameters = parameters or {}
        self._validator = Draft7Validator(self.parameters) if self.parameters else None

    def validation_errors(self, params: Dict[str, Any]) -> List[str]:
        if self._validator is None:
            return []
        return [error.message for error in self._validator.iter_errors(params)]

    def definition(self) -> Dict[str, Any]:
        """OpenAI function-tool definition for this tool."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters or {"type": "object", "properties": {}},
            },
        }


class ToolRegistry:
    """
    Lookup table of tools available to operation plans.

    Built once at startup. Each tool is an async callable taking the resolved
    parameters and returning {"data": ...} or {"error": "..."}.
    """

    def __init__(self):
        self._tools: Dict[str, RegisteredTool] = {}

    def register(
        self,
        name: str,
        handler: ToolHandler,
        description: str = "",
        parameters: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Register a tool handler.

        Args:
            name: Tool name the model will call
            handler: Async callable performing the operation
            description: Human readable description sent to the model
            parameters: JSON schema of the tool's parameters
        """
        if name in self._tools:
            logger.warning(f"Replacing already registered tool '{name}'")
        traced = traceable(run_type="tool", name=name)(handler)
        self._tools[name] = RegisteredTool(name, traced, description, parameters)

    def has(self, name: str) -> bool:
        return name in self._tools

    def get(self, name: str) -> RegisteredTool:
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def unknown_names(self, names: Iterable[str]) -> List[str]:
        """Return the names that do not resolve to a registered tool."""
        return [name for name in names if name not in self._tools]

    def definitions(self) -> List[Dict[str, Any]]:
        return [tool.definition() for tool in self._tools.values()]

    async def invoke(self, name: str, params: Dict[str, Any]) -> Any:
        """
        Call a tool with already resolved parameters.

        Parameter schema violations are reported in the tool result shape
        rather than raised, so they go through the normal retry path.

        Raises:
            UnknownToolError: If no tool is registered under name
        """
        tool = self.get(name)
        errors = tool.validation_errors(params)
        if errors:
            logger.warning(f"Rejected parameters for {name}: {errors}")
            return {"error": f"Invalid parameters for {name}: {'; '.join(errors)}"}
        return await tool.handler(params)
