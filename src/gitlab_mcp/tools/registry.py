"""Tool registry for the GitLab MCP tools."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp import types
from pydantic import BaseModel, ValidationError

from ..client.exceptions import ToolNotFoundError, ToolValidationError

if TYPE_CHECKING:
    from ..client.gitlab import GitLabClient

logger = logging.getLogger(__name__)

ToolHandler = Callable[["GitLabClient", Any], Awaitable[str]]


class ToolInput(BaseModel):
    """Base class for tool input models."""

    @classmethod
    def json_schema(cls) -> Dict[str, Any]:
        schema = cls.model_json_schema()
        schema.pop("title", None)
        return schema


@dataclass(frozen=True)
class ToolDefinition:
    """A named tool: description, input model and handler."""

    name: str
    description: str
    input_model: Type[ToolInput]
    handler: ToolHandler

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_model.json_schema(),
        )


def _format_errors(error: ValidationError) -> str:
    parts = []
    for issue in error.errors():
        field = ".".join(str(part) for part in issue["loc"]) or "arguments"
        parts.append(f"{field}: {issue['msg']}")
    return "; ".join(parts)


class ToolRegistry:
    """Ordered registry of tool definitions."""

    def __init__(self):
        self._tools: Dict[str, ToolDefinition] = {}

    def register(self, definition: ToolDefinition):
        """Register a tool definition."""
        if definition.name in self._tools:
            raise ValueError(f"Tool already registered: {definition.name}")

        self._tools[definition.name] = definition
        logger.debug("Registered tool: %s", definition.name)

    def get(self, name: str) -> Optional[ToolDefinition]:
        """Get a tool definition by name."""
        return self._tools.get(name)

    def list_tool_names(self) -> List[str]:
        """List all registered tool names in registration order."""
        return list(self._tools.keys())

    def list_tools(self) -> List[types.Tool]:
        """Describe every registered tool for the MCP tools/list response."""
        return [definition.to_mcp_tool() for definition in self._tools.values()]

    async def call(
        self,
        client: "GitLabClient",
        name: str,
        arguments: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Validate arguments and run a tool.

        Raises:
            ToolNotFoundError: If no tool has this name.
            ToolValidationError: If the arguments do not match the input model.
            GitLabApiError: Propagated unchanged from the client.
        """
        definition = self.get(name)
        if definition is None:
            raise ToolNotFoundError(name)

        try:
            params = definition.input_model.model_validate(arguments or {})
        except ValidationError as e:
            raise ToolValidationError(name, _format_errors(e)) from e

        return await definition.handler(client, params)


# Global tool registry instance
tool_registry = ToolRegistry()


def register_tool(name: str, description: str, input_model: Type[ToolInput]):
    """Decorator to register a tool handler."""
    def decorator(handler: ToolHandler):
        tool_registry.register(ToolDefinition(name, description, input_model, handler))
        return handler
    return decorator
