"""GitLab tool definitions."""

from .registry import ToolDefinition, ToolInput, ToolRegistry, register_tool, tool_registry

# Import all tool modules to trigger registration
from . import projects  # noqa: F401
from . import branches  # noqa: F401
from . import issues  # noqa: F401
from . import merge_requests  # noqa: F401
from . import files  # noqa: F401
from . import search  # noqa: F401
from . import users  # noqa: F401

__all__ = ["ToolDefinition", "ToolInput", "ToolRegistry", "register_tool", "tool_registry"]
