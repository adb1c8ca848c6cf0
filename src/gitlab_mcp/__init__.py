"""GitLab MCP server: GitLab REST API v4 exposed as MCP tools."""

__version__ = "1.0.0"
