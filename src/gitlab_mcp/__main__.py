"""Run the GitLab MCP server with ``python -m gitlab_mcp``."""

from .main import main

main()
