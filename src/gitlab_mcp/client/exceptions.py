"""Exception types raised by the GitLab client and the tool registry.

Handlers never catch these; they propagate to the MCP server layer, which
reports them to the calling agent as tool errors.
"""


class GitLabMCPError(Exception):
    """Base exception for all GitLab MCP errors."""

    pass


class GitLabApiError(GitLabMCPError):
    """API returned a non-2xx response.

    Carries enough context to reconstruct the failing call: the HTTP status,
    the raw response body and the endpoint that was requested.
    """

    def __init__(self, status_code: int, response_body: str, endpoint: str):
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint
        super().__init__(
            f"GitLab API error ({status_code}) on {endpoint}: {response_body}"
        )


class ToolNotFoundError(GitLabMCPError):
    """No tool is registered under the requested name."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ToolValidationError(GitLabMCPError):
    """Invalid input provided to a tool."""

    def __init__(self, tool_name: str, message: str):
        self.tool_name = tool_name
        super().__init__(f"Invalid arguments for tool '{tool_name}': {message}")
