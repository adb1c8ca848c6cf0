"""GitLab REST API client."""

from .exceptions import (
    GitLabApiError,
    GitLabMCPError,
    ToolNotFoundError,
    ToolValidationError,
)
from .gitlab import (
    ClientConfig,
    GitLabClient,
    build_query,
    encode_file_path,
    encode_project_path,
)

__all__ = [
    "ClientConfig",
    "GitLabApiError",
    "GitLabClient",
    "GitLabMCPError",
    "ToolNotFoundError",
    "ToolValidationError",
    "build_query",
    "encode_file_path",
    "encode_project_path",
]
