"""Repository file tools: get_file, create_or_update_file."""

import base64
from typing import Literal

from pydantic import Field

from ..client.gitlab import GitLabClient, build_query, encode_file_path, encode_project_path
from ..models.entities import FileBlob
from .registry import ToolInput, register_tool


class GetFileInput(ToolInput):
    project: str = Field(min_length=1, description="Project ID or path")
    file_path: str = Field(min_length=1, description="Path to the file in the repository")
    ref: str = Field(default="main", description="Branch or commit SHA")


class CreateOrUpdateFileInput(ToolInput):
    project: str = Field(min_length=1, description="Project ID or path")
    file_path: str = Field(min_length=1, description="Path to the file")
    branch: str = Field(min_length=1, description="Branch to commit to")
    content: str = Field(description="File content")
    commit_message: str = Field(min_length=1, description="Commit message")
    action: Literal["create", "update"] = Field(
        default="create", description="Create a new file or update an existing one"
    )


def _file_endpoint(project: str, file_path: str) -> str:
    return f"/projects/{encode_project_path(project)}/repository/files/{encode_file_path(file_path)}"


@register_tool(
    "get_file",
    "Get contents of a file from the repository",
    GetFileInput,
)
async def get_file(client: GitLabClient, params: GetFileInput) -> str:
    """Read a file (GET /projects/{id}/repository/files/{path}) as UTF-8 text."""
    query = build_query({"ref": params.ref or "main"})
    blob: FileBlob = await client.get(f"{_file_endpoint(params.project, params.file_path)}?{query}")
    return base64.b64decode(blob["content"]).decode("utf-8", errors="replace")


@register_tool(
    "create_or_update_file",
    "Create or update a file in the repository",
    CreateOrUpdateFileInput,
)
async def create_or_update_file(client: GitLabClient, params: CreateOrUpdateFileInput) -> str:
    """Commit a file: POST to create, PUT to update, same endpoint."""
    endpoint = _file_endpoint(params.project, params.file_path)
    body = {
        "branch": params.branch,
        "content": params.content,
        "commit_message": params.commit_message,
    }

    if params.action == "update":
        await client.put(endpoint, body)
        verb = "updated"
    else:
        await client.post(endpoint, body)
        verb = "created"

    return f"File '{params.file_path}' {verb} on branch '{params.branch}'"
