"""Branch tools: list_branches, create_branch."""

from typing import List, Optional

from pydantic import Field

from ..client.gitlab import GitLabClient, build_query, encode_project_path
from ..models.entities import Branch
from ..models.summaries import BranchSummary, dump_summaries
from .registry import ToolInput, register_tool


class ListBranchesInput(ToolInput):
    project: str = Field(min_length=1, description="Project ID or path")
    search: Optional[str] = Field(default=None, description="Search query to filter branches")


class CreateBranchInput(ToolInput):
    project: str = Field(min_length=1, description="Project ID or path")
    branch: str = Field(min_length=1, description="Name of the new branch")
    ref: str = Field(default="main", description="Source branch or commit SHA")


@register_tool(
    "list_branches",
    "List branches in a GitLab project",
    ListBranchesInput,
)
async def list_branches(client: GitLabClient, params: ListBranchesInput) -> str:
    """List repository branches (GET /projects/{id}/repository/branches)."""
    pid = encode_project_path(params.project)
    query = build_query({"search": params.search})
    branches: List[Branch] = await client.get(f"/projects/{pid}/repository/branches?{query}")
    return dump_summaries(BranchSummary.from_api(b) for b in branches)


@register_tool(
    "create_branch",
    "Create a new branch in a GitLab project",
    CreateBranchInput,
)
async def create_branch(client: GitLabClient, params: CreateBranchInput) -> str:
    """Create a branch (POST /projects/{id}/repository/branches)."""
    pid = encode_project_path(params.project)
    branch: Branch = await client.post(
        f"/projects/{pid}/repository/branches",
        {"branch": params.branch, "ref": params.ref},
    )
    return f"Branch '{branch.get('name', params.branch)}' created successfully from '{params.ref}'"
