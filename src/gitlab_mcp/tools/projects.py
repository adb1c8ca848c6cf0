"""Project tools: list_projects, get_project."""

import json
from typing import List, Optional

from pydantic import Field

from ..client.gitlab import GitLabClient, build_query, encode_project_path
from ..models.entities import Project
from ..models.summaries import ProjectSummary, dump_summaries
from .registry import ToolInput, register_tool


class ListProjectsInput(ToolInput):
    search: Optional[str] = Field(default=None, description="Search query to filter projects")
    per_page: int = Field(default=20, ge=1, description="Number of results per page")


class GetProjectInput(ToolInput):
    project: str = Field(min_length=1, description="Project ID or path (e.g., 'group/project')")


@register_tool(
    "list_projects",
    "List GitLab projects accessible to the user",
    ListProjectsInput,
)
async def list_projects(client: GitLabClient, params: ListProjectsInput) -> str:
    """List projects (GET /projects)."""
    query = build_query({"per_page": params.per_page, "search": params.search})
    projects: List[Project] = await client.get(f"/projects?{query}")
    return dump_summaries(ProjectSummary.from_api(p) for p in projects)


@register_tool(
    "get_project",
    "Get details of a specific GitLab project",
    GetProjectInput,
)
async def get_project(client: GitLabClient, params: GetProjectInput) -> str:
    """Get the full project record (GET /projects/{id})."""
    project: Project = await client.get(f"/projects/{encode_project_path(params.project)}")
    return json.dumps(project, indent=2)
