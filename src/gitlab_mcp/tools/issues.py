"""Issue tools: create_issue, list_issues."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from ..client.gitlab import GitLabClient, build_query, encode_project_path
from ..models.entities import Issue
from ..models.summaries import IssueSummary, dump_summaries
from .registry import ToolInput, register_tool


class CreateIssueInput(ToolInput):
    project: str = Field(min_length=1, description="Project ID or path")
    title: str = Field(min_length=1, description="Issue title")
    description: Optional[str] = Field(default=None, description="Issue description (markdown)")
    labels: Optional[str] = Field(default=None, description="Comma-separated labels")
    assignee_ids: Optional[List[int]] = Field(default=None, description="Array of user IDs to assign")


class ListIssuesInput(ToolInput):
    project: str = Field(min_length=1, description="Project ID or path")
    state: Literal["opened", "closed", "all"] = Field(default="opened", description="Issue state filter")
    search: Optional[str] = Field(default=None, description="Search in title and description")
    per_page: int = Field(default=20, ge=1, description="Number of results per page")


@register_tool(
    "create_issue",
    "Create a new issue in a GitLab project",
    CreateIssueInput,
)
async def create_issue(client: GitLabClient, params: CreateIssueInput) -> str:
    """Create an issue (POST /projects/{id}/issues)."""
    body: Dict[str, Any] = {"title": params.title}
    if params.description:
        body["description"] = params.description
    if params.labels:
        body["labels"] = params.labels
    if params.assignee_ids is not None:
        body["assignee_ids"] = params.assignee_ids

    issue: Issue = await client.post(f"/projects/{encode_project_path(params.project)}/issues", body)
    return f"Issue #{issue['iid']} created: {issue.get('web_url')}"


@register_tool(
    "list_issues",
    "List issues in a GitLab project",
    ListIssuesInput,
)
async def list_issues(client: GitLabClient, params: ListIssuesInput) -> str:
    """List issues (GET /projects/{id}/issues)."""
    query = build_query({
        "state": params.state,
        "per_page": params.per_page,
        "search": params.search,
    })
    issues: List[Issue] = await client.get(
        f"/projects/{encode_project_path(params.project)}/issues?{query}"
    )
    return dump_summaries(IssueSummary.from_api(i) for i in issues)
