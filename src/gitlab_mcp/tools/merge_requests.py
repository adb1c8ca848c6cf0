"""Merge request tools: create_merge_request, list_merge_requests."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from ..client.gitlab import GitLabClient, build_query, encode_project_path
from ..models.entities import MergeRequest
from ..models.summaries import MergeRequestSummary, dump_summaries
from .registry import ToolInput, register_tool


class CreateMergeRequestInput(ToolInput):
    project: str = Field(min_length=1, description="Project ID or path")
    source_branch: str = Field(min_length=1, description="Source branch name")
    target_branch: str = Field(default="main", description="Target branch name")
    title: str = Field(min_length=1, description="MR title")
    description: Optional[str] = Field(default=None, description="MR description (markdown)")
    remove_source_branch: bool = Field(default=True, description="Delete the source branch after merge")
    reviewer_ids: Optional[List[int]] = Field(default=None, description="Array of user IDs to request review from")


class ListMergeRequestsInput(ToolInput):
    project: str = Field(min_length=1, description="Project ID or path")
    state: Literal["opened", "closed", "merged", "all"] = Field(
        default="opened", description="Merge request state filter"
    )
    per_page: int = Field(default=20, ge=1, description="Number of results per page")


@register_tool(
    "create_merge_request",
    "Create a merge request in a GitLab project",
    CreateMergeRequestInput,
)
async def create_merge_request(client: GitLabClient, params: CreateMergeRequestInput) -> str:
    """Create a merge request (POST /projects/{id}/merge_requests)."""
    body: Dict[str, Any] = {
        "source_branch": params.source_branch,
        "target_branch": params.target_branch,
        "title": params.title,
        "remove_source_branch": params.remove_source_branch,
    }
    if params.description:
        body["description"] = params.description
    if params.reviewer_ids is not None:
        body["reviewer_ids"] = params.reviewer_ids

    mr: MergeRequest = await client.post(
        f"/projects/{encode_project_path(params.project)}/merge_requests", body
    )
    return f"Merge Request !{mr['iid']} created: {mr.get('web_url')}"


@register_tool(
    "list_merge_requests",
    "List merge requests in a GitLab project",
    ListMergeRequestsInput,
)
async def list_merge_requests(client: GitLabClient, params: ListMergeRequestsInput) -> str:
    """List merge requests (GET /projects/{id}/merge_requests)."""
    query = build_query({"state": params.state, "per_page": params.per_page})
    mrs: List[MergeRequest] = await client.get(
        f"/projects/{encode_project_path(params.project)}/merge_requests?{query}"
    )
    return dump_summaries(MergeRequestSummary.from_api(mr) for mr in mrs)
