"""Code search tool: search_code."""

from typing import List

from pydantic import Field

from ..client.gitlab import GitLabClient, build_query, encode_project_path
from ..models.entities import SearchHit
from ..models.summaries import SearchResultSummary, dump_summaries
from .registry import ToolInput, register_tool


class SearchCodeInput(ToolInput):
    project: str = Field(min_length=1, description="Project ID or path")
    search: str = Field(min_length=1, description="Search query")
    per_page: int = Field(default=20, ge=1, description="Number of results per page")


@register_tool(
    "search_code",
    "Search for code in a GitLab project",
    SearchCodeInput,
)
async def search_code(client: GitLabClient, params: SearchCodeInput) -> str:
    """Search blobs in one project (GET /projects/{id}/search?scope=blobs)."""
    query = build_query({
        "scope": "blobs",
        "search": params.search,
        "per_page": params.per_page,
    })
    hits: List[SearchHit] = await client.get(
        f"/projects/{encode_project_path(params.project)}/search?{query}"
    )
    return dump_summaries(SearchResultSummary.from_api(h) for h in hits)
