"""User tools: search_users."""

from typing import List

from pydantic import Field

from ..client.gitlab import GitLabClient, build_query
from ..models.entities import User
from ..models.summaries import UserSummary, dump_summaries
from .registry import ToolInput, register_tool


class SearchUsersInput(ToolInput):
    search: str = Field(min_length=1, description="Username or name to search for")
    per_page: int = Field(default=20, ge=1, description="Number of results per page")


@register_tool(
    "search_users",
    "Search for GitLab users by username or name. Use this to resolve usernames "
    "to user IDs for assignee/reviewer assignment.",
    SearchUsersInput,
)
async def search_users(client: GitLabClient, params: SearchUsersInput) -> str:
    """Search users (GET /users). Avatar and profile URLs are dropped."""
    query = build_query({"search": params.search, "per_page": params.per_page})
    users: List[User] = await client.get(f"/users?{query}")
    return dump_summaries(UserSummary.from_api(u) for u in users)
