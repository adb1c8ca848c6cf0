"""GitLab entity shapes and summary projections."""

from .entities import (
    Branch,
    Commit,
    FileBlob,
    Issue,
    MergeRequest,
    Project,
    SearchHit,
    User,
    UserRef,
)
from .summaries import (
    BranchSummary,
    IssueSummary,
    MergeRequestSummary,
    ProjectSummary,
    SearchResultSummary,
    Summary,
    UserSummary,
    dump_summaries,
)

__all__ = [
    "Branch",
    "BranchSummary",
    "Commit",
    "FileBlob",
    "Issue",
    "IssueSummary",
    "MergeRequest",
    "MergeRequestSummary",
    "Project",
    "ProjectSummary",
    "SearchHit",
    "SearchResultSummary",
    "Summary",
    "User",
    "UserRef",
    "UserSummary",
    "dump_summaries",
]
