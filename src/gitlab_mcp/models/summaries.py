"""Compact projections of GitLab entities returned to the agent.

Each summary is derived purely by selecting/renaming fields of one API
record. Fields the record does not carry are left out of the serialized
output; fields it carries as null stay null.
"""

import json
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from .entities import Branch, Issue, MergeRequest, Project, SearchHit, User


def _present(record: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    return {key: record[key] for key in keys if key in record}


class Summary(BaseModel):
    """Base class for read-only summaries."""

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict:
        return self.model_dump(exclude_unset=True)


def dump_summaries(summaries: Iterable[Summary]) -> str:
    """Serialize summaries as a pretty-printed JSON array, keeping order."""
    return json.dumps([s.to_dict() for s in summaries], indent=2)


class ProjectSummary(Summary):
    id: int
    name: str
    path_with_namespace: Optional[str] = None
    web_url: Optional[str] = None
    default_branch: Optional[str] = None

    @classmethod
    def from_api(cls, project: Project) -> "ProjectSummary":
        return cls(**_present(project, "id", "name", "path_with_namespace", "web_url", "default_branch"))


class BranchSummary(Summary):
    name: str
    protected: Optional[bool] = None
    commit_sha: Optional[str] = None
    commit_message: Optional[str] = None

    @classmethod
    def from_api(cls, branch: Branch) -> "BranchSummary":
        fields = _present(branch, "name", "protected")
        commit = branch.get("commit") or {}
        if "short_id" in commit:
            fields["commit_sha"] = commit["short_id"]
        if "title" in commit:
            fields["commit_message"] = commit["title"]
        return cls(**fields)


class IssueSummary(Summary):
    iid: int
    title: str
    state: Optional[str] = None
    web_url: Optional[str] = None
    labels: Optional[List[str]] = None
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, issue: Issue) -> "IssueSummary":
        return cls(**_present(issue, "iid", "title", "state", "web_url", "labels", "created_at"))


class MergeRequestSummary(Summary):
    iid: int
    title: str
    state: Optional[str] = None
    source_branch: Optional[str] = None
    target_branch: Optional[str] = None
    web_url: Optional[str] = None
    author: Optional[str] = None
    reviewers: Optional[List[str]] = None

    @classmethod
    def from_api(cls, mr: MergeRequest) -> "MergeRequestSummary":
        fields = _present(mr, "iid", "title", "state", "source_branch", "target_branch", "web_url")
        author = mr.get("author") or {}
        if "username" in author:
            fields["author"] = author["username"]
        if "reviewers" in mr:
            reviewers = mr["reviewers"]
            # Reviewer records without a username are skipped
            fields["reviewers"] = (
                [r["username"] for r in reviewers if r.get("username")]
                if reviewers is not None else None
            )
        return cls(**fields)


class SearchResultSummary(Summary):
    filename: Optional[str] = None
    path: Optional[str] = None
    ref: Optional[str] = None
    startline: Optional[int] = None
    data: Optional[str] = None

    @classmethod
    def from_api(cls, hit: SearchHit) -> "SearchResultSummary":
        return cls(**_present(hit, "filename", "path", "ref", "startline", "data"))


class UserSummary(Summary):
    id: int
    username: str
    name: Optional[str] = None
    state: Optional[str] = None

    @classmethod
    def from_api(cls, user: User) -> "UserSummary":
        return cls(**_present(user, "id", "username", "name", "state"))
