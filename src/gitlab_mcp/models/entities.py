"""GitLab API response shapes.

These are annotations over the parsed JSON only. Payloads are not validated
at runtime: missing optional keys are tolerated and extra keys are ignored,
so upstream API additions never break a tool.
"""

from typing import List, Optional, TypedDict


class UserRef(TypedDict, total=False):
    id: int
    username: str
    name: str


class Project(TypedDict, total=False):
    id: int
    name: str
    path_with_namespace: str
    web_url: str
    default_branch: Optional[str]
    description: Optional[str]
    visibility: str
    created_at: str
    last_activity_at: str


class Commit(TypedDict, total=False):
    id: str
    short_id: str
    title: str
    author_name: str
    created_at: str


class Branch(TypedDict, total=False):
    name: str
    protected: bool
    commit: Commit


class Issue(TypedDict, total=False):
    id: int
    iid: int
    title: str
    description: Optional[str]
    state: str
    web_url: str
    labels: List[str]
    created_at: str
    updated_at: str
    author: UserRef
    assignees: List[UserRef]


class MergeRequest(TypedDict, total=False):
    id: int
    iid: int
    title: str
    description: Optional[str]
    state: str
    source_branch: str
    target_branch: str
    web_url: str
    author: UserRef
    reviewers: List[UserRef]
    created_at: str
    updated_at: str


class FileBlob(TypedDict, total=False):
    file_name: str
    file_path: str
    size: int
    encoding: str
    content: str
    ref: str
    blob_id: str
    commit_id: str


class SearchHit(TypedDict, total=False):
    basename: str
    data: str
    path: str
    filename: str
    id: Optional[int]
    ref: str
    startline: int
    project_id: int


class User(TypedDict, total=False):
    id: int
    username: str
    name: str
    state: str
    avatar_url: Optional[str]
    web_url: str
