"""Test the GitLab tool handlers through the tool registry."""

import base64
import json

import pytest

from gitlab_mcp.client.exceptions import GitLabApiError
from gitlab_mcp.tools import tool_registry
from tests.factories import (
    make_branch,
    make_file,
    make_issue,
    make_merge_request,
    make_project,
    make_search_hit,
    make_user,
)


async def _call(client, name, arguments):
    return await tool_registry.call(client, name, arguments)


class TestProjectTools:
    """Test list_projects and get_project."""

    @pytest.mark.asyncio
    async def test_list_projects_default_query(self, mock_client):
        mock_client.get.return_value = []

        await _call(mock_client, "list_projects", {})

        mock_client.get.assert_awaited_once_with("/projects?per_page=20")

    @pytest.mark.asyncio
    async def test_list_projects_with_search(self, mock_client):
        mock_client.get.return_value = []

        await _call(mock_client, "list_projects", {"search": "api", "per_page": 5})

        mock_client.get.assert_awaited_once_with("/projects?per_page=5&search=api")

    @pytest.mark.asyncio
    async def test_list_projects_passes_large_page_size_through(self, mock_client):
        mock_client.get.return_value = []

        await _call(mock_client, "list_projects", {"per_page": 150})

        mock_client.get.assert_awaited_once_with("/projects?per_page=150")

    @pytest.mark.asyncio
    async def test_list_projects_keeps_explicit_nulls(self, mock_client):
        empty = make_project(default_branch=None)
        del empty["web_url"]
        mock_client.get.return_value = [empty]

        result = json.loads(await _call(mock_client, "list_projects", {}))

        assert result[0]["default_branch"] is None
        assert "web_url" not in result[0]

    @pytest.mark.asyncio
    async def test_list_projects_summary_keeps_order(self, mock_client):
        mock_client.get.return_value = [
            make_project(id=3, name="third"),
            make_project(id=1, name="first"),
            make_project(id=2, name="second"),
        ]

        result = json.loads(await _call(mock_client, "list_projects", {}))

        assert [p["id"] for p in result] == [3, 1, 2]
        assert result[0] == {
            "id": 3,
            "name": "third",
            "path_with_namespace": "group/test-project",
            "web_url": "https://gitlab.com/group/test-project",
            "default_branch": "main",
        }
        assert "description" not in result[0]
        assert "visibility" not in result[0]

    @pytest.mark.asyncio
    async def test_get_project_returns_raw_record(self, mock_client):
        project = make_project(star_count=4)
        mock_client.get.return_value = project

        result = await _call(mock_client, "get_project", {"project": "group/test-project"})

        mock_client.get.assert_awaited_once_with("/projects/group%2Ftest-project")
        assert json.loads(result) == project

    @pytest.mark.asyncio
    async def test_get_project_propagates_api_error(self, mock_client):
        mock_client.get.side_effect = GitLabApiError(404, '{"message":"404 Project Not Found"}', "/projects/999")

        with pytest.raises(GitLabApiError) as exc_info:
            await _call(mock_client, "get_project", {"project": "999"})

        assert exc_info.value.status_code == 404
        assert exc_info.value.endpoint == "/projects/999"


class TestBranchTools:
    """Test list_branches and create_branch."""

    @pytest.mark.asyncio
    async def test_list_branches_empty_query(self, mock_client):
        mock_client.get.return_value = [make_branch()]

        await _call(mock_client, "list_branches", {"project": "group/project"})

        mock_client.get.assert_awaited_once_with("/projects/group%2Fproject/repository/branches?")

    @pytest.mark.asyncio
    async def test_list_branches_with_search(self, mock_client):
        mock_client.get.return_value = []

        await _call(mock_client, "list_branches", {"project": "1", "search": "feat"})

        mock_client.get.assert_awaited_once_with("/projects/1/repository/branches?search=feat")

    @pytest.mark.asyncio
    async def test_list_branches_commit_fields(self, mock_client):
        no_commit = make_branch(name="orphan")
        del no_commit["commit"]
        mock_client.get.return_value = [make_branch(), no_commit]

        result = json.loads(await _call(mock_client, "list_branches", {"project": "1"}))

        assert len(result) == 2
        assert result[0] == {
            "name": "feature-branch",
            "protected": False,
            "commit_sha": "abc123d",
            "commit_message": "Initial commit",
        }
        assert result[1]["name"] == "orphan"
        assert "commit_sha" not in result[1]
        assert "commit_message" not in result[1]

    @pytest.mark.asyncio
    async def test_create_branch_defaults_ref_to_main(self, mock_client):
        mock_client.post.return_value = make_branch(name="new-feature")

        result = await _call(mock_client, "create_branch", {"project": "group/project", "branch": "new-feature"})

        mock_client.post.assert_awaited_once_with(
            "/projects/group%2Fproject/repository/branches",
            {"branch": "new-feature", "ref": "main"},
        )
        assert result == "Branch 'new-feature' created successfully from 'main'"

    @pytest.mark.asyncio
    async def test_create_branch_custom_ref(self, mock_client):
        mock_client.post.return_value = make_branch(name="hotfix")

        result = await _call(mock_client, "create_branch", {"project": "1", "branch": "hotfix", "ref": "v1.2.0"})

        assert "hotfix" in result
        assert "v1.2.0" in result


class TestIssueTools:
    """Test create_issue and list_issues."""

    @pytest.mark.asyncio
    async def test_create_issue_minimal_body(self, mock_client):
        mock_client.post.return_value = make_issue(iid=42)

        await _call(mock_client, "create_issue", {"project": "1", "title": "Bug"})

        mock_client.post.assert_awaited_once_with("/projects/1/issues", {"title": "Bug"})

    @pytest.mark.asyncio
    async def test_create_issue_with_optional_fields(self, mock_client):
        mock_client.post.return_value = make_issue(iid=42)

        await _call(mock_client, "create_issue", {
            "project": "group/project",
            "title": "Bug",
            "description": "Steps to reproduce",
            "labels": "bug,urgent",
            "assignee_ids": [1, 2],
        })

        mock_client.post.assert_awaited_once_with(
            "/projects/group%2Fproject/issues",
            {
                "title": "Bug",
                "description": "Steps to reproduce",
                "labels": "bug,urgent",
                "assignee_ids": [1, 2],
            },
        )

    @pytest.mark.asyncio
    async def test_create_issue_confirmation(self, mock_client):
        mock_client.post.return_value = make_issue(
            iid=42, web_url="https://gitlab.com/group/project/-/issues/42"
        )

        result = await _call(mock_client, "create_issue", {"project": "1", "title": "Bug"})

        assert result == "Issue #42 created: https://gitlab.com/group/project/-/issues/42"

    @pytest.mark.asyncio
    async def test_list_issues_default_query(self, mock_client):
        mock_client.get.return_value = []

        await _call(mock_client, "list_issues", {"project": "1"})

        mock_client.get.assert_awaited_once_with("/projects/1/issues?state=opened&per_page=20")

    @pytest.mark.asyncio
    async def test_list_issues_with_filters(self, mock_client):
        mock_client.get.return_value = []

        await _call(mock_client, "list_issues", {"project": "1", "state": "closed", "search": "crash", "per_page": 50})

        mock_client.get.assert_awaited_once_with("/projects/1/issues?state=closed&per_page=50&search=crash")

    @pytest.mark.asyncio
    async def test_list_issues_summary(self, mock_client):
        mock_client.get.return_value = [make_issue(iid=2), make_issue(iid=1, labels=[])]

        result = json.loads(await _call(mock_client, "list_issues", {"project": "1", "state": "all"}))

        assert [i["iid"] for i in result] == [2, 1]
        assert result[0] == {
            "iid": 2,
            "title": "Test Issue",
            "state": "opened",
            "web_url": "https://gitlab.com/group/test-project/-/issues/1",
            "labels": ["bug"],
            "created_at": "2024-01-01T00:00:00Z",
        }
        assert result[1]["labels"] == []
        assert "description" not in result[0]

    @pytest.mark.asyncio
    async def test_list_issues_summary_omits_missing_labels(self, mock_client):
        issue = make_issue()
        del issue["labels"]
        mock_client.get.return_value = [issue]

        result = json.loads(await _call(mock_client, "list_issues", {"project": "1"}))

        assert "labels" not in result[0]


class TestMergeRequestTools:
    """Test create_merge_request and list_merge_requests."""

    @pytest.mark.asyncio
    async def test_create_merge_request_default_body(self, mock_client):
        mock_client.post.return_value = make_merge_request(iid=99)

        await _call(mock_client, "create_merge_request", {
            "project": "1",
            "source_branch": "feature",
            "title": "Test",
        })

        endpoint, body = mock_client.post.await_args.args
        assert endpoint == "/projects/1/merge_requests"
        assert body == {
            "source_branch": "feature",
            "target_branch": "main",
            "title": "Test",
            "remove_source_branch": True,
        }
        assert "description" not in body

    @pytest.mark.asyncio
    async def test_create_merge_request_with_optional_fields(self, mock_client):
        mock_client.post.return_value = make_merge_request(iid=99)

        await _call(mock_client, "create_merge_request", {
            "project": "group/project",
            "source_branch": "feature",
            "target_branch": "develop",
            "title": "Test",
            "description": "Implements the thing",
            "remove_source_branch": False,
            "reviewer_ids": [5],
        })

        mock_client.post.assert_awaited_once_with(
            "/projects/group%2Fproject/merge_requests",
            {
                "source_branch": "feature",
                "target_branch": "develop",
                "title": "Test",
                "remove_source_branch": False,
                "description": "Implements the thing",
                "reviewer_ids": [5],
            },
        )

    @pytest.mark.asyncio
    async def test_create_merge_request_confirmation(self, mock_client):
        mock_client.post.return_value = make_merge_request(
            iid=99, web_url="https://gitlab.com/group/project/-/merge_requests/99"
        )

        result = await _call(mock_client, "create_merge_request", {
            "project": "1",
            "source_branch": "feature",
            "title": "Test",
        })

        assert result == "Merge Request !99 created: https://gitlab.com/group/project/-/merge_requests/99"

    @pytest.mark.asyncio
    async def test_list_merge_requests_query(self, mock_client):
        mock_client.get.return_value = []

        await _call(mock_client, "list_merge_requests", {"project": "group/project", "state": "merged"})

        mock_client.get.assert_awaited_once_with(
            "/projects/group%2Fproject/merge_requests?state=merged&per_page=20"
        )

    @pytest.mark.asyncio
    async def test_list_merge_requests_summary(self, mock_client):
        with_reviewers = make_merge_request(
            iid=2,
            reviewers=[{"id": 3, "username": "alice"}, {"id": 4, "username": "bob"}],
        )
        no_author = make_merge_request(iid=1)
        del no_author["author"]
        mock_client.get.return_value = [with_reviewers, no_author]

        result = json.loads(await _call(mock_client, "list_merge_requests", {"project": "1"}))

        assert [mr["iid"] for mr in result] == [2, 1]
        assert result[0]["author"] == "testuser"
        assert result[0]["reviewers"] == ["alice", "bob"]
        assert result[0]["source_branch"] == "feature-branch"
        assert "author" not in result[1]
        assert "reviewers" not in result[1]


class TestFileTools:
    """Test get_file and create_or_update_file."""

    @pytest.mark.asyncio
    async def test_get_file_encodes_paths(self, mock_client):
        mock_client.get.return_value = make_file()

        await _call(mock_client, "get_file", {
            "project": "group/project",
            "file_path": "src/index.ts",
            "ref": "develop",
        })

        mock_client.get.assert_awaited_once_with(
            "/projects/group%2Fproject/repository/files/src%2Findex.ts?ref=develop"
        )

    @pytest.mark.asyncio
    async def test_get_file_default_ref(self, mock_client):
        mock_client.get.return_value = make_file()

        await _call(mock_client, "get_file", {"project": "1", "file_path": "README.md"})

        mock_client.get.assert_awaited_once_with("/projects/1/repository/files/README.md?ref=main")

    @pytest.mark.asyncio
    async def test_get_file_decodes_base64_content(self, mock_client):
        text = "console.log('Hello');\n// café ✓\n"
        mock_client.get.return_value = make_file(
            content=base64.b64encode(text.encode("utf-8")).decode("ascii")
        )

        result = await _call(mock_client, "get_file", {"project": "1", "file_path": "index.js"})

        assert result == text

    @pytest.mark.asyncio
    async def test_get_file_replaces_undecodable_bytes(self, mock_client):
        mock_client.get.return_value = make_file(
            content=base64.b64encode(b"\x89PNG\xff\xfe").decode("ascii")
        )

        result = await _call(mock_client, "get_file", {"project": "1", "file_path": "logo.png"})

        assert result == "\ufffdPNG\ufffd\ufffd"

    @pytest.mark.asyncio
    async def test_create_file_uses_post(self, mock_client):
        result = await _call(mock_client, "create_or_update_file", {
            "project": "1",
            "file_path": "src/new-file.ts",
            "branch": "feature",
            "content": "export const x = 1;",
            "commit_message": "Add new file",
        })

        mock_client.post.assert_awaited_once_with(
            "/projects/1/repository/files/src%2Fnew-file.ts",
            {
                "branch": "feature",
                "content": "export const x = 1;",
                "commit_message": "Add new file",
            },
        )
        mock_client.put.assert_not_awaited()
        assert result == "File 'src/new-file.ts' created on branch 'feature'"

    @pytest.mark.asyncio
    async def test_update_file_uses_put(self, mock_client):
        result = await _call(mock_client, "create_or_update_file", {
            "project": "1",
            "file_path": "src/new-file.ts",
            "branch": "main",
            "content": "updated content",
            "commit_message": "Update file",
            "action": "update",
        })

        mock_client.put.assert_awaited_once_with(
            "/projects/1/repository/files/src%2Fnew-file.ts",
            {
                "branch": "main",
                "content": "updated content",
                "commit_message": "Update file",
            },
        )
        mock_client.post.assert_not_awaited()
        assert result == "File 'src/new-file.ts' updated on branch 'main'"


class TestSearchTools:
    """Test search_code."""

    @pytest.mark.asyncio
    async def test_search_code_default_per_page(self, mock_client):
        mock_client.get.return_value = []

        await _call(mock_client, "search_code", {"project": "1", "search": "test"})

        mock_client.get.assert_awaited_once_with("/projects/1/search?scope=blobs&search=test&per_page=20")

    @pytest.mark.asyncio
    async def test_search_code_empty_result(self, mock_client):
        mock_client.get.return_value = []

        result = await _call(mock_client, "search_code", {"project": "1", "search": "nothing"})

        assert json.loads(result) == []

    @pytest.mark.asyncio
    async def test_search_code_summary(self, mock_client):
        mock_client.get.return_value = [make_search_hit(), make_search_hit(startline=42, path="lib/a.ts")]

        result = json.loads(await _call(mock_client, "search_code", {"project": "1", "search": "console"}))

        assert result[0] == {
            "filename": "index.ts",
            "path": "src/index.ts",
            "ref": "main",
            "startline": 10,
            "data": "console.log('test');",
        }
        assert result[1]["startline"] == 42
        assert result[1]["path"] == "lib/a.ts"


class TestUserTools:
    """Test search_users."""

    @pytest.mark.asyncio
    async def test_search_users_query(self, mock_client):
        mock_client.get.return_value = []

        await _call(mock_client, "search_users", {"search": "jdoe"})

        mock_client.get.assert_awaited_once_with("/users?search=jdoe&per_page=20")

    @pytest.mark.asyncio
    async def test_search_users_summary_drops_urls(self, mock_client):
        mock_client.get.return_value = [make_user(), make_user(id=8, username="jsmith")]

        result = json.loads(await _call(mock_client, "search_users", {"search": "j"}))

        assert result[0] == {"id": 7, "username": "jdoe", "name": "Jane Doe", "state": "active"}
        assert result[1]["username"] == "jsmith"
        for user in result:
            assert "avatar_url" not in user
            assert "web_url" not in user
