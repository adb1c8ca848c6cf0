"""Test configuration and fixtures."""

import os
from unittest.mock import AsyncMock

import pytest

# Set test environment variables BEFORE importing the package
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("GITLAB_TOKEN", "test-token")

from gitlab_mcp.client.gitlab import GitLabClient  # noqa: E402


@pytest.fixture
def mock_client() -> AsyncMock:
    """GitLab client whose get/post/put are AsyncMocks returning {}."""
    client = AsyncMock(spec=GitLabClient)
    client.get.return_value = {}
    client.post.return_value = {}
    client.put.return_value = {}
    return client
