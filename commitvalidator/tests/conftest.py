import pytest
from fastapi.testclient import TestClient

from commitvalidator import webhooks
from commitvalidator.github_client import GitHubAPIError
from commitvalidator.main import app
from commitvalidator.models import ChangedFile
from commitvalidator.validation import PRValidator


class RecordingGitHubClient:
    """Stands in for GitHubClient and records every outbound call"""

    def __init__(self, files=None, fetch_error=None, status_error=None, close_error=None):
        self.files = [ChangedFile(**f) for f in (files or [])]
        self.fetch_error = fetch_error
        self.status_error = status_error
        self.close_error = close_error
        self.calls = []

    async def fetch_pr_files(self, owner, repo, pr_number):
        self.calls.append(("fetch", owner, repo, pr_number))
        if self.fetch_error:
            raise self.fetch_error
        return self.files

    async def update_pr_status(self, owner, repo, pr_number, state, description):
        self.calls.append(("status", owner, repo, pr_number, state, description))
        if self.status_error:
            raise self.status_error

    async def close_pull_request(self, owner, repo, pr_number):
        self.calls.append(("close", owner, repo, pr_number))
        if self.close_error:
            raise self.close_error


@pytest.fixture
def pr_event():
    return {
        "action": "opened",
        "pull_request": {"number": 42},
        "repository": {"name": "repo", "owner": {"login": "acme"}},
    }


@pytest.fixture
def webhook_config(monkeypatch):
    monkeypatch.setattr(webhooks.Config, "ACCEPTED_ACTIONS", frozenset({"opened"}))
    monkeypatch.setattr(webhooks.Config, "CLOSE_ON_FAILURE", True)
    return webhooks.Config


@pytest.fixture
def make_client(webhook_config):
    """Build a TestClient wired to a recording GitHub client"""
    def _make(validator=None, **github_kwargs):
        github = RecordingGitHubClient(**github_kwargs)
        app.dependency_overrides[webhooks.get_github_client] = lambda: github
        app.dependency_overrides[webhooks.get_validator] = lambda: validator or PRValidator()
        return TestClient(app), github

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def api_error():
    return GitHubAPIError("GitHub API error: Not Found", status=404, body="Not Found")
