import asyncio
import logging
from typing import Any, Optional

import aiohttp
from pydantic import ValidationError

from .models import ChangedFile, CommitStatus

logger = logging.getLogger(__name__)

# GitHub's default page size for the list PR files endpoint
FILES_PAGE_SIZE = 100


class GitHubAPIError(Exception):
    """Transport failure or unexpected status from the GitHub REST API"""

    def __init__(self, message: str, status: int = 0, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class GitHubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        timeout: int = 30,
        status_context: str = "commitvalidator",
    ) -> None:
        self.token = token or None
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.status_context = status_context

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "commitvalidator",
        }
        # anonymous requests work for public repos, with a lower rate limit
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    async def _request(self, method: str, path: str, expected_status: int, payload: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as session:
                async with session.request(method, url, headers=self._headers(), json=payload) as response:
                    if response.status != expected_status:
                        body = await response.text()
                        raise GitHubAPIError(f"GitHub API error: {body}", status=response.status, body=body)
                    return await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise GitHubAPIError(f"{method} {url} failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise GitHubAPIError(f"{method} {url} timed out after {self.timeout}s") from e
        except ValueError as e:
            raise GitHubAPIError(f"{method} {url} returned invalid JSON: {e}") from e

    async def fetch_pr_files(self, owner: str, repo: str, pr_number: int) -> list[ChangedFile]:
        """Fetch the changed files of a PR. Only the first page is retrieved."""
        files_data = await self._request("GET", f"/repos/{owner}/{repo}/pulls/{pr_number}/files", 200)
        if not isinstance(files_data, list):
            raise GitHubAPIError(f"GitHub API error: expected a list of files, got {type(files_data).__name__}")

        try:
            files = [ChangedFile.model_validate(file_data) for file_data in files_data]
        except ValidationError as e:
            raise GitHubAPIError(f"GitHub API error: unexpected file record: {e}") from e
        logger.info(f"Fetched {len(files)} files for {owner}/{repo}#{pr_number}")

        if len(files) == FILES_PAGE_SIZE:
            logger.warning(
                f"PR #{pr_number} has exactly {FILES_PAGE_SIZE} files - "
                "might be paginated, some files may be missing!"
            )
        return files

    async def get_head_sha(self, owner: str, repo: str, pr_number: int) -> str:
        pr_data = await self._request("GET", f"/repos/{owner}/{repo}/pulls/{pr_number}", 200)
        head = pr_data.get("head") if isinstance(pr_data, dict) else None
        sha = head.get("sha") if isinstance(head, dict) else None
        if not sha or not isinstance(sha, str):
            raise GitHubAPIError(f"GitHub API error: no head sha for {owner}/{repo}#{pr_number}")
        return sha

    async def create_commit_status(self, owner: str, repo: str, sha: str, status: CommitStatus) -> None:
        await self._request("POST", f"/repos/{owner}/{repo}/statuses/{sha}", 201, payload=status.model_dump())

    async def update_pr_status(self, owner: str, repo: str, pr_number: int, state: str, description: str) -> None:
        """Set a commit status on the head commit of a PR"""
        sha = await self.get_head_sha(owner, repo, pr_number)
        status = CommitStatus(state=state, description=description, context=self.status_context)
        await self.create_commit_status(owner, repo, sha, status)
        logger.info(f"PR #{pr_number} [{owner}/{repo}] status updated to {state}: {description}")

    async def close_pull_request(self, owner: str, repo: str, pr_number: int) -> None:
        await self._request("PATCH", f"/repos/{owner}/{repo}/pulls/{pr_number}", 200, payload={"state": "closed"})
        logger.info(f"PR #{pr_number} [{owner}/{repo}] has been closed after validation.")
