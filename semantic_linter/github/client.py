"""GitHub API client for pull request files and comments."""

from typing import List, Optional

import httpx

from semantic_linter.core.logging import get_logger
from semantic_linter.llm.models import ChangedFile

logger = get_logger(__name__)

GITHUB_API_BASE = "https://api.github.com"
FILES_PER_PAGE = 100
# GitHub stops listing pull request files after 3000 entries
MAX_FILE_PAGES = 30


class GitHubClient:
    """Client for the GitHub REST API using a token credential."""

    def __init__(
        self,
        token: str,
        api_base: str = GITHUB_API_BASE,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub token (Actions GITHUB_TOKEN or a personal access token)
            api_base: REST API base URL (differs on GitHub Enterprise Server)
            client: Optional HTTP client to use instead of creating one
            timeout: Request timeout in seconds for an owned client
        """
        self.token = token
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=api_base, timeout=timeout)

    def _get_headers(self) -> dict:
        """Get headers with authentication token."""
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "semantic-linter/1.0",
        }

    async def list_changed_files(
        self, owner: str, repo: str, pr_number: int
    ) -> List[ChangedFile]:
        """
        List the files changed by a pull request.

        Files without a patch (binary files, very large diffs) are skipped.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            Changed files in the order GitHub reports them

        Raises:
            ValueError: If the pull request does not exist
            PermissionError: If the token cannot read the repository
            httpx.HTTPError: If any other API call fails
        """
        changed_files = []
        for page in range(1, MAX_FILE_PAGES + 1):
            response = await self.client.get(
                f"/repos/{owner}/{repo}/pulls/{pr_number}/files",
                headers=self._get_headers(),
                params={"per_page": FILES_PER_PAGE, "page": page},
            )
            self._raise_for_status(response, owner, repo, pr_number)

            entries = response.json()
            for entry in entries:
                filename = entry.get("filename")
                patch = entry.get("patch")
                if filename and patch:
                    changed_files.append(ChangedFile(filename=filename, patch=patch))
                else:
                    logger.info(f"Skipping file without patch: {filename}")

            if len(entries) < FILES_PER_PAGE:
                break

        return changed_files

    async def post_comment(self, owner: str, repo: str, pr_number: int, body: str) -> dict:
        """
        Post a comment on the pull request conversation.

        Returns:
            API response data for the created comment

        Raises:
            ValueError: If the pull request does not exist
            PermissionError: If the token cannot write comments
            httpx.HTTPError: If any other API call fails
        """
        response = await self.client.post(
            f"/repos/{owner}/{repo}/issues/{pr_number}/comments",
            headers=self._get_headers(),
            json={"body": body},
        )
        self._raise_for_status(response, owner, repo, pr_number)

        result = response.json()
        logger.info(f"Posted comment {result.get('id')} to PR #{pr_number}")
        return result

    def _raise_for_status(
        self, response: httpx.Response, owner: str, repo: str, pr_number: int
    ) -> None:
        if response.status_code == 404:
            raise ValueError(f"PR #{pr_number} not found in {owner}/{repo}")
        if response.status_code == 403:
            raise PermissionError(
                f"Access denied to {owner}/{repo}. Check the token permissions."
            )
        if response.is_error:
            logger.error(
                "GitHub API error",
                status=response.status_code,
                error=response.text[:200],
            )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
