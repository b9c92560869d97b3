"""Port: repository host — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from code_mentor.domain.entities import FileContent, FileEntry, RateLimitInfo, RepoInfo


class RepositoryHost(Protocol):
    """Abstract contract for the read operations consumed from the host API."""

    async def get_repository(self, owner: str, repo: str) -> RepoInfo:
        """Return high-level repository metadata."""
        ...

    async def list_directory(
        self, owner: str, repo: str, path: str, ref: str
    ) -> list[FileEntry]:
        """Return the entries of one directory (a file path yields one entry)."""
        ...

    async def get_file_content(
        self, owner: str, repo: str, path: str, ref: str
    ) -> FileContent:
        """Return the decoded text content of a single file."""
        ...

    async def get_rate_limit(self) -> RateLimitInfo:
        """Return the caller's current core rate-limit counters."""
        ...
