"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from code_mentor.domain.exceptions import ValidationError

_NAME_RE = re.compile(r"^[A-Za-z0-9\-_.]{1,100}$")
_BRANCH_RE = re.compile(r"^[A-Za-z0-9\-_./]{1,100}$")
_PATH_RE = re.compile(r"^[A-Za-z0-9\-_./@\[\]() ]{0,500}$")


@dataclass(frozen=True, slots=True)
class RepoRef:
    """Validated ``owner/repo@branch`` coordinates on the repository host.

    Rejects names the host would never accept and any path that tries to
    climb out of the repository root.
    """

    owner: str
    repo: str
    branch: str = "main"

    def __post_init__(self) -> None:
        if not _NAME_RE.match(self.owner):
            raise ValidationError(f"Invalid repository owner: '{self.owner}'")
        if not _NAME_RE.match(self.repo):
            raise ValidationError(f"Invalid repository name: '{self.repo}'")
        if not _BRANCH_RE.match(self.branch) or ".." in self.branch:
            raise ValidationError(f"Invalid branch name: '{self.branch}'")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def on_branch(self, branch: str) -> RepoRef:
        return RepoRef(owner=self.owner, repo=self.repo, branch=branch)


def normalize_path(path: str | None) -> str:
    """Strip leading/trailing slashes and reject traversal segments."""
    cleaned = (path or "").strip().strip("/")
    if not _PATH_RE.match(cleaned):
        raise ValidationError(f"Invalid repository path: '{path}'")
    if any(part == ".." for part in cleaned.split("/")):
        raise ValidationError(f"Path traversal is not allowed: '{path}'")
    return cleaned


_TOKEN_RE = re.compile(r"^(gh[pousr]_[A-Za-z0-9_]{20,}|github_pat_[A-Za-z0-9_]{20,})$")


def validate_token(token: str | None) -> str:
    """Return the stripped access token, or raise if it is not a GitHub token."""
    cleaned = (token or "").strip()
    if not _TOKEN_RE.match(cleaned):
        raise ValidationError(
            "Invalid GitHub token format. Expected a ghp_/gho_/ghu_/ghs_/ghr_ "
            "or github_pat_ token."
        )
    return cleaned
