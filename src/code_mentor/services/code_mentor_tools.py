"""Code-mentor use cases — the six operations exposed as tools.

Each method validates its coordinates, pulls what it needs through the
resilient repository client and returns a JSON-ready ``dict``.  Domain errors
propagate; the interface layer turns them into the error envelope.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any

from code_mentor.domain.entities import (
    AnalysisOptions,
    FileAnalysisResult,
    FileEntry,
)
from code_mentor.domain.exceptions import AnalysisError, RemoteAPIError, ValidationError
from code_mentor.domain.result import Failure
from code_mentor.domain.value_objects import RepoRef, normalize_path, validate_token
from code_mentor.infrastructure.cache import CacheKeys
from code_mentor.infrastructure.repository_client import (
    RepositoryClientProvider,
    ResilientRepositoryClient,
)
from code_mentor.services.aggregator import aggregate
from code_mentor.services.analyzer import CodeAnalyzer
from code_mentor.services.architecture_advisor import ProjectType, advise
from code_mentor.services.file_filter import structure_signals
from code_mentor.services.file_prioritizer import prioritize
from code_mentor.services.pattern_catalog import explain
from code_mentor.services.scheduler import BatchScheduler
from code_mentor.services.scorer import overall
from code_mentor.services.suggestions import file_recommendations

logger = logging.getLogger(__name__)

FILE_TOP_ISSUES = 10


class CodeMentorTools:
    """Orchestrates discovery, analysis and reporting for one repository host.

    Parameters
    ----------
    provider:
        Holds the configured repository client (or reports it is missing).
    analyzer:
        Single-file analyser wrapping the rule corpus.
    scheduler:
        Bounded-parallel driver for multi-file analysis.
    max_file_size:
        Content longer than this is reported as oversized instead of analysed.
    max_files_to_analyze:
        How many prioritised files a repository analysis looks at.
    """

    def __init__(
        self,
        provider: RepositoryClientProvider,
        analyzer: CodeAnalyzer,
        scheduler: BatchScheduler,
        max_file_size: int = 1024 * 1024,
        max_files_to_analyze: int = 20,
    ) -> None:
        self._provider = provider
        self._analyzer = analyzer
        self._scheduler = scheduler
        self._max_file_size = max_file_size
        self._max_files = max_files_to_analyze

    # ── configure-access ────────────────────────────────────────────────

    async def configure_access(self, token: str) -> dict[str, Any]:
        """Install a token after proving it works with a rate-limit query."""
        token = validate_token(token)
        candidate = self._provider.build(token)
        try:
            rate = await candidate.get_rate_limit()
        except RemoteAPIError as exc:
            logger.error("Token verification failed: %s", exc.message)
            raise RemoteAPIError(
                "GitHub token is invalid or lacks the permissions needed to read repositories.",
                status_code=exc.status_code,
                rate_limit=exc.rate_limit,
            ) from exc

        self._provider.install(candidate)
        reset_at = datetime.fromtimestamp(rate.reset_epoch, tz=timezone.utc)
        logger.info("GitHub configured: %d/%d requests remaining", rate.remaining, rate.limit)
        return {
            "configured": True,
            "rateLimit": rate.to_dict(),
            "resetAt": reset_at.isoformat(),
            "message": (
                f"GitHub configured. {rate.remaining}/{rate.limit} requests remaining, "
                f"resets at {reset_at:%Y-%m-%d %H:%M:%S} UTC."
            ),
        }

    # ── list-source-files ───────────────────────────────────────────────

    async def list_source_files(self, owner: str, repo: str, path: str = "") -> dict[str, Any]:
        ref = RepoRef(owner, repo)
        base = normalize_path(path)
        client = self._client()

        info = await client.get_repository(ref.owner, ref.repo)
        inventory = await client.list_source_files(ref.owner, ref.repo, base, info.default_branch)

        by_directory: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for entry in inventory.files:
            directory = entry.path.rpartition("/")[0] or "root"
            by_directory[directory].append(
                {"name": entry.name, "path": entry.path, "size": entry.size}
            )

        files = inventory.files
        logger.info("Listed %d source files in %s", len(files), ref.full_name)
        return {
            "repository": ref.full_name,
            "branch": info.default_branch,
            "language": info.language,
            "totalFiles": len(files),
            "byDirectory": dict(by_directory),
            "summary": {
                "components": sum(
                    1 for f in files if "Component" in f.name or _under(f, "/components/")
                ),
                "pages": sum(1 for f in files if _under(f, "/pages/", "/app/")),
                "hooks": sum(1 for f in files if f.name.startswith("use")),
                "utilities": sum(1 for f in files if _under(f, "/utils/", "/lib/")),
            },
            "testFiles": len(inventory.test_files),
            "skippedDirectories": list(inventory.skipped_directories),
            "truncated": inventory.truncated,
        }

    # ── analyze-file ────────────────────────────────────────────────────

    async def analyze_file(
        self, owner: str, repo: str, path: str, branch: str = "main"
    ) -> dict[str, Any]:
        ref = RepoRef(owner, repo, branch)
        file_path = normalize_path(path)
        client = self._client()

        found = await client.find_file(ref.owner, ref.repo, file_path, ref.branch)
        if isinstance(found, Failure):
            raise RemoteAPIError(
                f"File not found: {file_path} in {ref.full_name}@{ref.branch}",
                status_code=404,
            )
        content = found.value

        result = self._analyze_cached(client, ref, content.path, content.content)
        ranked = sorted(result.issues, key=lambda i: i.severity.rank, reverse=True)

        logger.info(
            "Analysed %s: %d issues, architecture=%d clean_code=%d",
            file_path,
            result.total_issues,
            result.architecture_score,
            result.clean_code_score,
        )
        return {
            "repository": ref.full_name,
            "file": content.path,
            "size": content.size,
            "layer": result.layer,
            "analysis": {
                "totalIssues": result.total_issues,
                "scores": {
                    "architecture": result.architecture_score,
                    "cleanCode": result.clean_code_score,
                    "overall": overall(result.architecture_score, result.clean_code_score),
                },
                "summary": result.summary.to_dict(),
                "topIssues": [i.to_dict() for i in ranked[:FILE_TOP_ISSUES]],
                "suggestions": [s.to_dict() for s in result.suggestions],
            },
            "recommendations": file_recommendations(result),
        }

    # ── analyze-repository ──────────────────────────────────────────────

    async def analyze_repository(
        self, owner: str, repo: str, branch: str = "main"
    ) -> dict[str, Any]:
        ref = RepoRef(owner, repo, branch)
        client = self._client()

        info = await client.get_repository(ref.owner, ref.repo)
        if ref.branch == "main":
            ref = ref.on_branch(info.default_branch)

        cache_key = CacheKeys.repo_analysis(ref.owner, ref.repo, ref.branch)
        if client.cache_enabled:
            cached = client.cache.get(cache_key)
            if cached is not None:
                return cached

        inventory = await client.list_source_files(ref.owner, ref.repo, "", ref.branch)
        selected = prioritize(inventory.files, self._max_files)
        logger.info(
            "Analysing %d of %d source files in %s@%s",
            len(selected),
            len(inventory.files),
            ref.full_name,
            ref.branch,
        )

        async def analyze_one(entry: FileEntry) -> FileAnalysisResult:
            content = await client.get_file_content(ref.owner, ref.repo, entry.path, ref.branch)
            return self._analyze_cached(client, ref, content.path, content.content)

        outcome = await self._scheduler.run(selected, analyze_one, label=lambda e: e.path)
        report = aggregate(ref.full_name, ref.branch, outcome.results, inventory)

        payload = report.to_dict()
        payload["selectedFiles"] = len(selected)
        payload["failedFiles"] = [entry.path for entry, _ in outcome.failures]

        logger.info(
            "Repository analysis of %s finished: %d/%d files, overall=%d, critical=%d",
            ref.full_name,
            report.analyzed_files,
            report.total_files,
            report.overall_score.overall,
            report.summary.critical,
        )
        if client.cache_enabled and not outcome.failures:
            client.cache.set(cache_key, payload)
        return payload

    # ── suggest-architecture ────────────────────────────────────────────

    async def suggest_architecture(
        self, owner: str, repo: str, project_type: ProjectType | str = ProjectType.WEB
    ) -> dict[str, Any]:
        ref = RepoRef(owner, repo)
        try:
            kind = ProjectType(project_type)
        except ValueError as exc:
            raise ValidationError(
                f"Unknown project type '{project_type}'. "
                f"Expected one of: {', '.join(t.value for t in ProjectType)}"
            ) from exc
        client = self._client()

        info = await client.get_repository(ref.owner, ref.repo)
        inventory = await client.list_source_files(ref.owner, ref.repo, "", info.default_branch)
        signals = structure_signals([*inventory.paths, *inventory.test_files])

        advice = advise(kind, signals, info)
        advice["currentFiles"] = len(inventory.files)
        logger.info("Architecture suggestions for %s (%s)", ref.full_name, kind.value)
        return advice

    # ── explain-pattern ─────────────────────────────────────────────────

    async def explain_pattern(self, pattern_name: str) -> dict[str, Any]:
        entry = explain(pattern_name).unwrap()
        detected_by = [r.rule_id for r in self._analyzer.corpus.by_design_pattern(entry.name)]
        data = entry.to_dict()
        data["detectedBy"] = detected_by
        return data

    # ── Helpers ─────────────────────────────────────────────────────────

    def _client(self) -> ResilientRepositoryClient:
        return self._provider.get().unwrap()

    def _analyze_cached(
        self,
        client: ResilientRepositoryClient,
        ref: RepoRef,
        path: str,
        content: str,
    ) -> FileAnalysisResult:
        key = CacheKeys.file_analysis(ref.owner, ref.repo, path, ref.branch)
        if client.cache_enabled:
            cached = client.cache.get(key)
            if cached is not None:
                return cached
        try:
            result = self._analyzer.analyze(
                path,
                content,
                AnalysisOptions(include_good_practices=True, max_file_size=self._max_file_size),
            )
        except Exception as exc:
            raise AnalysisError(
                f"Failed to analyse {path}: {exc}",
                file_path=path,
                details={"originalError": str(exc)},
            ) from exc
        if client.cache_enabled:
            client.cache.set(key, result)
        return result


def _under(entry: FileEntry, *markers: str) -> bool:
    path = f"/{entry.path}"
    return any(m in path for m in markers)
