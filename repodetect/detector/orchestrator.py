"""Detector orchestrator — resolves a backend and derives the build environment.

Detection flow:
1. Resolve a repository service through the matcher chain.
2. List the root files.
3. List the languages with their usage weights.
4. Match root files against the signature table (table order).
5. Rank languages by (descending weight, name).

Steps run strictly in sequence against one service. Any failure aborts the
run: no partial report is ever returned.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

import httpx
import structlog

from repodetect.core.config import Settings, get_settings
from repodetect.core.logging import bind_source_url, reset_source_url
from repodetect.detector.signatures import DEFAULT_SIGNATURES
from repodetect.detector.types import BuildEnvReport, BuildToolSignature, DetectedBuildTool
from repodetect.errors import NoCompatibleBackendError
from repodetect.repository import (
    Matcher,
    RepositoryService,
    generic_matcher,
    github_matcher,
    gitlab_matcher,
    resolve,
)
from repodetect.repository.checkout import redact_repo_url
from repodetect.source import Source

logger = logging.getLogger(__name__)
log = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DetectorConfig:
    """Matcher chain and signature table used for one or more detections.

    Immutable; build a new value to swap in fake backends or signatures.
    """

    matchers: tuple[Matcher, ...]
    signatures: tuple[BuildToolSignature, ...] = DEFAULT_SIGNATURES


def default_config(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> DetectorConfig:
    """GitHub, then GitLab, then the generic git fallback."""
    settings = settings or get_settings()
    return DetectorConfig(
        matchers=(
            github_matcher(settings, transport),
            gitlab_matcher(settings, transport),
            generic_matcher(settings),
        ),
    )


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def detect_build_environments(source: Source) -> BuildEnvReport:
    """Detect build tools and languages of `source` with the default backends."""
    return detect(source, default_config())


def detect(source: Source, config: Optional[DetectorConfig] = None) -> BuildEnvReport:
    """Resolve a backend for `source` and build its BuildEnvReport.

    Raises:
        NoCompatibleBackendError: if every matcher declined the source.
        BackendConstructionError: if the accepted backend could not be built.
        ListingError: if either listing call failed.
    """
    config = config or default_config()
    token = bind_source_url(redact_repo_url(source.url))
    try:
        service = resolve(source, source.credential, config.matchers)
        if service is None:
            raise NoCompatibleBackendError(
                f"No compatible backend for {redact_repo_url(source.url)} "
                f"(flavor={source.flavor!r}, credential={type(source.credential).__name__})"
            )
        with service:
            return detect_using_service(service, config.signatures)
    finally:
        reset_source_url(token)


def detect_using_service(
    service: RepositoryService,
    signatures: Sequence[BuildToolSignature] = DEFAULT_SIGNATURES,
) -> BuildEnvReport:
    """Run steps 2–5 against an already-resolved service.

    Both listings must succeed; the first error propagates unchanged.
    """
    root_files = service.list_root_files()
    language_usage = service.language_usage()

    report = BuildEnvReport(
        detected_build_tools=tuple(detect_build_tools(root_files, signatures)),
        sorted_languages=tuple(sort_languages(language_usage)),
    )
    log.info(
        "detection_complete",
        backend=service.name,
        build_tools=report.build_tool_names,
        languages=list(report.sorted_languages),
    )
    return report


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def detect_build_tools(
    root_files: Iterable[str],
    signatures: Sequence[BuildToolSignature] = DEFAULT_SIGNATURES,
) -> list[DetectedBuildTool]:
    """Signatures whose marker is among `root_files`, in signature-table order.

    Only exact root-level names count; "sub/pom.xml" never matches.
    """
    present = set(root_files)
    return [
        DetectedBuildTool(tool=signature.tool, evidence=signature.marker)
        for signature in signatures
        if signature.marker in present
    ]


def sort_languages(language_usage: Mapping[str, float]) -> list[str]:
    """Rank languages by descending weight, then case-insensitive name.

    Uniform weights (e.g. from the generic git backend) therefore yield
    plain alphabetical order: ["Go", "Java", "JSON", "XML"].
    """
    ranked = sorted(
        language_usage.items(),
        key=lambda item: (-item[1], item[0].lower(), item[0]),
    )
    return [name for name, _weight in ranked]
