"""Detector module for build tools and languages of a remote repository.

Public API:
    detect(source, config) -> BuildEnvReport
    detect_build_environments(source) -> BuildEnvReport
"""

from repodetect.detector.orchestrator import (
    DetectorConfig,
    default_config,
    detect,
    detect_build_environments,
    detect_using_service,
)
from repodetect.detector.types import BuildEnvReport, BuildToolSignature, DetectedBuildTool

__all__ = [
    "BuildEnvReport",
    "BuildToolSignature",
    "DetectedBuildTool",
    "DetectorConfig",
    "default_config",
    "detect",
    "detect_build_environments",
    "detect_using_service",
]
