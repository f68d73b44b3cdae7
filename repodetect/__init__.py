"""Build-tool and language detection for remote git repositories."""

from repodetect.detector import (
    BuildEnvReport,
    DetectedBuildTool,
    DetectorConfig,
    default_config,
    detect,
    detect_build_environments,
)
from repodetect.errors import (
    BackendConstructionError,
    CredentialDecodeError,
    InvalidSourceError,
    ListingError,
    NoCompatibleBackendError,
    RepoDetectError,
    TokenExchangeError,
)
from repodetect.source import OAuthToken, Source, SshKey, UsernamePassword

__all__ = [
    "BackendConstructionError",
    "BuildEnvReport",
    "CredentialDecodeError",
    "DetectedBuildTool",
    "DetectorConfig",
    "InvalidSourceError",
    "ListingError",
    "NoCompatibleBackendError",
    "OAuthToken",
    "RepoDetectError",
    "Source",
    "SshKey",
    "TokenExchangeError",
    "UsernamePassword",
    "default_config",
    "detect",
    "detect_build_environments",
]
