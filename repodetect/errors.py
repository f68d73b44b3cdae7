"""Exception hierarchy for repository detection.

Every failure aborts the detection pipeline. Messages keep the backend's
own reason text (e.g. "404 Project Not Found") so callers can classify
failures by substring.

    RepoDetectError
    ├── InvalidSourceError
    ├── NoCompatibleBackendError
    ├── BackendConstructionError
    │   ├── CredentialDecodeError
    │   └── TokenExchangeError
    └── ListingError
"""


class RepoDetectError(Exception):
    """Base class for all detection errors."""


class InvalidSourceError(RepoDetectError, ValueError):
    """Raised when a Source is malformed (e.g. empty URL)."""


class NoCompatibleBackendError(RepoDetectError):
    """Raised when every matcher declined the source."""


class BackendConstructionError(RepoDetectError):
    """Raised when a matcher accepted the source but its backend could not be built.

    Terminal for the whole resolve call: later matchers are never tried.
    """


class CredentialDecodeError(BackendConstructionError):
    """Raised when an SSH private key cannot be decoded with the given passphrase."""


class TokenExchangeError(BackendConstructionError):
    """Raised when the eager OAuth token exchange fails during construction."""


class ListingError(RepoDetectError):
    """Raised when an authenticated backend rejects a listing call."""
