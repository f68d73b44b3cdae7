"""Source descriptors, credentials and repository URL parsing.

A Source is the immutable request handed to the backend selector. It is
consumed, never mutated, by matchers and adapters.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Union
from urllib.parse import urlparse

from repodetect.errors import InvalidSourceError

DEFAULT_REF = "master"

# git@host:owner/repo.git (no "://", the path must not start with "/")
_SCP_LIKE_RE = re.compile(r"^(?:(?P<user>[^@/:]+)@)?(?P<host>[^@/:]+):(?P<path>[^/\\].*)$")


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SshKey:
    """PEM / OpenSSH private key material with an optional passphrase."""

    private_key: bytes = field(repr=False)
    passphrase: bytes = field(default=b"", repr=False)


@dataclass(frozen=True)
class UsernamePassword:
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class OAuthToken:
    """Opaque bearer token."""

    token: bytes = field(repr=False)


Credential = Union[SshKey, UsernamePassword, OAuthToken]

# Credential variants a hosted platform REST API can authenticate with.
API_CREDENTIALS = (OAuthToken, UsernamePassword)


# ---------------------------------------------------------------------------
# Source
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Source:
    """Which repository, ref and credential to inspect.

    An empty ref falls back to "master". `flavor` is an optional platform
    hint (e.g. "github", "gitlab") that forces a platform backend even when
    the URL host is not one of the platform's known domains.
    """

    url: str
    credential: Credential
    ref: str = DEFAULT_REF
    flavor: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise InvalidSourceError("Source URL must not be empty")
        if not self.ref:
            object.__setattr__(self, "ref", DEFAULT_REF)

    @property
    def location(self) -> "RepoLocation":
        return parse_repo_url(self.url)


# ---------------------------------------------------------------------------
# URL parsing
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RepoLocation:
    """A parsed repository URL.

    scheme is "" for scheme-less strings (``host/owner/repo`` or local paths)
    and "ssh" for scp-style ``git@host:owner/repo`` addresses.
    """

    scheme: str
    host: str
    path: str
    scp_like: bool = False

    @property
    def project(self) -> str:
        """The project identifier, e.g. "owner/repo"."""
        project = self.path.strip("/")
        if project.endswith(".git"):
            project = project[: -len(".git")]
        return project

    @property
    def has_explicit_host(self) -> bool:
        return bool(self.host) and (bool(self.scheme) or self.scp_like)


def parse_repo_url(url: str) -> RepoLocation:
    """Split a repository URL into scheme, host and path.

    Accepts https/ssh/git/file URLs, scp-style addresses, scheme-less
    ``host/owner/repo`` strings and local filesystem paths.
    """
    url = url.strip()

    if "://" in url:
        parsed = urlparse(url)
        return RepoLocation(
            scheme=parsed.scheme.lower(),
            host=(parsed.hostname or "").lower(),
            path=parsed.path,
        )

    match = _SCP_LIKE_RE.match(url)
    if match:
        return RepoLocation(
            scheme="ssh",
            host=match.group("host").lower(),
            path=match.group("path"),
            scp_like=True,
        )

    if url.startswith(("/", ".", "~")):
        return RepoLocation(scheme="", host="", path=url)

    host, _, path = url.partition("/")
    return RepoLocation(scheme="", host=host.lower(), path=path)
