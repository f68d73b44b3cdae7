"""GitHub REST API backend.

Lists root entries through the Contents API and languages through the
Languages API, which reports bytes of code per language.

Authentication:
  OAuthToken        → ``Authorization: Bearer <token>``
  UsernamePassword  → HTTP basic auth on every request
  SshKey            → never matched (the REST API does not accept SSH keys)
"""

import logging
from typing import Optional

import httpx

from repodetect.core.config import Settings, get_settings
from repodetect.errors import InvalidSourceError, ListingError
from repodetect.repository.base import Matcher
from repodetect.repository.http import (
    PlatformService,
    api_get,
    build_client,
    entry_names,
    language_weights,
    platform_predicate,
)
from repodetect.source import Credential, OAuthToken, Source, UsernamePassword

logger = logging.getLogger(__name__)

FLAVOR = "github"
PUBLIC_HOST = "github.com"

_API_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
}


class GitHubService(PlatformService):
    platform = "GitHub"

    def __init__(self, client: httpx.Client, project: str, ref: str) -> None:
        super().__init__(client, project, ref)
        self.owner, self.repo = project.split("/", 1)

    def list_root_files(self) -> list[str]:
        """GET /repos/{owner}/{repo}/contents/?ref={ref}"""
        response = api_get(
            self._client,
            f"/repos/{self.owner}/{self.repo}/contents/",
            params={"ref": self.ref},
            what=self.describe("file listing"),
        )
        entries = response.json()
        if not isinstance(entries, list):
            raise ListingError(f"{self.describe('file listing')} failed: root is not a directory")
        return entry_names(entries, self.describe("file listing"))

    def language_usage(self) -> dict[str, float]:
        """GET /repos/{owner}/{repo}/languages — bytes of code per language."""
        response = api_get(
            self._client,
            f"/repos/{self.owner}/{self.repo}/languages",
            what=self.describe("language listing"),
        )
        return language_weights(response.json(), self.describe("language listing"))


def api_base_url(host: str, settings: Settings) -> str:
    """api.github.com for github.com, ``https://{host}/api/v3`` for enterprise hosts."""
    if not host or host == PUBLIC_HOST:
        return settings.github_api_url
    return f"https://{host}/api/v3"


def new_github_service(
    source: Source,
    credential: Credential,
    settings: Optional[Settings] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> GitHubService:
    settings = settings or get_settings()
    location = source.location
    project = location.project
    if project.count("/") != 1:
        raise InvalidSourceError(f"Cannot derive a GitHub owner/repo from URL path {location.path!r}")

    auth: Optional[httpx.Auth] = None
    headers = dict(_API_HEADERS)
    if isinstance(credential, OAuthToken):
        headers["Authorization"] = f"Bearer {credential.token.decode()}"
    elif isinstance(credential, UsernamePassword):
        auth = httpx.BasicAuth(credential.username, credential.password)
    else:
        raise TypeError(f"GitHub API cannot authenticate with {type(credential).__name__}")

    client = build_client(
        api_base_url(location.host, settings),
        timeout=settings.http_timeout_seconds,
        auth=auth,
        headers=headers,
        transport=transport,
    )
    logger.info("GitHub service created for %s@%s", project, source.ref)
    return GitHubService(client, project, source.ref)


def github_matcher(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Matcher:
    settings = settings or get_settings()
    return Matcher(
        name=FLAVOR,
        predicate=platform_predicate(FLAVOR, settings.github_domains),
        constructor=lambda source, credential: new_github_service(
            source, credential, settings, transport
        ),
    )
