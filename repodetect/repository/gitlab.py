"""GitLab REST API (v4) backend.

Root entries come from the repository tree endpoint (paginated), languages
from the languages endpoint, which reports a percentage per language.

Authentication:
  OAuthToken        → ``Authorization: Bearer <token>``
  UsernamePassword  → exchanged once for a bearer token through the OAuth
                      password grant (``POST /oauth/token``) at construction.
                      A failed exchange is a construction error.
  SshKey            → never matched
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from repodetect.core.config import Settings, get_settings
from repodetect.errors import InvalidSourceError, ListingError, TokenExchangeError
from repodetect.repository.base import Matcher
from repodetect.repository.http import (
    PlatformService,
    api_get,
    build_client,
    entry_names,
    language_weights,
    platform_predicate,
    response_reason,
)
from repodetect.source import Credential, OAuthToken, Source, UsernamePassword

logger = logging.getLogger(__name__)

FLAVOR = "gitlab"
PER_PAGE = 100

# Guards against a server that keeps returning X-Next-Page.
_MAX_TREE_PAGES = 100


class GitLabService(PlatformService):
    platform = "GitLab"

    @property
    def _project_path(self) -> str:
        return f"/projects/{quote(self.project, safe='')}"

    def list_root_files(self) -> list[str]:
        """GET /projects/:id/repository/tree?ref=:ref, following X-Next-Page."""
        names: list[str] = []
        page = "1"
        for _ in range(_MAX_TREE_PAGES):
            response = api_get(
                self._client,
                f"{self._project_path}/repository/tree",
                params={"ref": self.ref, "per_page": PER_PAGE, "page": page},
                what=self.describe("file listing"),
            )
            names.extend(entry_names(response.json(), self.describe("file listing")))

            page = response.headers.get("X-Next-Page", "").strip()
            if not page:
                return names
        raise ListingError(
            f"{self.describe('file listing')} failed: more than {_MAX_TREE_PAGES} pages"
        )

    def language_usage(self) -> dict[str, float]:
        """GET /projects/:id/languages — percentage per language."""
        response = api_get(
            self._client,
            f"{self._project_path}/languages",
            what=self.describe("language listing"),
        )
        return language_weights(response.json(), self.describe("language listing"))


def exchange_password_for_token(
    client: httpx.Client,
    host: str,
    credential: UsernamePassword,
) -> str:
    """Trade a username/password for a bearer token via the OAuth password grant."""
    token_url = f"https://{host}/oauth/token"
    try:
        response = client.post(
            token_url,
            data={
                "grant_type": "password",
                "username": credential.username,
                "password": credential.password,
            },
        )
    except httpx.HTTPError as exc:
        raise TokenExchangeError(f"GitLab token exchange with {host} failed: {exc}") from exc

    if response.is_error:
        raise TokenExchangeError(
            f"GitLab token exchange with {host} failed: "
            f"HTTP {response.status_code}: {response_reason(response)}"
        )

    try:
        return response.json()["access_token"]
    except (ValueError, KeyError, TypeError) as exc:
        raise TokenExchangeError(
            f"GitLab token exchange with {host} failed: no access_token in response"
        ) from exc


def new_gitlab_service(
    source: Source,
    credential: Credential,
    settings: Optional[Settings] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> GitLabService:
    settings = settings or get_settings()
    location = source.location
    if not location.host:
        raise InvalidSourceError(f"Cannot derive a GitLab host from URL {source.url!r}")
    if not location.project:
        raise InvalidSourceError(f"Cannot derive a GitLab project from URL {source.url!r}")

    if not isinstance(credential, (OAuthToken, UsernamePassword)):
        raise TypeError(f"GitLab API cannot authenticate with {type(credential).__name__}")

    client = build_client(
        f"https://{location.host}/api/v4",
        timeout=settings.http_timeout_seconds,
        transport=transport,
    )

    if isinstance(credential, OAuthToken):
        token = credential.token.decode()
    else:
        try:
            token = exchange_password_for_token(client, location.host, credential)
        except TokenExchangeError:
            client.close()
            raise
    client.headers["Authorization"] = f"Bearer {token}"

    logger.info("GitLab service created for %s@%s", location.project, source.ref)
    return GitLabService(client, location.project, source.ref)


def gitlab_matcher(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Matcher:
    settings = settings or get_settings()
    return Matcher(
        name=FLAVOR,
        predicate=platform_predicate(FLAVOR, settings.gitlab_domains),
        constructor=lambda source, credential: new_gitlab_service(
            source, credential, settings, transport
        ),
    )
