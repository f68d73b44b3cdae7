"""Shared httpx plumbing for the hosted-platform API backends.

Each platform service owns a single `httpx.Client` created at construction
and reused for both listing calls. Non-2xx responses and transport errors
become ListingError carrying the platform's own reason text.
"""

import logging
from typing import Any, Callable, Collection, Optional

import httpx

from repodetect.errors import ListingError
from repodetect.repository.base import RepositoryService
from repodetect.source import API_CREDENTIALS, Credential, Source

logger = logging.getLogger(__name__)

USER_AGENT = "repodetect"


def response_reason(response: httpx.Response) -> str:
    """Extract the platform's failure reason from an error response.

    GitHub answers ``{"message": "Not Found"}``, GitLab
    ``{"message": "404 Project Not Found"}`` or OAuth-style
    ``{"error": ..., "error_description": ...}``. Falls back to the body
    text, then the HTTP reason phrase.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error_description", "error"):
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else str(value)

    text = response.text.strip()
    if text:
        return text[:500]
    return response.reason_phrase or f"HTTP {response.status_code}"


def api_get(
    client: httpx.Client,
    path: str,
    *,
    params: Optional[dict[str, Any]] = None,
    what: str,
) -> httpx.Response:
    """GET `path` and return the response, raising ListingError on failure.

    `what` describes the call for the error message, e.g.
    "GitHub file listing for acme/api@main".
    """
    try:
        response = client.get(path, params=params)
    except httpx.HTTPError as exc:
        raise ListingError(f"{what} failed: {exc}") from exc

    if response.is_error:
        raise ListingError(
            f"{what} failed: HTTP {response.status_code}: {response_reason(response)}"
        )

    try:
        response.json()
    except ValueError as exc:
        raise ListingError(f"{what} failed: invalid JSON response: {exc}") from exc
    return response


def entry_names(entries: Any, what: str) -> list[str]:
    """Return the ``name`` of each entry in a directory listing payload."""
    if not isinstance(entries, list):
        raise ListingError(f"{what} failed: expected a list of entries")
    names = []
    for entry in entries:
        name = entry.get("name") if isinstance(entry, dict) else None
        if not isinstance(name, str):
            raise ListingError(f"{what} failed: malformed entry {entry!r}")
        names.append(name)
    return names


def language_weights(payload: Any, what: str) -> dict[str, float]:
    """Convert a ``{language: number}`` payload into float weights."""
    if not isinstance(payload, dict):
        raise ListingError(f"{what} failed: expected a language map")
    weights = {}
    for name, value in payload.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ListingError(f"{what} failed: malformed weight for {name!r}: {value!r}")
        weights[name] = float(value)
    return weights


class PlatformService(RepositoryService):
    """Base class for REST-API backends bound to one project and one ref."""

    platform: str = "platform"

    def __init__(self, client: httpx.Client, project: str, ref: str) -> None:
        self._client = client
        self.project = project
        self.ref = ref

    @property
    def name(self) -> str:
        return self.platform.lower()

    def describe(self, what: str) -> str:
        return f"{self.platform} {what} for {self.project}@{self.ref}"

    def close(self) -> None:
        self._client.close()


def platform_predicate(
    flavor: str,
    domains: Collection[str],
) -> Callable[[Source, Credential], bool]:
    """Build a matcher predicate for a hosted platform.

    Matches when (the URL host is one of `domains`, or the source flavor
    names this platform) and the credential is one the platform's REST API
    accepts. SSH keys never match.
    """
    domains = frozenset(domain.lower() for domain in domains)

    def predicate(source: Source, credential: Credential) -> bool:
        if not isinstance(credential, API_CREDENTIALS):
            return False
        if source.flavor and source.flavor.strip().lower() == flavor:
            return True
        location = source.location
        return location.has_explicit_host and location.host in domains

    return predicate


def build_client(
    base_url: str,
    *,
    timeout: float,
    auth: Optional[httpx.Auth] = None,
    headers: Optional[dict[str, str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    merged_headers = {"User-Agent": USER_AGENT}
    if headers:
        merged_headers.update(headers)
    logger.debug("Creating HTTP client for %s", base_url)
    return httpx.Client(
        base_url=base_url,
        auth=auth,
        headers=merged_headers,
        timeout=timeout,
        transport=transport,
    )
