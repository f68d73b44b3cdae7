"""Tests for the GitHub API backend.

HTTP is served by httpx.MockTransport so tests run without network calls.
"""

import base64

import httpx
import pytest

from repodetect.core.config import Settings
from repodetect.errors import InvalidSourceError, ListingError
from repodetect.repository.github import GitHubService, api_base_url, github_matcher
from repodetect.source import OAuthToken, Source, SshKey, UsernamePassword

REPO_URL = "https://github.com/acme/api"
NOT_FOUND = {"message": "Not Found", "documentation_url": "https://docs.github.com/rest"}


def _settings() -> Settings:
    return Settings(_env_file=None)


def _github_api(files: list[str], languages: dict[str, int], seen: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/repos/acme/api/contents/":
            return httpx.Response(
                200,
                json=[{"name": name, "path": name, "type": "file"} for name in files],
            )
        if request.url.path == "/repos/acme/api/languages":
            return httpx.Response(200, json=languages)
        return httpx.Response(404, json=NOT_FOUND)

    return httpx.MockTransport(handler)


def _not_found_api() -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: httpx.Response(404, json=NOT_FOUND))


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

class TestGitHubListing:
    @pytest.mark.parametrize(
        "credential",
        [UsernamePassword("anonymous", ""), OAuthToken(b"some-token")],
    )
    def test_lists_root_files_and_languages(self, credential):
        seen: list[httpx.Request] = []
        transport = _github_api(["pom.xml", "mvnw"], {"Java": 1200, "Go": 300}, seen)
        source = Source(url=REPO_URL, credential=credential)

        service = github_matcher(_settings(), transport).build(source, credential)

        assert isinstance(service, GitHubService)
        assert sorted(service.list_root_files()) == ["mvnw", "pom.xml"]
        assert sorted(service.list_languages()) == ["Go", "Java"]
        assert service.language_usage() == {"Java": 1200.0, "Go": 300.0}
        assert all(request.url.host == "api.github.com" for request in seen)

    def test_ref_is_passed_as_query_param(self):
        seen: list[httpx.Request] = []
        transport = _github_api(["go.mod"], {}, seen)
        credential = OAuthToken(b"some-token")
        source = Source(url=REPO_URL, credential=credential, ref="feature/x")

        service = github_matcher(_settings(), transport).build(source, credential)
        service.list_root_files()

        assert seen[0].url.params["ref"] == "feature/x"

    def test_oauth_token_is_sent_as_bearer(self):
        seen: list[httpx.Request] = []
        credential = OAuthToken(b"some-token")
        source = Source(url=REPO_URL, credential=credential)

        service = github_matcher(_settings(), _github_api([], {}, seen)).build(source, credential)
        service.list_languages()

        assert seen[0].headers["Authorization"] == "Bearer some-token"
        assert seen[0].headers["Accept"] == "application/vnd.github+json"

    def test_username_password_is_sent_as_basic_auth(self):
        seen: list[httpx.Request] = []
        credential = UsernamePassword("alice", "s3cret")
        source = Source(url=REPO_URL, credential=credential)

        service = github_matcher(_settings(), _github_api([], {}, seen)).build(source, credential)
        service.list_root_files()

        expected = base64.b64encode(b"alice:s3cret").decode()
        assert seen[0].headers["Authorization"] == f"Basic {expected}"

    def test_not_found_preserves_platform_reason(self):
        credential = OAuthToken(b"some-token")
        source = Source(url=REPO_URL, credential=credential, ref="dev")
        service = github_matcher(_settings(), _not_found_api()).build(source, credential)

        with pytest.raises(ListingError, match="Not Found"):
            service.list_root_files()
        with pytest.raises(ListingError, match="Not Found"):
            service.list_languages()

    def test_transport_error_becomes_listing_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        credential = OAuthToken(b"some-token")
        source = Source(url=REPO_URL, credential=credential)
        service = github_matcher(_settings(), httpx.MockTransport(handler)).build(source, credential)

        with pytest.raises(ListingError, match="connection refused"):
            service.list_root_files()

    def test_file_at_root_path_is_a_listing_error(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json={"name": "README", "type": "file"})
        )
        credential = OAuthToken(b"some-token")
        source = Source(url=REPO_URL, credential=credential)
        service = github_matcher(_settings(), transport).build(source, credential)

        with pytest.raises(ListingError, match="not a directory"):
            service.list_root_files()

    def test_languages_payload_that_is_not_a_map_is_a_listing_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
        credential = OAuthToken(b"some-token")
        source = Source(url=REPO_URL, credential=credential)
        service = github_matcher(_settings(), transport).build(source, credential)

        with pytest.raises(ListingError, match="expected a language map"):
            service.language_usage()

    def test_entry_without_name_is_a_listing_error(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json=[{"path": "pom.xml", "type": "file"}])
        )
        credential = OAuthToken(b"some-token")
        source = Source(url=REPO_URL, credential=credential)
        service = github_matcher(_settings(), transport).build(source, credential)

        with pytest.raises(ListingError, match="malformed entry"):
            service.list_root_files()


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

class TestGitHubMatcher:
    def test_does_not_match_ssh_key(self, private_key_without_passphrase):
        credential = SshKey(private_key_without_passphrase)
        source = Source(url="git@github.com:acme/api.git", credential=credential)
        assert not github_matcher(_settings()).matches(source, credential)

    def test_matches_github_host_with_token(self):
        credential = OAuthToken(b"some-token")
        source = Source(url=REPO_URL, credential=credential)
        assert github_matcher(_settings()).matches(source, credential)

    def test_matches_scp_address_with_token(self):
        credential = OAuthToken(b"some-token")
        source = Source(url="git@github.com:acme/api.git", credential=credential)
        assert github_matcher(_settings()).matches(source, credential)

    def test_does_not_match_other_host(self):
        credential = OAuthToken(b"some-token")
        source = Source(url="https://gitlab.com/acme/api", credential=credential)
        assert not github_matcher(_settings()).matches(source, credential)

    def test_flavor_forces_match_on_unknown_host(self):
        credential = OAuthToken(b"some-token")
        source = Source(url="https://git.acme.io/acme/api", credential=credential, flavor="GitHub")
        assert github_matcher(_settings()).matches(source, credential)

    def test_extra_domains_from_settings(self):
        settings = Settings(_env_file=None, github_domains=["github.com", "ghe.acme.io"])
        credential = OAuthToken(b"some-token")
        source = Source(url="https://ghe.acme.io/acme/api", credential=credential)
        assert github_matcher(settings).matches(source, credential)

    def test_malformed_project_path_is_rejected(self):
        credential = OAuthToken(b"some-token")
        source = Source(url="https://github.com/acme", credential=credential)
        with pytest.raises(InvalidSourceError):
            github_matcher(_settings()).build(source, credential)


class TestApiBaseUrl:
    def test_public_github(self):
        assert api_base_url("github.com", _settings()) == "https://api.github.com"

    def test_enterprise_host(self):
        assert api_base_url("git.acme.io", _settings()) == "https://git.acme.io/api/v3"
