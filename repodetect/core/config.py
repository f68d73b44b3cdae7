from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _normalise_api_url(url: str) -> str:
    """Strip trailing slashes so paths can be joined with a leading "/"."""
    return url.rstrip("/")


class Settings(BaseSettings):
    """Detection settings loaded from environment variables.

    All variables use the ``REPODETECT_`` prefix, e.g.
    ``REPODETECT_GITHUB_DOMAINS='["github.com","github.acme.io"]'``.

    Domain lists decide which URL hosts are claimed by the GitHub and
    GitLab API backends. A source whose host is not listed can still reach
    a platform backend through its ``flavor`` hint.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPODETECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub — api.github.com serves github.com; any other (enterprise)
    # host is reached at https://{host}/api/v3.
    github_api_url: str = "https://api.github.com"
    github_domains: list[str] = ["github.com"]

    # GitLab — every host is reached at https://{host}/api/v4.
    gitlab_domains: list[str] = ["gitlab.com"]

    @field_validator("github_api_url", mode="before")
    @classmethod
    def normalise_github_api_url(cls, v: str) -> str:
        return _normalise_api_url(v)

    @field_validator("github_domains", "gitlab_domains")
    @classmethod
    def lowercase_domains(cls, v: list[str]) -> list[str]:
        return [domain.strip().lower() for domain in v if domain.strip()]

    # HTTP
    http_timeout_seconds: float = 30.0

    # Generic git fallback
    git_executable: str = "git"
    clone_timeout_seconds: int = 300
    clone_depth: int = 1

    # Logging
    debug: bool = False


def get_settings() -> Settings:
    return Settings()
