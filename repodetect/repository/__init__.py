"""Repository backends and the backend selector.

Public API:
    resolve(source, credential, matchers) -> RepositoryService | None
    github_matcher(), gitlab_matcher(), generic_matcher() -> Matcher
"""

from repodetect.repository.base import Matcher, RepositoryService, resolve
from repodetect.repository.generic import GenericGitService, generic_matcher
from repodetect.repository.github import GitHubService, github_matcher
from repodetect.repository.gitlab import GitLabService, gitlab_matcher

__all__ = [
    "GenericGitService",
    "GitHubService",
    "GitLabService",
    "Matcher",
    "RepositoryService",
    "generic_matcher",
    "github_matcher",
    "gitlab_matcher",
    "resolve",
]
