"""Generic git backend — the clone-based fallback.

Used whenever no platform API is usable: private hosts, SSH-only access,
local repositories, or an explicit non-API flavor. Construction decodes the
credential, shallow-clones the ref into a temporary directory and snapshots
the tree listing into memory; the working copy is removed before the
service is returned, so the service holds no filesystem resources.

There are no provider-side language statistics on this path. Languages are
inferred from file extensions anywhere in the tree, all with equal weight.
"""

import logging
import tempfile
from pathlib import Path
from typing import Optional

from repodetect.core.config import Settings, get_settings
from repodetect.repository.base import Matcher, RepositoryService
from repodetect.repository.checkout import authenticated_url, clone_repo, git_environment
from repodetect.repository.extensions import languages_for_paths
from repodetect.source import Credential, Source

logger = logging.getLogger(__name__)

NAME = "git"
CLONABLE_SCHEMES = frozenset({"http", "https", "ssh", "git", "file"})
UNIFORM_WEIGHT = 1.0

_GIT_DIR = ".git"


class GenericGitService(RepositoryService):
    name = NAME

    def __init__(self, root_entries: list[str], file_paths: list[str], ref: str) -> None:
        self._root_entries = list(root_entries)
        self._file_paths = list(file_paths)
        self.ref = ref

    def list_root_files(self) -> list[str]:
        return list(self._root_entries)

    def language_usage(self) -> dict[str, float]:
        return {
            language: UNIFORM_WEIGHT
            for language in sorted(languages_for_paths(self._file_paths))
        }


def snapshot_tree(repo_dir: Path) -> tuple[list[str], list[str]]:
    """Return (root entry names, all file paths) of a working tree, skipping .git."""
    root_entries = sorted(entry.name for entry in repo_dir.iterdir() if entry.name != _GIT_DIR)

    file_paths: list[str] = []
    for path in repo_dir.rglob("*"):
        relative = path.relative_to(repo_dir)
        if relative.parts[0] == _GIT_DIR or not path.is_file():
            continue
        file_paths.append(relative.as_posix())
    file_paths.sort()
    return root_entries, file_paths


def is_clonable(source: Source, credential: Credential) -> bool:
    """Accept any credential for URLs git can clone.

    That is an explicit http/https/ssh/git/file scheme, an scp-style
    ``user@host:path`` address, or an existing local path. The flavor is
    ignored: this backend is the last resort for every hint.
    """
    location = source.location
    if location.scp_like or location.scheme in CLONABLE_SCHEMES:
        return True
    if location.scheme:
        return False
    return Path(source.url).expanduser().exists()


def new_generic_service(
    source: Source,
    credential: Credential,
    settings: Optional[Settings] = None,
) -> GenericGitService:
    settings = settings or get_settings()
    url = source.url
    if not source.location.scheme and not source.location.scp_like:
        url = str(Path(url).expanduser())

    with tempfile.TemporaryDirectory(prefix="repodetect-") as workspace:
        workspace_dir = Path(workspace)
        env = git_environment(credential, workspace_dir)
        repo_dir = clone_repo(
            authenticated_url(url, credential),
            source.ref,
            workspace_dir / "repo",
            env=env,
            depth=settings.clone_depth,
            timeout=settings.clone_timeout_seconds,
            git=settings.git_executable,
        )
        root_entries, file_paths = snapshot_tree(repo_dir)

    logger.info(
        "Generic git service created: %d root entries, %d files",
        len(root_entries),
        len(file_paths),
    )
    return GenericGitService(root_entries, file_paths, source.ref)


def generic_matcher(settings: Optional[Settings] = None) -> Matcher:
    settings = settings or get_settings()
    return Matcher(
        name=NAME,
        predicate=is_clonable,
        constructor=lambda source, credential: new_generic_service(source, credential, settings),
    )
