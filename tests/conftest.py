"""Shared test fixtures for the repodetect test suite.

Git-backed tests build throwaway repositories in tmp_path with the git CLI
and are skipped when git is not installed. SSH keys are generated with
cryptography; nothing here touches the network.
"""

import shutil
import subprocess
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

TEST_PASSPHRASE = b"correct horse"


# ---------------------------------------------------------------------------
# SSH keys
# ---------------------------------------------------------------------------

def _generate_private_key(
    passphrase: bytes = b"",
    key_format: serialization.PrivateFormat = serialization.PrivateFormat.TraditionalOpenSSL,
) -> bytes:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    encryption = (
        serialization.BestAvailableEncryption(passphrase)
        if passphrase
        else serialization.NoEncryption()
    )
    return key.private_bytes(serialization.Encoding.PEM, key_format, encryption)


@pytest.fixture(scope="session")
def passphrase() -> bytes:
    return TEST_PASSPHRASE


@pytest.fixture(
    scope="session",
    params=[serialization.PrivateFormat.TraditionalOpenSSL, serialization.PrivateFormat.OpenSSH],
    ids=["pem", "openssh"],
)
def key_format(request) -> serialization.PrivateFormat:
    """Every key-consuming test runs once per private key encoding."""
    return request.param


@pytest.fixture(scope="session")
def private_key_without_passphrase(key_format) -> bytes:
    return _generate_private_key(key_format=key_format)


@pytest.fixture(scope="session")
def private_key_with_passphrase(key_format) -> bytes:
    return _generate_private_key(TEST_PASSPHRASE, key_format)


# ---------------------------------------------------------------------------
# Git repositories
# ---------------------------------------------------------------------------

@pytest.fixture
def require_git() -> None:
    if shutil.which("git") is None:
        pytest.skip("git not installed")


def _git(cwd: Path, *args: str) -> None:
    subprocess.run(
        [
            "git",
            "-c", "user.name=repodetect",
            "-c", "user.email=repodetect@example.com",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=str(cwd),
        check=True,
        capture_output=True,
    )


@pytest.fixture
def make_git_repo(tmp_path, require_git):
    """Factory: create a git repo on `branch` with one commit of `files`.

    Every file gets a small placeholder body; directories are created as
    needed. Returns the repository path.
    """

    def _make(*files: str, branch: str = "master", name: str = "origin-repo") -> Path:
        repo_dir = tmp_path / name
        repo_dir.mkdir()
        _git(repo_dir, "init", "-q")
        _git(repo_dir, "symbolic-ref", "HEAD", f"refs/heads/{branch}")
        for relative in files or ("README",):
            path = repo_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(f"{relative}\n", encoding="utf-8")
        _git(repo_dir, "add", "-A")
        _git(repo_dir, "commit", "-q", "-m", "initial commit")
        return repo_dir

    return _make
