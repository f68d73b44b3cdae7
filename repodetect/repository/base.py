"""Repository service contract and the backend selector.

Backend selection flow:
1. Walk the matcher chain in registration order.
2. The first matcher whose predicate accepts the (source, credential) pair
   builds its service exactly once; the result (service or exception) is
   final and later matchers are never consulted.
3. If no predicate accepts, `resolve` returns None: the source is
   unsupported, which is distinct from a backend that failed.

Platform API matchers are registered before the generic git matcher
because the latter accepts almost any clonable URL.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from repodetect.errors import BackendConstructionError, RepoDetectError
from repodetect.source import Credential, Source

logger = logging.getLogger(__name__)


class RepositoryService(ABC):
    """Read-only view of one repository through one resolved backend.

    Both listing operations are idempotent and may be called any number of
    times. Services holding a network session release it on `close()`.
    """

    name: str = "repository"

    @abstractmethod
    def list_root_files(self) -> list[str]:
        """Names of files and directories at the repository root."""

    @abstractmethod
    def language_usage(self) -> dict[str, float]:
        """Language name → usage weight.

        Backends without usage statistics report every language with the
        same weight.
        """

    def list_languages(self) -> list[str]:
        return list(self.language_usage())

    def close(self) -> None:
        pass

    def __enter__(self) -> "RepositoryService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


Predicate = Callable[[Source, Credential], bool]
Constructor = Callable[[Source, Credential], RepositoryService]


@dataclass(frozen=True)
class Matcher:
    """A (predicate, constructor) pair deciding whether a backend handles a source.

    The predicate must be cheap and side-effect free; all network work and
    credential decoding belong in the constructor.
    """

    name: str
    predicate: Predicate
    constructor: Constructor

    def matches(self, source: Source, credential: Credential) -> bool:
        return self.predicate(source, credential)

    def build(self, source: Source, credential: Credential) -> RepositoryService:
        """Construct the backend, mapping unexpected failures to BackendConstructionError."""
        try:
            return self.constructor(source, credential)
        except RepoDetectError:
            raise
        except Exception as exc:
            raise BackendConstructionError(f"{self.name} creation failed: {exc}") from exc


def resolve(
    source: Source,
    credential: Optional[Credential] = None,
    matchers: Sequence[Matcher] = (),
) -> Optional[RepositoryService]:
    """Pick the first backend willing to handle `source`.

    `credential` defaults to the source's own credential. Returns None when
    no matcher accepts. Construction errors propagate unchanged and are
    never retried against a later matcher.
    """
    if credential is None:
        credential = source.credential

    for matcher in matchers:
        if not matcher.matches(source, credential):
            logger.debug("Matcher %s declined source", matcher.name)
            continue
        logger.info("Matcher %s accepted source (ref=%s)", matcher.name, source.ref)
        return matcher.build(source, credential)

    logger.info("No matcher accepted source (flavor=%s)", source.flavor)
    return None
