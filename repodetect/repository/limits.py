"""Resource limits for git subprocesses.

Provides a `preexec_fn`-compatible function that caps address space and
CPU time of the child before exec. The wall-clock timeout passed to
subprocess.run() stays the primary guard.

Platform notes:
  - Linux / macOS: `resource` module is available and rlimits are enforced.
  - Windows: `resource` is unavailable and `apply_resource_limits()` is a
    no-op.

Environment overrides:
  - REPODETECT_RLIMIT_AS_BYTES: integer bytes (0 or negative disables RLIMIT_AS)
  - REPODETECT_RLIMIT_CPU_SECONDS: integer seconds
"""

import logging
import os
import sys
from typing import Optional

logger = logging.getLogger(__name__)

_DEFAULT_MEM_LIMIT_BYTES = 4 * 1024 * 1024 * 1024  # 4 GB
_DEFAULT_CPU_LIMIT_SECONDS = 300

_MEM_LIMIT_ENV = "REPODETECT_RLIMIT_AS_BYTES"
_CPU_LIMIT_ENV = "REPODETECT_RLIMIT_CPU_SECONDS"


def _parse_optional_positive_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    value = int(raw.strip())
    if value <= 0:
        return 0
    return value


def resolve_memory_limit_bytes() -> int:
    override = _parse_optional_positive_int(os.environ.get(_MEM_LIMIT_ENV))
    if override is not None:
        return override
    return _DEFAULT_MEM_LIMIT_BYTES


def resolve_cpu_limit_seconds() -> int:
    raw = os.environ.get(_CPU_LIMIT_ENV)
    if not raw:
        return _DEFAULT_CPU_LIMIT_SECONDS
    parsed = int(raw.strip())
    if parsed <= 0:
        return _DEFAULT_CPU_LIMIT_SECONDS
    return parsed


def apply_resource_limits() -> None:
    """Set per-process resource limits before exec. No-op on Windows.

    Usage:
        subprocess.run(cmd, preexec_fn=apply_resource_limits, ...)
    """
    if sys.platform == "win32":
        return

    try:
        import resource

        mem_limit = resolve_memory_limit_bytes()
        if mem_limit > 0:
            resource.setrlimit(resource.RLIMIT_AS, (mem_limit, resource.RLIM_INFINITY))

        cpu_limit = resolve_cpu_limit_seconds()
        resource.setrlimit(resource.RLIMIT_CPU, (cpu_limit, resource.RLIM_INFINITY))
    except (ImportError, ValueError, OSError) as exc:
        logger.warning("Failed to apply resource limits: %s", exc)
