"""Shared types for the detector module.

A detection run produces exactly one BuildEnvReport, or raises. Reports are
immutable and hold no reference back to the repository service.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BuildToolSignature:
    """A root-level marker file whose presence implies a build tool."""

    tool: str
    marker: str


@dataclass(frozen=True)
class DetectedBuildTool:
    """A build tool found in a repository, with the marker file as evidence."""

    tool: str
    evidence: str


@dataclass(frozen=True)
class BuildEnvReport:
    """Complete detection output for a repository.

    detected_build_tools follows signature-table order; sorted_languages is
    ranked by descending usage weight, ties broken alphabetically.
    """

    detected_build_tools: tuple[DetectedBuildTool, ...] = ()
    sorted_languages: tuple[str, ...] = ()

    @property
    def build_tool_names(self) -> list[str]:
        return [detected.tool for detected in self.detected_build_tools]

    def to_dict(self) -> dict:
        return {
            "detected_build_tools": [
                {"tool": detected.tool, "evidence": detected.evidence}
                for detected in self.detected_build_tools
            ],
            "sorted_languages": list(self.sorted_languages),
        }
